from .auth import Role, LoginRequest, LoginResponse, TokenClaims, User, UserDetails
from .clinic import ClinicSummary, ClinicRecord, AssignedClinicRecord, ClinicCreate
from .user import (
    DoctorCreate,
    Doctor,
    StaffCreate,
    StaffMember,
    ChangePasswordRequest,
    SpecialtyUpdate,
)
from .patient import (
    PatientCreate,
    Patient,
    MedicalCaseCreate,
    MedicalCase,
    MedicalRecord,
    TreatmentSchedule,
    ComplicationUpdate,
    Complication,
)

__all__ = [
    "Role",
    "LoginRequest",
    "LoginResponse",
    "TokenClaims",
    "User",
    "UserDetails",
    "ClinicSummary",
    "ClinicRecord",
    "AssignedClinicRecord",
    "ClinicCreate",
    "DoctorCreate",
    "Doctor",
    "StaffCreate",
    "StaffMember",
    "ChangePasswordRequest",
    "SpecialtyUpdate",
    "PatientCreate",
    "Patient",
    "MedicalCaseCreate",
    "MedicalCase",
    "MedicalRecord",
    "TreatmentSchedule",
    "ComplicationUpdate",
    "Complication",
]
