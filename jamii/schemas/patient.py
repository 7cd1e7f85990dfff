from datetime import date, datetime
from pydantic import BaseModel, EmailStr, Field
from typing import List, Literal, Optional

class PatientCreate(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    gender: Literal["male", "female"]
    telephone: str = Field(..., min_length=10)
    clinic_id: int = Field(..., gt=0)

class Patient(BaseModel):
    id: int
    email: Optional[str] = None
    first_name: str
    last_name: str
    gender: Optional[str] = None
    telephone: Optional[str] = None
    clinic_id: Optional[int] = None
    clinic_name: Optional[str] = None

class MedicalCaseCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    case_date: date

class MedicalRecord(BaseModel):
    id: int
    record_type: str
    note: Optional[str] = None
    file: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

class TreatmentSchedule(BaseModel):
    id: int
    title: Optional[str] = None
    scheduled_for: Optional[datetime] = None
    notes: Optional[str] = None
    is_completed: bool = False

class MedicalCase(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    clinic_name: Optional[str] = None
    patient_name: Optional[str] = None
    created_by: Optional[str] = None
    case_date: Optional[date] = None
    created_at: Optional[datetime] = None
    is_active: bool = True
    records: List[MedicalRecord] = []
    schedules: List[TreatmentSchedule] = []

class ComplicationUpdate(BaseModel):
    complication_occurred: bool = False
    description: Optional[str] = None
    revision_needed: bool = False
    revision_description: Optional[str] = None

class Complication(ComplicationUpdate):
    id: Optional[int] = None
    medical_case: Optional[int] = None
