from pydantic import BaseModel, Field, field_validator
from typing import Optional

class ClinicSummary(BaseModel):
    clinic_id: int
    clinic_name: str

    class Config:
        frozen = True

class ClinicRecord(BaseModel):
    """Clinic as returned by the admin registry endpoint."""
    id: int
    name: str
    location: Optional[str] = None
    contact_number: Optional[str] = None

    def summary(self) -> ClinicSummary:
        return ClinicSummary(clinic_id=self.id, clinic_name=self.name)

class AssignedClinicRecord(BaseModel):
    """Clinic as returned by the doctor/staff "my clinics" endpoints."""
    clinic_id: int
    clinic_name: str

    def summary(self) -> ClinicSummary:
        return ClinicSummary(clinic_id=self.clinic_id, clinic_name=self.clinic_name)

class ClinicCreate(BaseModel):
    name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    contact_number: str = Field(..., min_length=10)

    @field_validator("name", "location")
    @classmethod
    def strip_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("This field is required")
        return v.strip()
