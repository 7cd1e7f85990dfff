from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Literal, Optional

Gender = Literal["male", "female"]

class DoctorCreate(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    telephone: str = Field(..., min_length=10)
    role: Literal["doctor"] = "doctor"
    gender: Optional[Gender] = None

class Doctor(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    telephone: Optional[str] = None
    gender: Optional[str] = None
    specialty: Optional[str] = None
    is_active: bool = True

class StaffCreate(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    gender: Gender
    telephone: str = Field(..., min_length=10)
    position: str = Field(..., min_length=1)
    clinic_id: int = Field(..., gt=0)

class StaffMember(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    telephone: Optional[str] = None
    gender: Optional[str] = None
    position: Optional[str] = None
    clinic_id: Optional[int] = None
    clinic_name: Optional[str] = None
    is_active: bool = True

class ChangePasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=8)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

class SpecialtyUpdate(BaseModel):
    specialty: str = Field(..., min_length=2)
