from enum import Enum
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional

class Role(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    STAFF = "staff"

class LoginRequest(BaseModel):
    email: str
    password: str

class LoginResponse(BaseModel):
    access: str
    reset_initial_password: bool = False

class TokenClaims(BaseModel):
    user_id: str
    name: str
    email: str
    role: Role
    exp: Optional[float] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, v):
        # Backends emit the id as either a number or a string
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError("user_id must be a string or integer")
        v = str(v).strip()
        if not v:
            raise ValueError("user_id cannot be empty")
        return v

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

class User(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    avatar_url: str
    reset_initial_password: bool = False
    specialty: Optional[str] = None

class UserDetails(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    specialty: Optional[str] = None
