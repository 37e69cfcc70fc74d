from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from task_portal.utils.security import MAX_PASSWORD_BYTES

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)

    @field_validator('username')
    @classmethod
    def username_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Username cannot be empty')
        return v.strip()

    @field_validator('password')
    @classmethod
    def password_fits_bcrypt(cls, v):
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f'Password cannot be longer than {MAX_PASSWORD_BYTES} bytes')
        return v

class UserLogin(BaseModel):
    username: str
    password: str

class PromoteRequest(BaseModel):
    employee_id: str = Field(..., alias="employeeId", min_length=1)

    model_config = {
        "populate_by_name": True
    }

class UserOut(BaseModel):
    id: int
    username: str
    role: str
    employee_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

class EmployeeOut(BaseModel):
    id: int
    username: str
    employee_id: Optional[str] = None

    model_config = {
        "from_attributes": True
    }

class SignupResponse(BaseModel):
    message: str
    employee_id: str

class LoginResponse(BaseModel):
    message: str
    role: str
    user: UserOut

class PromoteResponse(BaseModel):
    message: str
    user: UserOut
