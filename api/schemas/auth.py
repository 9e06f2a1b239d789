"""
Auth Schemas
Pydantic models for signup and login
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from api.schemas.common import CamelModel
from models import UserRole


# ==================== REQUEST SCHEMAS ====================

class SignupRequest(BaseModel):
    """Schema for registering a patient or caretaker"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1, max_length=32)
    role: UserRole


class LoginRequest(BaseModel):
    """Schema for signing in with a role"""
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole


# ==================== RESPONSE SCHEMAS ====================

class SignupResponse(CamelModel):
    message: str
    user_id: int
    caretaker_id: Optional[int] = None


class LoginResponse(CamelModel):
    token: str
    user_id: int
    role: UserRole
