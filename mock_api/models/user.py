"""User models for the mock commerce API"""

from pydantic import BaseModel
from typing import Optional


class UserAddress(BaseModel):
    state: str = ""
    city: str = ""
    address_line: str = ""


class User(BaseModel):
    id: str
    email: str
    full_name: str
    phone: str
    is_admin: bool = False
    is_verified: bool = False
    auth_provider: str = "email"
    address: Optional[UserAddress] = None
    created_at: str


class RegisterRequest(BaseModel):
    email: str
    password: str
    full_name: str
    phone: str


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[UserAddress] = None


class EmailRequest(BaseModel):
    email: str


class TokenRequest(BaseModel):
    token: str


class ResetPasswordRequest(BaseModel):
    token: str
    newPassword: str
