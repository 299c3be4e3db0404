"""User models for the storefront"""

from pydantic import BaseModel
from typing import Optional


class UserAddress(BaseModel):
    """Saved delivery address on a user profile"""
    state: str = ""
    city: str = ""
    address_line: str = ""


class User(BaseModel):
    """Authenticated shopper"""
    id: str
    email: str
    full_name: str = ""
    phone: str = ""
    is_admin: bool = False
    is_verified: bool = False
    auth_provider: str = "email"
    address: Optional[UserAddress] = None
    created_at: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str
    full_name: str
    phone: str


class ProfileUpdateRequest(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[UserAddress] = None


class VerifyEmailRequest(BaseModel):
    token: Optional[str] = None


class EmailRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    """New password from the emailed reset link"""
    token: Optional[str] = None
    new_password: str
    confirm_password: Optional[str] = None
