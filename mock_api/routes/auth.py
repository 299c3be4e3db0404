"""Auth API routes for the mock commerce API"""

import logging
from urllib.parse import urlencode
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from ..database import MockDatabase
from ..database.users import VERIFY_EMAIL, RESET_PASSWORD
from ..errors import APIError
from ..models.user import (
    User,
    RegisterRequest,
    LoginRequest,
    ProfileUpdateRequest,
    EmailRequest,
    TokenRequest,
    ResetPasswordRequest,
)
from .deps import get_db, current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", status_code=201)
async def register(request: RegisterRequest, db: MockDatabase = Depends(get_db)):
    if db.users.find_by_email(request.email):
        raise APIError(409, "An account with this email already exists")
    if len(request.password) < 6:
        raise APIError(400, "Password must be at least 6 characters")

    user = db.users.create_user(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        phone=request.phone,
    )
    logger.info(f"Registered user {user.id}")
    _send_link(db, user, VERIFY_EMAIL)
    return {"user": user, "token": db.users.issue_token(user)}


@router.post("/login")
async def login(request: LoginRequest, db: MockDatabase = Depends(get_db)):
    user = db.users.authenticate(request.email, request.password)
    if user is None:
        raise APIError(400, "Invalid email or password")
    return {"user": user, "token": db.users.issue_token(user)}


@router.get("/me")
async def me(user: User = Depends(current_user)):
    return {"user": user}


@router.put("/profile")
async def update_profile(
    request: ProfileUpdateRequest,
    user: User = Depends(current_user),
):
    if request.full_name is not None:
        user.full_name = request.full_name
    if request.phone is not None:
        user.phone = request.phone
    if request.address is not None:
        user.address = request.address
    return {"user": user, "message": "Profile updated"}


def _send_link(db: MockDatabase, user: User, purpose: str) -> str:
    """Stand-in for emailing a one-time link; the token is only logged"""
    token = db.users.issue_action_token(user, purpose)
    logger.info(f"{purpose} link for {user.email}: token={token}")
    return token


@router.post("/verify-email")
async def verify_email(request: TokenRequest, db: MockDatabase = Depends(get_db)):
    user = db.users.redeem_action_token(request.token, VERIFY_EMAIL)
    if user is None:
        raise APIError(400, "Invalid or expired verification link")
    user.is_verified = True
    return {"message": "Email verified successfully!"}


@router.post("/resend-verification")
async def resend_verification(request: EmailRequest, db: MockDatabase = Depends(get_db)):
    user = db.users.find_by_email(request.email)
    if user is not None and user.is_verified:
        raise APIError(400, "Email is already verified")
    if user is not None:
        _send_link(db, user, VERIFY_EMAIL)
    return {"message": "If the account exists, a verification email has been sent"}


@router.post("/forgot-password")
async def forgot_password(request: EmailRequest, db: MockDatabase = Depends(get_db)):
    user = db.users.find_by_email(request.email)
    if user is not None:
        _send_link(db, user, RESET_PASSWORD)
    return {"message": "If the account exists, a reset link has been sent"}


@router.post("/reset-password")
async def reset_password(request: ResetPasswordRequest, db: MockDatabase = Depends(get_db)):
    if len(request.newPassword) < 6:
        raise APIError(400, "Password must be at least 6 characters")
    user = db.users.redeem_action_token(request.token, RESET_PASSWORD)
    if user is None:
        raise APIError(400, "Invalid or expired reset link")
    db.users.set_password(user.id, request.newPassword)
    return {"message": "Password reset successfully"}


@router.get("/google/callback")
async def google_callback(
    request: Request,
    email: str = Query(...),
    name: str = Query(""),
    db: MockDatabase = Depends(get_db),
):
    """
    Stand-in for the OAuth provider's callback.

    Signs the user in (creating the account on first visit) and redirects to
    the storefront's success page with a bearer token.
    """
    user = db.users.find_by_email(email) or db.users.create_user(
        email=email,
        password=None,
        full_name=name or email.split("@")[0],
        auth_provider="google",
    )
    token = db.users.issue_token(user)
    return RedirectResponse(f"{request.app.state.oauth_success_url}?{urlencode({'token': token})}")
