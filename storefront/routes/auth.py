"""Authentication routes for the storefront"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query

from ..core.session import ShopperSession
from ..models.user import (
    LoginRequest,
    RegisterRequest,
    ProfileUpdateRequest,
    VerifyEmailRequest,
    EmailRequest,
    ResetPasswordRequest,
)
from ..services.auth_store import AuthError
from .deps import get_session

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _auth_error(error: AuthError, default_status: int = 401) -> HTTPException:
    status_code = error.status_code if error.status_code and error.status_code < 500 else default_status
    return HTTPException(status_code=status_code, detail=error.message)


async def _signed_in(session: ShopperSession) -> dict:
    # Shoppers may have a cart left over from an earlier visit
    await session.cart.fetch_cart()
    return {
        "user": session.auth.user.model_dump(),
        "redirect_to": session.auth.landing_path(),
    }


@router.post("/login")
async def login(request: LoginRequest, session: ShopperSession = Depends(get_session)):
    try:
        await session.auth.sign_in(request.email, request.password)
    except AuthError as e:
        raise _auth_error(e)
    return await _signed_in(session)


@router.post("/register")
async def register(request: RegisterRequest, session: ShopperSession = Depends(get_session)):
    try:
        await session.auth.sign_up(
            request.email,
            request.password,
            request.full_name,
            request.phone,
        )
    except AuthError as e:
        raise _auth_error(e, default_status=400)
    return await _signed_in(session)


@router.post("/logout")
async def logout(session: ShopperSession = Depends(get_session)):
    session.auth.sign_out()
    session.cart.reset()
    return {"message": "Signed out"}


@router.get("/me")
async def me(session: ShopperSession = Depends(get_session)):
    """Current user, resolved from the stored token"""
    if not await session.auth.check_auth():
        raise HTTPException(status_code=401, detail="Not authenticated")
    return {"user": session.auth.user.model_dump()}


@router.put("/profile")
async def update_profile(
    request: ProfileUpdateRequest,
    session: ShopperSession = Depends(get_session),
):
    try:
        user = await session.auth.update_profile(**request.model_dump(exclude_none=True))
    except AuthError as e:
        raise _auth_error(e, default_status=400)
    return {"user": user.model_dump()}


@router.get("/google/success")
async def google_success(
    token: Optional[str] = Query(None),
    session: ShopperSession = Depends(get_session),
):
    """
    Landing point of the OAuth provider's redirect.

    The provider passes a bearer token; the profile is fetched with it and
    the shopper is pointed at the admin dashboard or the catalog.
    """
    try:
        await session.auth.complete_oauth(token)
    except AuthError as e:
        raise HTTPException(
            status_code=401,
            detail={"message": e.message, "redirect_to": "/login"},
        )
    return await _signed_in(session)


# ==================== Account recovery ====================

@router.post("/verify-email")
async def verify_email(request: VerifyEmailRequest, session: ShopperSession = Depends(get_session)):
    """Confirm the address from the emailed verification link"""
    try:
        message = await session.auth.verify_email(request.token)
    except AuthError as e:
        raise _auth_error(e, default_status=400)
    return {"message": message, "redirect_to": "/login"}


@router.post("/resend-verification")
async def resend_verification(request: EmailRequest, session: ShopperSession = Depends(get_session)):
    try:
        message = await session.auth.resend_verification(request.email)
    except AuthError as e:
        raise _auth_error(e, default_status=400)
    return {"message": message}


@router.post("/forgot-password")
async def forgot_password(request: EmailRequest, session: ShopperSession = Depends(get_session)):
    try:
        message = await session.auth.forgot_password(request.email)
    except AuthError as e:
        raise _auth_error(e, default_status=400)
    return {"message": message}


@router.post("/reset-password")
async def reset_password(request: ResetPasswordRequest, session: ShopperSession = Depends(get_session)):
    try:
        message = await session.auth.reset_password(
            request.token,
            request.new_password,
            request.confirm_password,
        )
    except AuthError as e:
        raise _auth_error(e, default_status=400)
    return {"message": message, "redirect_to": "/login"}
