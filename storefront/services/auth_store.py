"""Shopper authentication state"""

import logging
import re
from typing import Optional

from pydantic import ValidationError

from ..core.tokens import TokenStore
from ..models.user import User
from .commerce_client import CommerceClient, CommerceAPIError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


class AuthError(Exception):
    """Sign-in or profile operation failed; ``message`` is shopper-facing"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AuthStore:
    """
    Who the shopper is, as far as the storefront knows.

    The token lives in the shopper's ``TokenStore``; the user profile is
    fetched from the API and cached here.
    """

    def __init__(self, client: CommerceClient, token_store: TokenStore):
        self.client = client
        self.token_store = token_store
        self.user: Optional[User] = None
        self.loading = False
        self.initialized = False

    @property
    def token(self) -> Optional[str]:
        return self.token_store.get_token()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.token_store.is_authenticated()

    def _reset(self) -> None:
        self.token_store.clear_token()
        self.user = None
        self.initialized = True

    async def sign_in(self, email: str, password: str) -> User:
        self.loading = True
        try:
            data = await self.client.login(email, password)
            self.user = User.model_validate(data["user"])
        except CommerceAPIError as e:
            raise AuthError(e.message or "Login failed", e.status_code) from e
        finally:
            self.loading = False

        self.initialized = True
        logger.info(f"User {self.user.id} signed in")
        return self.user

    async def sign_up(self, email: str, password: str, full_name: str, phone: str) -> User:
        self.loading = True
        try:
            data = await self.client.register(email, password, full_name, phone)
            self.user = User.model_validate(data["user"])
        except CommerceAPIError as e:
            raise AuthError(e.message or "Registration failed", e.status_code) from e
        finally:
            self.loading = False

        self.initialized = True
        logger.info(f"User {self.user.id} registered")
        return self.user

    def sign_out(self) -> None:
        self.client.logout()
        self._reset()

    async def check_auth(self) -> bool:
        """Resolve the stored token to a user. Never raises; failure signs out."""
        if not self.token_store.get_token():
            self._reset()
            return False

        try:
            self.user = User.model_validate(await self.client.get_current_user())
        except (CommerceAPIError, ValidationError) as e:
            logger.warning(f"Stored token rejected: {e}")
            self._reset()
            return False

        self.initialized = True
        return True

    async def fetch_profile(self) -> Optional[User]:
        """Refresh the cached profile"""
        await self.check_auth()
        return self.user

    async def update_profile(self, **changes) -> User:
        try:
            data = await self.client.update_profile(changes)
            self.user = User.model_validate(data["user"])
        except CommerceAPIError as e:
            raise AuthError(e.message or "Profile update failed", e.status_code) from e
        return self.user

    async def complete_oauth(self, token: Optional[str]) -> User:
        """
        Finish an OAuth sign-in from the provider's success redirect.

        The provider hands back only a token; the profile is looked up with it.
        """
        if not token:
            raise AuthError("No authentication token received")

        self.token_store.set_token(token)
        try:
            self.user = User.model_validate(await self.client.get_current_user())
        except (CommerceAPIError, ValidationError) as e:
            logger.error(f"OAuth sign in failed: {e}")
            self._reset()
            raise AuthError("Authentication failed. Please try again.") from e

        self.initialized = True
        return self.user

    # ==================== Account recovery ====================
    # These work signed out; each returns the message to show the shopper.

    async def verify_email(self, token: Optional[str]) -> str:
        if not token:
            raise AuthError("Verification token is missing")
        try:
            data = await self.client.verify_email(token)
        except CommerceAPIError as e:
            raise AuthError(e.message or "Verification failed", e.status_code) from e

        if self.user is not None:
            self.user = self.user.model_copy(update={"is_verified": True})
        return data.get("message") or "Email verified successfully!"

    async def resend_verification(self, email: str) -> str:
        email = _checked_email(email)
        try:
            await self.client.resend_verification(email)
        except CommerceAPIError as e:
            raise AuthError(e.message or "Failed to resend verification email", e.status_code) from e
        return "Verification email sent! Please check your inbox."

    async def forgot_password(self, email: str) -> str:
        email = _checked_email(email)
        try:
            data = await self.client.forgot_password(email)
        except CommerceAPIError as e:
            raise AuthError(e.message or "Failed to send reset email", e.status_code) from e
        return data.get("message") or "Password reset link sent. Please check your inbox."

    async def reset_password(
        self,
        token: Optional[str],
        new_password: str,
        confirm_password: Optional[str] = None,
    ) -> str:
        """
        Set a new password from an emailed reset link.

        Checked locally before the request: the link token is present, the
        password is long enough, and the confirmation (when given) matches.
        """
        if not token:
            raise AuthError("Invalid or missing reset link")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if confirm_password is not None and confirm_password != new_password:
            raise AuthError("Passwords do not match")

        try:
            await self.client.reset_password(token, new_password)
        except CommerceAPIError as e:
            raise AuthError(e.message or "Failed to reset password", e.status_code) from e
        return "Password reset successfully. Please log in."

    def landing_path(self) -> str:
        """Where a freshly signed-in user goes next"""
        if self.user is not None and self.user.is_admin:
            return "/admin/dashboard"
        return "/products"


def _checked_email(email: str) -> str:
    email = email.strip()
    if not EMAIL_PATTERN.match(email):
        raise AuthError("Please enter a valid email address")
    return email
