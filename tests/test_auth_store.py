"""Tests for shopper authentication state."""

import pytest

from storefront.core.tokens import TokenStore, TOKEN_KEY
from storefront.services.auth_store import AuthStore, AuthError


@pytest.fixture
def anonymous_auth(commerce_client, token_store):
    return AuthStore(commerce_client, token_store)


class TestSignIn:

    async def test_sign_in_stores_token_and_user(self, anonymous_auth, token_store):
        user = await anonymous_auth.sign_in("demo@example.com", "password123")

        assert user.email == "demo@example.com"
        assert anonymous_auth.is_authenticated
        assert token_store.get_token()
        assert anonymous_auth.initialized
        assert anonymous_auth.loading is False

    async def test_wrong_password(self, anonymous_auth, token_store):
        with pytest.raises(AuthError) as exc_info:
            await anonymous_auth.sign_in("demo@example.com", "wrong")

        assert exc_info.value.message == "Invalid email or password"
        assert exc_info.value.status_code == 400
        assert not anonymous_auth.is_authenticated
        assert token_store.get_token() is None
        assert anonymous_auth.loading is False

    async def test_sign_up(self, anonymous_auth, mock_db):
        user = await anonymous_auth.sign_up(
            "new@example.com", "secret123", "New Shopper", "08011112222"
        )

        assert user.full_name == "New Shopper"
        assert anonymous_auth.is_authenticated
        assert mock_db.users.find_by_email("new@example.com") is not None

    async def test_sign_up_duplicate_email(self, anonymous_auth):
        with pytest.raises(AuthError, match="already exists"):
            await anonymous_auth.sign_up("demo@example.com", "secret123", "Demo", "08011112222")

    async def test_sign_out_clears_token_and_user(self, auth_store, token_store):
        assert auth_store.is_authenticated

        auth_store.sign_out()

        assert auth_store.user is None
        assert token_store.get_token() is None
        assert not auth_store.is_authenticated


class TestCheckAuth:

    async def test_no_token(self, anonymous_auth, mock_api):
        assert await anonymous_auth.check_auth() is False
        assert anonymous_auth.user is None
        assert anonymous_auth.initialized

    async def test_valid_token(self, anonymous_auth, token_store, demo_token):
        token_store.set_token(demo_token)

        assert await anonymous_auth.check_auth() is True
        assert anonymous_auth.user.email == "demo@example.com"
        assert anonymous_auth.token == demo_token

    async def test_rejected_token_is_cleared(self, anonymous_auth, token_store):
        token_store.set_token("revoked")

        assert await anonymous_auth.check_auth() is False
        assert token_store.get_token() is None
        assert not anonymous_auth.is_authenticated

    async def test_token_without_user_is_not_authenticated(self, anonymous_auth, token_store, demo_token):
        token_store.set_token(demo_token)
        assert not anonymous_auth.is_authenticated


class TestProfile:

    async def test_update_profile(self, auth_store):
        user = await auth_store.update_profile(full_name="Renamed Shopper")

        assert user.full_name == "Renamed Shopper"
        assert auth_store.user.full_name == "Renamed Shopper"

    async def test_update_profile_signed_out(self, anonymous_auth):
        with pytest.raises(AuthError) as exc_info:
            await anonymous_auth.update_profile(full_name="Nobody")

        assert exc_info.value.status_code == 401

    async def test_fetch_profile(self, auth_store):
        user = await auth_store.fetch_profile()
        assert user.email == "demo@example.com"


class TestOAuth:

    async def test_admin_lands_on_dashboard(self, anonymous_auth, mock_db):
        admin = mock_db.users.find_by_email("admin@example.com")
        token = mock_db.users.issue_token(admin)

        user = await anonymous_auth.complete_oauth(token)

        assert user.is_admin
        assert anonymous_auth.landing_path() == "/admin/dashboard"

    async def test_shopper_lands_on_catalog(self, anonymous_auth, demo_token):
        await anonymous_auth.complete_oauth(demo_token)
        assert anonymous_auth.landing_path() == "/products"

    async def test_missing_token(self, anonymous_auth):
        with pytest.raises(AuthError, match="No authentication token received"):
            await anonymous_auth.complete_oauth(None)

    async def test_rejected_token(self, anonymous_auth, token_store):
        with pytest.raises(AuthError, match="Authentication failed"):
            await anonymous_auth.complete_oauth("bogus")

        assert token_store.get_token() is None
        assert anonymous_auth.user is None


class TestTokenStore:

    def test_token_lives_under_fixed_key(self):
        storage = {}
        tokens = TokenStore(storage)

        tokens.set_token("abc")

        assert storage == {TOKEN_KEY: "abc"}
        assert TOKEN_KEY == "auth_token"
        assert tokens.is_authenticated()

    def test_clear_token(self):
        tokens = TokenStore({TOKEN_KEY: "abc"})

        tokens.clear_token()
        tokens.clear_token()

        assert tokens.get_token() is None
        assert not tokens.is_authenticated()


def emailed_token(mock_db, email, purpose):
    """Latest one-time link token the mock API issued for ``email``"""
    user = mock_db.users.find_by_email(email)
    tokens = [
        token for token, (kind, user_id) in mock_db.users.action_tokens.items()
        if kind == purpose and user_id == user.id
    ]
    return tokens[-1]


class TestAccountRecovery:

    async def test_verify_email_from_link(self, anonymous_auth, mock_db):
        await anonymous_auth.sign_up("new@example.com", "secret123", "New Shopper", "08011112222")
        token = emailed_token(mock_db, "new@example.com", "verify-email")

        message = await anonymous_auth.verify_email(token)

        assert message == "Email verified successfully!"
        assert anonymous_auth.user.is_verified
        assert mock_db.users.find_by_email("new@example.com").is_verified

    async def test_verification_link_works_once(self, anonymous_auth, mock_db):
        await anonymous_auth.sign_up("new@example.com", "secret123", "New Shopper", "08011112222")
        token = emailed_token(mock_db, "new@example.com", "verify-email")
        await anonymous_auth.verify_email(token)

        with pytest.raises(AuthError) as exc_info:
            await anonymous_auth.verify_email(token)

        assert exc_info.value.message == "Invalid or expired verification link"
        assert exc_info.value.status_code == 400

    async def test_verify_email_without_token(self, anonymous_auth):
        with pytest.raises(AuthError, match="Verification token is missing"):
            await anonymous_auth.verify_email(None)

    async def test_resend_verification(self, anonymous_auth, mock_db):
        message = await anonymous_auth.resend_verification(" demo@example.com ")

        assert message == "Verification email sent! Please check your inbox."
        assert emailed_token(mock_db, "demo@example.com", "verify-email")

    async def test_invalid_email_rejected_locally(self, anonymous_auth, mock_db):
        with pytest.raises(AuthError, match="Please enter a valid email address"):
            await anonymous_auth.forgot_password("demo@example")

        assert mock_db.users.action_tokens == {}

    async def test_forgot_then_reset_password(self, anonymous_auth, mock_db):
        await anonymous_auth.forgot_password("demo@example.com")
        token = emailed_token(mock_db, "demo@example.com", "reset-password")

        message = await anonymous_auth.reset_password(token, "brand-new-pass", "brand-new-pass")

        assert message == "Password reset successfully. Please log in."
        user = await anonymous_auth.sign_in("demo@example.com", "brand-new-pass")
        assert user.email == "demo@example.com"

    async def test_reset_link_works_once(self, anonymous_auth, mock_db):
        await anonymous_auth.forgot_password("demo@example.com")
        token = emailed_token(mock_db, "demo@example.com", "reset-password")
        await anonymous_auth.reset_password(token, "brand-new-pass")

        with pytest.raises(AuthError, match="Invalid or expired reset link"):
            await anonymous_auth.reset_password(token, "another-pass")

    @pytest.mark.parametrize("token, password, confirm, message", [
        (None, "brand-new-pass", None, "Invalid or missing reset link"),
        ("tok", "short", None, "Password must be at least 8 characters long"),
        ("tok", "brand-new-pass", "brand-new-typo", "Passwords do not match"),
    ])
    async def test_reset_checked_before_request(self, anonymous_auth, mock_db, token, password, confirm, message):
        with pytest.raises(AuthError) as exc_info:
            await anonymous_auth.reset_password(token, password, confirm)

        assert exc_info.value.message == message
        assert exc_info.value.status_code is None
