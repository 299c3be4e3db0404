"""User and token storage for the mock commerce API"""

import hashlib
import secrets
import uuid
from datetime import datetime
from typing import Optional

from ..models.user import User

VERIFY_EMAIL = "verify-email"
RESET_PASSWORD = "reset-password"


def _hash_password(password: str) -> str:
    return hashlib.sha256(password.encode()).hexdigest()


class UserDatabase:
    """In-memory users and issued bearer tokens"""

    def __init__(self):
        self.users: dict[str, User] = {}
        self.passwords: dict[str, str] = {}  # user id -> password hash
        self.tokens: dict[str, str] = {}  # token -> user id
        self.action_tokens: dict[str, tuple[str, str]] = {}  # token -> (purpose, user id)

    def find_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(
        self,
        email: str,
        password: Optional[str],
        full_name: str,
        phone: str = "",
        is_admin: bool = False,
        auth_provider: str = "email",
    ) -> User:
        user = User(
            id=str(uuid.uuid4()),
            email=email.strip().lower(),
            full_name=full_name,
            phone=phone,
            is_admin=is_admin,
            is_verified=auth_provider != "email",
            auth_provider=auth_provider,
            created_at=datetime.utcnow().isoformat(),
        )
        self.users[user.id] = user
        if password is not None:
            self.passwords[user.id] = _hash_password(password)
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.find_by_email(email)
        if user is None:
            return None
        if self.passwords.get(user.id) != _hash_password(password):
            return None
        return user

    def issue_token(self, user: User) -> str:
        token = secrets.token_urlsafe(24)
        self.tokens[token] = user.id
        return token

    def resolve_token(self, token: str) -> Optional[User]:
        user_id = self.tokens.get(token)
        return self.users.get(user_id) if user_id else None

    def set_password(self, user_id: str, password: str) -> None:
        self.passwords[user_id] = _hash_password(password)

    def issue_action_token(self, user: User, purpose: str) -> str:
        """One-time token for an emailed link (verification or password reset)"""
        token = secrets.token_urlsafe(24)
        self.action_tokens[token] = (purpose, user.id)
        return token

    def redeem_action_token(self, token: str, purpose: str) -> Optional[User]:
        entry = self.action_tokens.get(token)
        if entry is None or entry[0] != purpose:
            return None
        del self.action_tokens[token]
        return self.users.get(entry[1])
