"""Request dependencies for the mock commerce API"""

from typing import Optional
from fastapi import Depends, Header, Request

from ..database import MockDatabase
from ..errors import APIError
from ..models.user import User


def get_db(request: Request) -> MockDatabase:
    return request.app.state.db


def current_user(
    authorization: Optional[str] = Header(None),
    db: MockDatabase = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user or reject with 401"""
    if not authorization or not authorization.startswith("Bearer "):
        raise APIError(401, "Unauthorized")

    user = db.users.resolve_token(authorization.removeprefix("Bearer ").strip())
    if user is None:
        raise APIError(401, "Invalid or expired token")
    return user
