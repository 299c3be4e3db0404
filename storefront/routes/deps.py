"""Request dependencies shared by the storefront routes"""

from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, Response

from ..core.session import SessionManager, ShopperSession
from ..services.commerce_client import CommerceAPIError

SESSION_HEADER = "X-Session-ID"


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_session(
    response: Response,
    x_session_id: Optional[str] = Header(None),
    manager: SessionManager = Depends(get_session_manager),
) -> ShopperSession:
    """Resolve the caller's session from the header, creating one if needed"""
    session = manager.get_or_create_session(x_session_id)
    response.headers[SESSION_HEADER] = session.session_id
    return session


def upstream_status(status_code: Optional[int]) -> int:
    """Status to report for a failed commerce API call"""
    if status_code is not None and 400 <= status_code < 500:
        return status_code
    return 502


def api_error(error: CommerceAPIError, fallback: str) -> HTTPException:
    return HTTPException(
        status_code=upstream_status(error.status_code),
        detail=error.message or fallback,
    )
