"""Shopper sessions: one isolated set of stores per visitor"""

import uuid
from datetime import datetime
from typing import Optional
from dataclasses import dataclass

from .tokens import TokenStore
from ..services.commerce_client import CommerceClient
from ..services.auth_store import AuthStore
from ..services.cart_store import CartStore
from ..services.checkout import CheckoutOrchestrator


@dataclass
class ShopperSession:
    """Everything the storefront knows about one visitor"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    tokens: TokenStore
    client: CommerceClient
    auth: AuthStore
    cart: CartStore
    checkout: CheckoutOrchestrator

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class SessionManager:
    """Manages shopper sessions"""

    def __init__(
        self,
        commerce_client: CommerceClient,
        payment_callback_url: Optional[str] = None,
        max_age_hours: int = 24,
    ):
        self.commerce_client = commerce_client
        self.payment_callback_url = payment_callback_url
        self.max_age_hours = max_age_hours
        self.sessions: dict[str, ShopperSession] = {}

    def create_session(self) -> ShopperSession:
        """Create a new session with its own token, cart and checkout state"""
        self.cleanup_old_sessions(self.max_age_hours)
        now = datetime.utcnow()
        tokens = TokenStore()
        client = self.commerce_client.bind(tokens)
        auth = AuthStore(client, tokens)
        cart = CartStore(client)
        session = ShopperSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            tokens=tokens,
            client=client,
            auth=auth,
            cart=cart,
            checkout=CheckoutOrchestrator(
                client,
                cart,
                auth,
                callback_url=self.payment_callback_url,
            ),
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[ShopperSession]:
        """Get session by ID"""
        return self.sessions.get(session_id)

    def get_or_create_session(self, session_id: Optional[str] = None) -> ShopperSession:
        """Get existing session or create new one"""
        if session_id and session_id in self.sessions:
            session = self.sessions[session_id]
            session.touch()
            return session
        return self.create_session()

    def delete_session(self, session_id: str) -> bool:
        """Delete a session"""
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False

    def cleanup_old_sessions(self, max_age_hours: int) -> int:
        """Remove sessions idle for longer than max_age_hours"""
        now = datetime.utcnow()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            del self.sessions[sid]
        return len(old_sessions)
