"""Bearer token storage for a shopper"""

from typing import Optional


TOKEN_KEY = "auth_token"


class TokenStore:
    """
    Key-value storage holding the shopper's bearer token.

    Mirrors browser local storage: the token lives under a fixed key and
    is the only thing persisted for a shopper. The cart is always
    re-derived from the server.
    """

    def __init__(self, storage: Optional[dict[str, str]] = None):
        self._storage: dict[str, str] = storage if storage is not None else {}

    def get_token(self) -> Optional[str]:
        return self._storage.get(TOKEN_KEY)

    def set_token(self, token: str) -> None:
        self._storage[TOKEN_KEY] = token

    def clear_token(self) -> None:
        self._storage.pop(TOKEN_KEY, None)

    def is_authenticated(self) -> bool:
        return bool(self.get_token())
