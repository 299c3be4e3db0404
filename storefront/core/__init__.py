# Core modules

from .config import settings, get_settings, Settings
from .tokens import TokenStore, TOKEN_KEY

__all__ = ["settings", "get_settings", "Settings", "TokenStore", "TOKEN_KEY"]
