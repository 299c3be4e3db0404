# Storefront services

from .commerce_client import CommerceClient, CommerceAPIError, AuthenticationError
from .cart_store import CartStore, CartError
from .auth_store import AuthStore, AuthError
from .checkout import (
    CheckoutOrchestrator,
    CheckoutError,
    CheckoutErrorKind,
    CheckoutPhase,
    CheckoutTotals,
    PaymentHandoff,
    RedirectTarget,
    ValidationResult,
)

__all__ = [
    "CommerceClient",
    "CommerceAPIError",
    "AuthenticationError",
    "CartStore",
    "CartError",
    "AuthStore",
    "AuthError",
    "CheckoutOrchestrator",
    "CheckoutError",
    "CheckoutErrorKind",
    "CheckoutPhase",
    "CheckoutTotals",
    "PaymentHandoff",
    "RedirectTarget",
    "ValidationResult",
]
