"""
Checkout Orchestrator

Validates the delivery form, prices the order and hands the shopper off to
the payment gateway:

1. Preconditions: a non-empty cart and a signed-in user
2. Field validation (every problem reported at once)
3. Order creation on the commerce API
4. Cart cleared, authorization URL returned for the redirect
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..models.checkout import (
    CheckoutDraft,
    CreateOrderRequest,
    OrderAddress,
    OrderItemRequest,
)
from .auth_store import AuthStore
from .cart_store import CartStore
from .commerce_client import CommerceClient, CommerceAPIError
from .pricing import calculate_delivery_fee

logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"^(\+234|0)[789][0-9]{9}$")
MIN_ADDRESS_LENGTH = 10
STOCK_ERROR_CODES = frozenset({"INSUFFICIENT_STOCK", "OUT_OF_STOCK"})


class CheckoutPhase(str, Enum):
    """Where the current checkout attempt is"""
    IDLE = "idle"
    VALIDATING = "validating"
    INVALID = "invalid"
    SUBMITTING = "submitting"
    FAILED = "failed"
    REDIRECTING = "redirecting"


class CheckoutErrorKind(str, Enum):
    EMPTY_CART = "EMPTY_CART"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INVALID_DRAFT = "INVALID_DRAFT"
    STOCK_CONFLICT = "STOCK_CONFLICT"
    ORDER_FAILED = "ORDER_FAILED"


class RedirectTarget(str, Enum):
    """Page the shopper should be sent to after a failed attempt"""
    LOGIN = "/login?redirect=/checkout"
    CART = "/cart"


@dataclass
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class CheckoutTotals:
    subtotal: float
    delivery_fee: float
    total: float


@dataclass(frozen=True)
class PaymentHandoff:
    """Where to send the shopper to pay"""
    authorization_url: str
    reference: Optional[str] = None
    order_id: Optional[str] = None


class CheckoutError(Exception):
    """A checkout attempt failed; branch on ``kind``"""

    def __init__(
        self,
        kind: CheckoutErrorKind,
        message: str,
        errors: Optional[dict[str, str]] = None,
        redirect_to: Optional[RedirectTarget] = None,
    ):
        self.kind = kind
        self.message = message
        self.errors = errors or {}
        self.redirect_to = redirect_to
        super().__init__(message)


def is_stock_conflict(error: CommerceAPIError) -> bool:
    """Whether a failed order was rejected for lack of inventory"""
    if error.code in STOCK_ERROR_CODES:
        return True
    # Older API versions only say so in the message
    return "stock" in (error.message or "").lower()


def validate(draft: CheckoutDraft) -> ValidationResult:
    """Check every required field of the delivery form"""
    errors: dict[str, str] = {}

    if not draft.state.strip():
        errors["state"] = "State is required"

    if not draft.city.strip():
        errors["city"] = "City is required"

    address = draft.address.strip()
    if not address:
        errors["address"] = "Delivery address is required"
    elif len(address) < MIN_ADDRESS_LENGTH:
        errors["address"] = "Please provide a complete address"

    phone = re.sub(r"\s", "", draft.phone)
    if not phone:
        errors["phone"] = "Phone number is required"
    elif not PHONE_PATTERN.match(phone):
        errors["phone"] = "Enter a valid Nigerian phone number"

    return ValidationResult(errors=errors)


def compute_total(subtotal: float, state: Optional[str]) -> CheckoutTotals:
    delivery_fee = calculate_delivery_fee(state)
    return CheckoutTotals(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        total=subtotal + delivery_fee,
    )


class CheckoutOrchestrator:
    """Runs checkout attempts for one shopper"""

    def __init__(
        self,
        client: CommerceClient,
        cart: CartStore,
        auth: AuthStore,
        callback_url: Optional[str] = None,
    ):
        self.client = client
        self.cart = cart
        self.auth = auth
        self.callback_url = callback_url
        self.phase = CheckoutPhase.IDLE

    def validate(self, draft: CheckoutDraft) -> ValidationResult:
        return validate(draft)

    def compute_total(self, subtotal: float, state: Optional[str]) -> CheckoutTotals:
        return compute_total(subtotal, state)

    def quote(self, state: Optional[str]) -> CheckoutTotals:
        """Totals for the current cart delivered to ``state``"""
        return compute_total(self.cart.get_cart_total(), state)

    def _fail(self, error: CheckoutError) -> CheckoutError:
        self.phase = CheckoutPhase.FAILED
        return error

    async def submit(self, draft: CheckoutDraft) -> PaymentHandoff:
        """
        Place the order and return the payment redirect.

        Raises:
            CheckoutError: precondition, validation or order failure
        """
        items = self.cart.items
        if not items:
            raise self._fail(CheckoutError(
                CheckoutErrorKind.EMPTY_CART,
                "Your cart is empty",
                redirect_to=RedirectTarget.CART,
            ))

        user = self.auth.user
        if not self.auth.is_authenticated or user is None:
            raise self._fail(CheckoutError(
                CheckoutErrorKind.NOT_AUTHENTICATED,
                "Please log in to continue",
                redirect_to=RedirectTarget.LOGIN,
            ))

        self.phase = CheckoutPhase.VALIDATING
        result = self.validate(draft)
        if not result.is_valid:
            self.phase = CheckoutPhase.INVALID
            raise CheckoutError(
                CheckoutErrorKind.INVALID_DRAFT,
                "Please correct the highlighted fields",
                errors=result.errors,
            )

        totals = self.quote(draft.state)
        discount_code = draft.discount_code.strip().upper()
        order = CreateOrderRequest(
            address=OrderAddress(street=draft.address.strip()),
            phone=re.sub(r"\s", "", draft.phone),
            email=user.email,
            state=draft.state.strip(),
            city=draft.city.strip(),
            total=totals.total,
            delivery_fee=totals.delivery_fee,
            items=[
                OrderItemRequest(product_id=item.product_id, quantity=item.quantity)
                for item in items
            ],
            discount_code=discount_code or None,
            callback_url=self.callback_url,
        )

        self.phase = CheckoutPhase.SUBMITTING
        try:
            response = await self.client.create_order(
                order.model_dump(mode="json", exclude_none=True)
            )
        except CommerceAPIError as e:
            message = e.message or "Failed to process order. Please try again."
            logger.error(f"Checkout error: {message}")
            if is_stock_conflict(e):
                # The cart is stale against inventory; retrying won't help
                raise self._fail(CheckoutError(
                    CheckoutErrorKind.STOCK_CONFLICT,
                    message,
                    redirect_to=RedirectTarget.CART,
                )) from e
            raise self._fail(CheckoutError(CheckoutErrorKind.ORDER_FAILED, message)) from e

        payment = response.get("payment") or {}
        authorization_url = payment.get("authorization_url")
        if not authorization_url:
            raise self._fail(CheckoutError(
                CheckoutErrorKind.ORDER_FAILED,
                "Payment could not be started. Please try again.",
            ))

        # A placed order supersedes the cart
        await self.cart.clear_cart()

        self.phase = CheckoutPhase.REDIRECTING
        order_id = (response.get("order") or {}).get("id")
        logger.info(f"Order {order_id} created: {totals.total} - redirecting to payment")
        return PaymentHandoff(
            authorization_url=authorization_url,
            reference=payment.get("reference"),
            order_id=order_id,
        )
