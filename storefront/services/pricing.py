"""
Delivery pricing

Delivery fees are tiered by destination state: Lagos (where orders ship
from), the nearby South-West states, and everywhere else. Lookups are pure
so totals can be recomputed on every change of the address form without
touching the network.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


NIGERIAN_STATES = [
    "Abia", "Adamawa", "Akwa Ibom", "Anambra", "Bauchi", "Bayelsa", "Benue",
    "Borno", "Cross River", "Delta", "Ebonyi", "Edo", "Ekiti", "Enugu",
    "Gombe", "Imo", "Jigawa", "Kaduna", "Kano", "Katsina", "Kebbi", "Kogi",
    "Kwara", "Lagos", "Nasarawa", "Niger", "Ogun", "Ondo", "Osun", "Oyo",
    "Plateau", "Rivers", "Sokoto", "Taraba", "Yobe", "Zamfara", "FCT",
]

HOME_STATE = "lagos"
NEARBY_STATES = frozenset({"ogun", "oyo", "osun", "ondo", "ekiti", "edo"})

HOME_DELIVERY_FEE = 10000.0
NEARBY_DELIVERY_FEE = 23000.0
STANDARD_DELIVERY_FEE = 27000.0


class DeliveryTier(str, Enum):
    HOME = "home"
    NEARBY = "nearby"
    STANDARD = "standard"


TIER_FEES = {
    DeliveryTier.HOME: HOME_DELIVERY_FEE,
    DeliveryTier.NEARBY: NEARBY_DELIVERY_FEE,
    DeliveryTier.STANDARD: STANDARD_DELIVERY_FEE,
}

TIER_LABELS = {
    DeliveryTier.HOME: "Lagos Delivery",
    DeliveryTier.NEARBY: "Nearby States Delivery",
    DeliveryTier.STANDARD: "Standard Delivery",
}


@dataclass(frozen=True)
class DeliveryFeeInfo:
    """Fee and display label for a destination"""
    fee: float
    label: str
    tier: DeliveryTier


def _normalize(state: Optional[str]) -> str:
    return (state or "").strip().lower()


def delivery_tier(state: Optional[str]) -> DeliveryTier:
    """Tier for a destination state; unknown and empty input are standard"""
    normalized = _normalize(state)
    if normalized == HOME_STATE:
        return DeliveryTier.HOME
    if normalized in NEARBY_STATES:
        return DeliveryTier.NEARBY
    return DeliveryTier.STANDARD


def calculate_delivery_fee(state: Optional[str]) -> float:
    """Delivery fee for a destination state. Never raises."""
    return TIER_FEES[delivery_tier(state)]


def get_delivery_fee_info(state: Optional[str]) -> DeliveryFeeInfo:
    tier = delivery_tier(state)
    return DeliveryFeeInfo(fee=TIER_FEES[tier], label=TIER_LABELS[tier], tier=tier)


def validate_nigerian_state(state: Optional[str]) -> bool:
    normalized = _normalize(state)
    return any(s.lower() == normalized for s in NIGERIAN_STATES)


def format_currency(amount: float) -> str:
    """Format an amount in naira, e.g. ``₦10,000.00``"""
    sign = "-" if amount < 0 else ""
    return f"{sign}₦{abs(amount):,.2f}"


def format_delivery_fee(state: Optional[str]) -> str:
    return format_currency(calculate_delivery_fee(state))
