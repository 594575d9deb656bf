"""
Customer (storefront user) document helpers.
"""
from typing import Any, Dict

# Never leave the database through the admin API
SECRET_FIELDS = [
    "password",
    "emailVerificationToken",
    "emailVerificationExpires",
    "passwordResetToken",
    "passwordResetExpires",
]

SECRET_PROJECTION = {field: 0 for field in SECRET_FIELDS}

# (minimum total spent, tier), highest first
TIERS = [
    (100000, "VIP"),
    (50000, "Gold"),
    (25000, "Silver"),
]


def customer_tier(total_spent: float) -> str:
    for threshold, tier in TIERS:
        if total_spent >= threshold:
            return tier
    return "Bronze"


def to_customer(user: Dict[str, Any]) -> Dict[str, Any]:
    """User document as shown in the customer list, with derived fields."""
    customer = {key: value for key, value in user.items() if key not in SECRET_FIELDS}
    stats = customer.get("stats") or {}
    customer["tier"] = customer_tier(stats.get("totalSpent") or 0)
    customer["fullName"] = f"{customer.get('firstName') or ''} {customer.get('lastName') or ''}".strip()
    return customer
