"""
Coupon document rules.
"""
from typing import Any, Dict, Mapping

from ..utils.serializers import as_utc

COUPON_TYPES = ['flat', 'percentage']


class CouponRuleError(ValueError):
    """A coupon violates one of its cross-field rules."""


def check_coupon_rules(coupon: Mapping[str, Any]) -> None:
    """
    Cross-field coupon rules, applied to stored field names.

    Raises:
        CouponRuleError: If minValue >= maxValue or startDate >= expiryDate
    """
    min_value = coupon.get("minValue")
    max_value = coupon.get("maxValue")
    if min_value is not None and max_value is not None and min_value >= max_value:
        raise CouponRuleError("Maximum value must be greater than minimum value")

    start = as_utc(coupon.get("startDate"))
    expiry = as_utc(coupon.get("expiryDate"))
    if start is not None and expiry is not None and start >= expiry:
        raise CouponRuleError("Start date must be before expiry date")


def remaining_uses(coupon: Mapping[str, Any]) -> int:
    return (coupon.get("usageLimit") or 0) - (coupon.get("usedCount") or 0)


def with_remaining_uses(coupon: Mapping[str, Any]) -> Dict[str, Any]:
    """Coupon as returned by the API, with the derived remainingUses."""
    return {**coupon, "remainingUses": remaining_uses(coupon)}
