"""
Coupon listing queries.

``build_coupon_filter`` turns the list endpoint's query string into a
MongoDB filter; ``coupon_stats_pipeline`` counts coupons per status in a
single ``$group`` using the same rules.

Status rules at time ``now``:
    active:    isActive, usedCount < usageLimit, started (or no startDate),
               not expired (or no expiryDate)
    expired:   not isActive, or usage exhausted, or expiryDate < now
    scheduled: startDate > now
"""
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

COUPON_STATUSES = ["all", "active", "expired", "scheduled"]

EMPTY_STATS = {
    "totalCoupons": 0,
    "activeCoupons": 0,
    "scheduledCoupons": 0,
    "expiredCoupons": 0,
}


def _status_clauses(status: str, now: datetime) -> List[Dict[str, Any]]:
    if status == "active":
        return [
            {"isActive": True},
            {"$expr": {"$lt": ["$usedCount", "$usageLimit"]}},
            {"$or": [{"startDate": None}, {"startDate": {"$lte": now}}]},
            {"$or": [{"expiryDate": None}, {"expiryDate": {"$gte": now}}]},
        ]
    if status == "expired":
        return [{"$or": [
            {"isActive": False},
            {"$expr": {"$gte": ["$usedCount", "$usageLimit"]}},
            {"expiryDate": {"$lt": now}},
        ]}]
    if status == "scheduled":
        return [{"startDate": {"$gt": now}}]
    return []


def build_coupon_filter(
    search: Optional[str],
    coupon_type: Optional[str],
    status: str,
    now: datetime,
) -> Dict[str, Any]:
    """
    MongoDB filter for the coupon list.

    Args:
        search: Case-insensitive substring of name or code
        coupon_type: flat/percentage; empty or 'all' means any
        status: One of COUPON_STATUSES; unknown values behave like 'all'
        now: Reference time for date rules

    Returns:
        Filter dict; clauses are AND-ed so search and status never collide
    """
    clauses: List[Dict[str, Any]] = []

    if search:
        pattern = re.escape(search)
        clauses.append({"$or": [
            {"name": {"$regex": pattern, "$options": "i"}},
            {"code": {"$regex": pattern, "$options": "i"}},
        ]})

    if coupon_type and coupon_type != "all":
        clauses.append({"type": coupon_type})

    clauses.extend(_status_clauses(status, now))

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def _has(field: str) -> Dict[str, Any]:
    return {"$ne": [{"$ifNull": [field, None]}, None]}


def _missing(field: str) -> Dict[str, Any]:
    return {"$eq": [{"$ifNull": [field, None]}, None]}


def coupon_stats_pipeline(now: datetime) -> List[Dict[str, Any]]:
    """Single-stage aggregation counting coupons per status."""
    active = {"$and": [
        {"$eq": ["$isActive", True]},
        {"$lt": ["$usedCount", "$usageLimit"]},
        {"$or": [_missing("$startDate"), {"$lte": ["$startDate", now]}]},
        {"$or": [_missing("$expiryDate"), {"$gte": ["$expiryDate", now]}]},
    ]}
    scheduled = {"$and": [_has("$startDate"), {"$gt": ["$startDate", now]}]}
    # A missing expiryDate sorts below any date, so guard before comparing
    expired = {"$or": [
        {"$eq": ["$isActive", False]},
        {"$gte": ["$usedCount", "$usageLimit"]},
        {"$and": [_has("$expiryDate"), {"$lt": ["$expiryDate", now]}]},
    ]}

    return [{
        "$group": {
            "_id": None,
            "totalCoupons": {"$sum": 1},
            "activeCoupons": {"$sum": {"$cond": [active, 1, 0]}},
            "scheduledCoupons": {"$sum": {"$cond": [scheduled, 1, 0]}},
            "expiredCoupons": {"$sum": {"$cond": [expired, 1, 0]}},
        }
    }]


def stats_from_result(result: List[Dict[str, Any]]) -> Dict[str, int]:
    """First aggregation row without its _id, or zeros for an empty collection."""
    if not result:
        return dict(EMPTY_STATS)
    return {key: result[0].get(key, 0) for key in EMPTY_STATS}
