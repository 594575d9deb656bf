"""
Dashboard overview figures.
"""
from typing import Any, Dict, Iterable, List

from ..models.user import to_customer

TOP_CUSTOMERS = 5
RECENT_ORDERS = 5

REVENUE_PIPELINE = [
    {"$group": {"_id": None, "totalRevenue": {"$sum": "$orderSummary.total"}}},
]

# Order count per shipping email, most orders first
ORDERS_BY_EMAIL_PIPELINE = [
    {"$match": {"shippingAddress.email": {"$nin": [None, ""]}}},
    {"$group": {"_id": "$shippingAddress.email", "orderCount": {"$sum": 1}}},
    {"$sort": {"orderCount": -1}},
]


def top_customers(
    order_counts: Iterable[Dict[str, Any]],
    users: Iterable[Dict[str, Any]],
    limit: int = TOP_CUSTOMERS,
) -> List[Dict[str, Any]]:
    """
    Registered customers with the most orders.

    Args:
        order_counts: ``{_id: email, orderCount}`` rows
        users: User documents to match the emails against

    Returns:
        Customers with ``name`` and ``orderCount``, most orders first.
        Emails without a registered user are left out.
    """
    by_email = {user.get("email"): user for user in users if user.get("email")}

    ranked = []
    for row in order_counts:
        user = by_email.get(row["_id"])
        if user is None:
            continue
        customer = to_customer(user)
        customer["name"] = customer["fullName"] or "Unknown Customer"
        customer["orderCount"] = row["orderCount"]
        ranked.append(customer)

    ranked.sort(key=lambda customer: customer["orderCount"], reverse=True)
    return ranked[:limit]
