"""
API routers, one per resource, mounted under the API prefix.
"""
from . import analytics, coupons, customers, orders, policies, products, reviews, shipping

__all__ = [
    "analytics",
    "coupons",
    "customers",
    "orders",
    "policies",
    "products",
    "reviews",
    "shipping",
]
