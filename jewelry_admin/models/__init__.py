"""
Models package for database document structures.
These models represent how data is stored in MongoDB.
"""
from .base import CamelModel, DocumentModel
from .product import (
    PRODUCT_CATEGORIES,
    SPECIFICATION_FIELDS,
    ProductDocument,
    ProductSpecifications,
    derive_tags,
)
from .order import ORDER_STATUSES, validate_order_status
from .coupon import COUPON_TYPES, CouponRuleError, check_coupon_rules, remaining_uses, with_remaining_uses
from .review import REVIEW_STATUSES, reviewer_name
from .policy import normalize_policy_key
from .user import SECRET_PROJECTION, customer_tier, to_customer
from .admin import AdminDocument, hash_password

__all__ = [
    "CamelModel",
    "DocumentModel",

    # Product models
    "PRODUCT_CATEGORIES",
    "SPECIFICATION_FIELDS",
    "ProductDocument",
    "ProductSpecifications",
    "derive_tags",

    # Order rules
    "ORDER_STATUSES",
    "validate_order_status",

    # Coupon models
    "COUPON_TYPES",
    "CouponRuleError",
    "check_coupon_rules",
    "remaining_uses",
    "with_remaining_uses",

    "REVIEW_STATUSES",
    "reviewer_name",
    "normalize_policy_key",

    # Customers
    "SECRET_PROJECTION",
    "customer_tier",
    "to_customer",

    # Admin accounts
    "AdminDocument",
    "hash_password",
]
