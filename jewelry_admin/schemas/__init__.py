"""
Schemas package for API request/response validation.
These models define the structure of data sent to and from the API endpoints.
"""

# Product schemas
from .product import (
    CreateProductRequest,
    UpdateProductRequest,
    ImportProductsRequest,
)

# Coupon schemas
from .coupon import CreateCouponRequest, UpdateCouponRequest

# Order schemas
from .order import UpdateOrderStatusRequest

from .shipping import CreateShippingRequest, UpdateShippingRequest
from .policy import UpsertPolicyRequest, UpdatePolicyRequest
from .review import UpdateReviewStatusRequest

# Common schemas
from .common import (
    HealthCheckResponse,
    RootResponse,
    ErrorResponse,
    ValidationErrorDetail,
    SuccessResponse,
)

__all__ = [
    # Product schemas
    "CreateProductRequest",
    "UpdateProductRequest",
    "ImportProductsRequest",

    # Coupon schemas
    "CreateCouponRequest",
    "UpdateCouponRequest",

    # Order schemas
    "UpdateOrderStatusRequest",

    "CreateShippingRequest",
    "UpdateShippingRequest",
    "UpsertPolicyRequest",
    "UpdatePolicyRequest",
    "UpdateReviewStatusRequest",

    # Common schemas
    "HealthCheckResponse",
    "RootResponse",
    "ErrorResponse",
    "ValidationErrorDetail",
    "SuccessResponse",
]
