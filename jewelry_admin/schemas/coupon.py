"""
Coupon API schemas.
Cross-field rules (min < max, start < expiry) are checked by the handlers
with ``check_coupon_rules`` so partial updates can be checked against the
stored coupon.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import Field, field_validator

from ..models.base import CamelModel
from ..models.coupon import COUPON_TYPES

DATE_FIELDS = ["startDate", "expiryDate"]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_type(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in COUPON_TYPES:
        raise ValueError(f'Invalid coupon type. Must be one of: {COUPON_TYPES}')
    return value


class CreateCouponRequest(CamelModel):
    """Request schema for creating a coupon."""
    name: str = Field(..., min_length=1, max_length=100, description="Coupon name")
    code: str = Field(..., min_length=1, max_length=20, description="Coupon code, stored uppercased")
    type: str = Field(..., description="flat or percentage")
    amount: float = Field(..., ge=0)
    min_value: float = Field(..., ge=0, description="Minimum order value")
    max_value: float = Field(..., ge=0, description="Maximum order value")
    usage_limit: int = Field(..., ge=1)
    is_active: bool = True
    start_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None

    @field_validator('code')
    @classmethod
    def uppercase_code(cls, v):
        return v.upper()

    @field_validator('type')
    @classmethod
    def check_type(cls, v):
        return _check_type(v)

    @field_validator('start_date', 'expiry_date', mode='before')
    @classmethod
    def blank_dates(cls, v):
        return _blank_to_none(v)


class UpdateCouponRequest(CamelModel):
    """
    Partial coupon update.
    ``_id``, ``createdAt`` and ``usedCount`` are not accepted and are dropped
    if sent. An empty date string clears that date.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    code: Optional[str] = Field(None, min_length=1, max_length=20)
    type: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)
    min_value: Optional[float] = Field(None, ge=0)
    max_value: Optional[float] = Field(None, ge=0)
    usage_limit: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None
    start_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None

    @field_validator('code')
    @classmethod
    def uppercase_code(cls, v):
        return v.upper() if v is not None else v

    @field_validator('type')
    @classmethod
    def check_type(cls, v):
        return _check_type(v)

    @field_validator('start_date', 'expiry_date', mode='before')
    @classmethod
    def blank_dates(cls, v):
        return _blank_to_none(v)

    def to_update(self) -> Dict[str, Any]:
        """Fields to $set, keyed by stored name."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)

    def cleared_dates(self) -> List[str]:
        """Stored names of the dates explicitly sent empty."""
        cleared = []
        for field_name in ("start_date", "expiry_date"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                cleared.append(type(self).model_fields[field_name].alias)
        return cleared
