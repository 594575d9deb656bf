"""
Order API schemas.
"""
from pydantic import BaseModel, Field, field_validator

from ..models.order import validate_order_status


class UpdateOrderStatusRequest(BaseModel):
    """Request schema for updating order status."""
    status: str = Field(..., description="New order status")

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        return validate_order_status(v)
