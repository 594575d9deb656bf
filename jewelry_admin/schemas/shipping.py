"""
Shipping location API schemas.
"""
from typing import Any, Dict, Optional
from pydantic import Field, field_validator

from ..models.base import CamelModel


class CreateShippingRequest(CamelModel):
    """Request schema for adding a deliverable zip code."""
    zip_code: str = Field(..., min_length=1, max_length=10)
    charges: float = Field(..., ge=0, description="Shipping charge")
    price_less_than: float = Field(..., ge=0, description="Charge applies below this order value")
    state: str = Field(..., min_length=1, max_length=50)
    state_code: str = Field(..., min_length=1, max_length=5)
    gst_code: str = Field(..., min_length=1, max_length=10)
    is_active: bool = True

    @field_validator('zip_code', 'state_code', 'gst_code', mode='before')
    @classmethod
    def coerce_codes(cls, v):
        # Spreadsheet-style clients send numeric codes
        return str(v) if isinstance(v, int) else v

    @field_validator('state_code')
    @classmethod
    def uppercase_state_code(cls, v):
        return v.upper()


class UpdateShippingRequest(CamelModel):
    zip_code: Optional[str] = Field(None, min_length=1, max_length=10)
    charges: Optional[float] = Field(None, ge=0)
    price_less_than: Optional[float] = Field(None, ge=0)
    state: Optional[str] = Field(None, min_length=1, max_length=50)
    state_code: Optional[str] = Field(None, min_length=1, max_length=5)
    gst_code: Optional[str] = Field(None, min_length=1, max_length=10)
    is_active: Optional[bool] = None

    @field_validator('zip_code', 'state_code', 'gst_code', mode='before')
    @classmethod
    def coerce_codes(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator('state_code')
    @classmethod
    def uppercase_state_code(cls, v):
        return v.upper() if v is not None else v

    def to_update(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
