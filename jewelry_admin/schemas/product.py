"""
Product API schemas for request/response validation.
These models define the structure of data sent to and from the API.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from ..models.base import CamelModel
from ..models.product import ProductDocument, ProductSpecifications, validate_category


def non_empty_images(urls: List[str]) -> List[str]:
    images = [url.strip() for url in urls if url and url.strip()]
    if not images:
        raise ValueError('At least one image is required')
    return images


# Request Schemas

class CreateProductRequest(ProductDocument):
    """Request schema for creating a new product. Images are already-hosted URLs."""
    price: float = Field(..., gt=0, description="Selling price (must be positive)")
    original_price: float = Field(..., gt=0, description="Price before discount (must be positive)")
    images: List[str] = Field(..., description="At least one image URL")

    @field_validator('images')
    @classmethod
    def require_images(cls, v):
        return non_empty_images(v)


class UpdateProductRequest(CamelModel):
    """Request schema for a partial product update."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    short_description: Optional[str] = Field(None, max_length=200)
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    cost: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    subcategory: Optional[str] = None
    stock: Optional[int] = None
    brand: Optional[str] = None
    sku: Optional[str] = Field(None, min_length=1)
    specifications: Optional[ProductSpecifications] = None
    images: Optional[List[str]] = None

    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_new_arrival: Optional[bool] = None
    is_best_seller: Optional[bool] = None
    is_giftable: Optional[bool] = None
    is_on_sale: Optional[bool] = None
    ring_cum_bangles: Optional[bool] = None
    men: Optional[bool] = None
    women: Optional[bool] = None
    kids: Optional[bool] = None

    @field_validator('stock')
    @classmethod
    def check_stock(cls, v):
        if v is not None and v < 0:
            raise ValueError(f'Invalid stock value: {v}. Stock cannot be negative.')
        return v

    @field_validator('category')
    @classmethod
    def check_category(cls, v):
        return validate_category(v) if v is not None else v

    @field_validator('images')
    @classmethod
    def keep_an_image(cls, v):
        return non_empty_images(v) if v is not None else v

    def to_update(self) -> Dict[str, Any]:
        """Provided fields, keyed by stored name."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class ImportProductsRequest(BaseModel):
    """Loosely-typed records from a spreadsheet/JSON export."""
    products: List[Dict[str, Any]] = Field(default_factory=list)
