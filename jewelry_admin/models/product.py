"""
Product data models for database documents.
These represent the actual structure of documents stored in MongoDB.
"""
from typing import Any, List, Mapping, Optional
from pydantic import Field, field_validator

from .base import CamelModel, DocumentModel

PRODUCT_CATEGORIES = [
    "rings",
    "necklaces",
    "earrings",
    "bracelets",
    "ring-cum-bangles",
    "fine-gold",
    "fine-silver",
    "mens",
    "gifts",
    "new-arrivals",
    "best-sellers",
    "collections",
]

# Flag field (stored name) -> tag, in tag order
TAG_FLAGS = [
    ("isNewArrival", "new-arrival"),
    ("isBestSeller", "best-seller"),
    ("isFeatured", "featured"),
    ("isGiftable", "giftable"),
    ("isOnSale", "on-sale"),
    ("ringCumBangles", "ring-cum-bangles"),
    ("men", "men"),
    ("women", "women"),
    ("kids", "kids"),
]

SPECIFICATION_FIELDS = ["material", "metalType", "gemstone", "dimensions", "careInstructions", "warranty"]


def derive_tags(flags: Mapping[str, Any]) -> List[str]:
    """Tags implied by the product's boolean flags."""
    return [tag for flag, tag in TAG_FLAGS if flags.get(flag)]


def validate_category(value: str) -> str:
    if value not in PRODUCT_CATEGORIES:
        raise ValueError(f'Invalid category. Must be one of: {PRODUCT_CATEGORIES}')
    return value


class ProductSpecifications(CamelModel):
    """Free-text jewelry specifications."""
    material: Optional[str] = None
    metal_type: Optional[str] = None
    gemstone: Optional[str] = None
    dimensions: Optional[str] = None
    care_instructions: Optional[str] = None
    warranty: Optional[str] = None


class ProductDocument(DocumentModel):
    """
    Product document model representing the MongoDB document structure.
    This matches how the storefront stores products.
    """
    name: str = Field(..., min_length=1, max_length=100, description="Product name")
    description: str = Field(..., min_length=1, max_length=1000, description="Product description")
    short_description: str = Field(default="", max_length=200)
    price: float = Field(..., ge=0, description="Selling price")
    original_price: float = Field(default=0, ge=0, description="Price before discount")
    cost: float = Field(default=0, ge=0)
    discount: float = Field(default=0, ge=0)
    category: str = Field(..., description="Product category")
    subcategory: str = Field(default="")
    stock: int = Field(..., ge=0, description="Available stock")
    brand: str = Field(default="Sabri")
    sku: str = Field(..., min_length=1, description="Stock keeping unit, unique")
    specifications: ProductSpecifications = Field(default_factory=ProductSpecifications)
    images: List[str] = Field(default_factory=list, description="Hosted image URLs")
    tags: List[str] = Field(default_factory=list)

    is_active: bool = True
    is_featured: bool = False
    is_new_arrival: bool = False
    is_best_seller: bool = False
    is_giftable: bool = True
    is_on_sale: bool = False
    ring_cum_bangles: bool = False
    men: bool = False
    women: bool = True
    kids: bool = False

    @field_validator('category')
    @classmethod
    def check_category(cls, v):
        return validate_category(v)

    def to_mongo(self):
        doc = super().to_mongo()
        doc["tags"] = derive_tags(doc)
        return doc
