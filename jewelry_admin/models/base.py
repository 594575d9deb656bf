"""
Shared configuration for document models.
Documents keep the storefront's camelCase field names in MongoDB; Python
code uses snake_case attributes mapped through aliases.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request and document models exchanged in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class DocumentModel(CamelModel):
    """Stored document with id and timestamps."""

    id: Optional[str] = Field(None, alias="_id", description="Document ID")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    def to_mongo(self) -> Dict[str, Any]:
        """Document body as stored, without the id and unset optionals."""
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
