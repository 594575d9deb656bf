"""
Policy page API schemas.
"""
from typing import Any, Dict, Optional
from pydantic import Field, field_validator

from ..models.base import CamelModel
from ..models.policy import normalize_policy_key


class UpsertPolicyRequest(CamelModel):
    key: str = Field(..., min_length=1, description="Policy slug, e.g. 'returns'")
    title: str = Field(..., min_length=1)
    content: str = ""
    updated_by: Optional[str] = None

    @field_validator('key')
    @classmethod
    def normalize_key(cls, v):
        return normalize_policy_key(v)


class UpdatePolicyRequest(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    updated_by: Optional[str] = None

    def to_update(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
