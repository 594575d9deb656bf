"""
Review moderation schemas.
"""
from pydantic import BaseModel, Field, field_validator

from ..models.review import REVIEW_STATUSES


class UpdateReviewStatusRequest(BaseModel):
    status: str = Field(..., description="pending, approved or rejected")

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v not in REVIEW_STATUSES:
            raise ValueError('Invalid status')
        return v
