"""
Review moderation endpoints.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo import ReturnDocument

from ..config.database import get_database
from ..models.review import reviewer_name
from ..schemas.common import SuccessResponse
from ..schemas.review import UpdateReviewStatusRequest
from ..utils.dependencies import populate, validate_object_id
from ..utils.errors import server_error
from ..utils.serializers import serialize_doc, serialize_docs, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["Reviews"])

MAX_REVIEWS = 200


@router.get("", response_model=SuccessResponse)
async def list_reviews(
    status: Optional[str] = Query(None, description="pending, approved or rejected"),
    limit: int = Query(50, ge=1, description=f"Capped at {MAX_REVIEWS}"),
    db=Depends(get_database)
):
    """Newest reviews with their author and product."""
    try:
        filter_query = {"status": status} if status else {}
        limit = min(limit, MAX_REVIEWS)

        reviews = await db.reviews.find(filter_query).sort("createdAt", -1).limit(limit).to_list(length=limit)
        reviews = await populate(db, reviews, "user", "users", ["firstName", "lastName", "email"])
        reviews = await populate(db, reviews, "product", "products", ["name", "images", "sku"])

        for review in reviews:
            if review["user"] is not None:
                review["user"]["name"] = reviewer_name(review["user"])

        return SuccessResponse(data={"reviews": serialize_docs(reviews)})

    except Exception as e:
        logger.error(f"Failed to fetch reviews: {str(e)}")
        raise server_error("Failed to fetch reviews", e)


@router.patch("/{review_id}", response_model=SuccessResponse)
async def update_review_status(
    review_id: str,
    status_update: UpdateReviewStatusRequest,
    db=Depends(get_database)
):
    """Approve, reject or reset a review."""
    try:
        updated = await db.reviews.find_one_and_update(
            {"_id": validate_object_id(review_id, "review")},
            {"$set": {"status": status_update.status, "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise HTTPException(status_code=404, detail="Review not found")

        logger.info(f"Review {review_id} {status_update.status}")
        return SuccessResponse(message="Review updated successfully", data={"review": serialize_doc(updated)})

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update review {review_id}: {str(e)}")
        raise server_error("Failed to update review", e)
