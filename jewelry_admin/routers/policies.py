"""
Store policy pages, addressed by normalised key.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pymongo import ReturnDocument

from ..config.database import get_database
from ..models.policy import normalize_policy_key
from ..schemas.common import SuccessResponse
from ..schemas.policy import UpdatePolicyRequest, UpsertPolicyRequest
from ..utils.dependencies import get_or_404
from ..utils.errors import server_error
from ..utils.serializers import serialize_doc, serialize_docs, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/policies", tags=["Policies"])


async def _upsert(db, key: str, fields: dict):
    now = utcnow()
    return await db.policies.find_one_and_update(
        {"key": key},
        {"$set": {**fields, "updatedAt": now}, "$setOnInsert": {"createdAt": now}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )


@router.get("", response_model=SuccessResponse)
async def list_policies(db=Depends(get_database)):
    """All policies, oldest first."""
    try:
        policies = await db.policies.find({}).sort("createdAt", 1).to_list(length=None)
        return SuccessResponse(data=serialize_docs(policies))

    except Exception as e:
        logger.error(f"Failed to fetch policies: {str(e)}")
        raise server_error("Server error fetching policies", e)


@router.post("", response_model=SuccessResponse)
async def upsert_policy(policy: UpsertPolicyRequest, db=Depends(get_database)):
    """Create or replace a policy's title and content."""
    try:
        fields = policy.model_dump(by_alias=True, exclude_none=True)
        saved = await _upsert(db, policy.key, fields)

        logger.info(f"Policy saved: {policy.key}")
        return SuccessResponse(message="Policy saved successfully", data=serialize_doc(saved))

    except Exception as e:
        logger.error(f"Failed to save policy {policy.key}: {str(e)}")
        raise server_error("Server error saving policy", e)


@router.get("/{key}", response_model=SuccessResponse)
async def get_policy(key: str, db=Depends(get_database)):
    try:
        policy = await get_or_404(db.policies, {"key": normalize_policy_key(key)}, "Policy not found")
        return SuccessResponse(data=serialize_doc(policy))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch policy {key}: {str(e)}")
        raise server_error("Server error fetching policy", e)


@router.put("/{key}", response_model=SuccessResponse)
async def update_policy(key: str, policy_update: UpdatePolicyRequest, db=Depends(get_database)):
    """Update the provided fields, creating the policy if it does not exist yet."""
    try:
        normalized_key = normalize_policy_key(key)
        fields = policy_update.to_update()

        if "title" not in fields and not await db.policies.find_one({"key": normalized_key}, {"_id": 1}):
            raise HTTPException(status_code=400, detail="'title' is required to create a policy")

        saved = await _upsert(db, normalized_key, {"key": normalized_key, **fields})

        logger.info(f"Policy updated: {normalized_key}")
        return SuccessResponse(message="Policy updated successfully", data=serialize_doc(saved))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update policy {key}: {str(e)}")
        raise server_error("Server error updating policy", e)


@router.delete("/{key}", response_model=SuccessResponse)
async def delete_policy(key: str, db=Depends(get_database)):
    try:
        result = await db.policies.delete_one({"key": normalize_policy_key(key)})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Policy not found")

        logger.info(f"Policy deleted: {key}")
        return SuccessResponse(message="Policy deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete policy {key}: {str(e)}")
        raise server_error("Server error deleting policy", e)
