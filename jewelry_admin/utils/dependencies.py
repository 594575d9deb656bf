"""
FastAPI dependencies for database access and common validations
"""
import math
import secrets
import logging
from typing import Dict, Any, List, Optional

from bson import ObjectId
from fastapi import Header, HTTPException
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from ..config.settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def validate_object_id(object_id: str, resource_name: str = "resource") -> ObjectId:
    """
    Validate and convert string to ObjectId

    Args:
        object_id: String representation of ObjectId
        resource_name: Name of the resource for error messages

    Returns:
        Valid ObjectId instance

    Raises:
        HTTPException: If ObjectId format is invalid
    """
    if not object_id or not ObjectId.is_valid(object_id):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {resource_name} ID format"
        )
    return ObjectId(object_id)


async def get_or_404(
    collection: AsyncIOMotorCollection,
    query: Dict[str, Any],
    not_found_message: str,
    projection: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Fetch a single document or fail with 404

    Raises:
        HTTPException: If no document matches the query
    """
    doc = await collection.find_one(query, projection)
    if not doc:
        raise HTTPException(status_code=404, detail=not_found_message)
    return doc


async def populate(
    db: AsyncIOMotorDatabase,
    docs: List[Dict[str, Any]],
    field: str,
    collection: str,
    fields: List[str],
) -> List[Dict[str, Any]]:
    """
    Replace an ObjectId reference on each document with the referenced
    document, restricted to ``fields``. Dangling references become None.
    """
    ids = {doc[field] for doc in docs if isinstance(doc.get(field), ObjectId)}
    if not ids:
        for doc in docs:
            doc[field] = None
        return docs

    projection = {name: 1 for name in fields}
    cursor = db[collection].find({"_id": {"$in": list(ids)}}, projection)
    referenced = {ref["_id"]: ref for ref in await cursor.to_list(length=None)}

    for doc in docs:
        doc[field] = referenced.get(doc.get(field))
    return docs


def page_size(limit: int) -> int:
    """Requested page size, capped at MAX_PAGE_SIZE rather than rejected."""
    return min(limit, settings.max_page_size)


def page_skip(page: int, limit: int) -> int:
    """Number of documents to skip for a 1-based page."""
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total: int, returned: int, total_key: str) -> Dict[str, Any]:
    """Pagination block shared by every page-based list endpoint."""
    return {
        "currentPage": page,
        "totalPages": math.ceil(total / limit) if limit else 0,
        total_key: total,
        "hasNext": page_skip(page, limit) + returned < total,
        "hasPrev": page > 1,
    }


async def require_admin(x_admin_key: Optional[str] = Header(None)) -> None:
    """
    Admin context check for dashboard routes.

    When ADMIN_API_KEY is configured the caller must send it in the
    X-Admin-Key header. An empty key disables the check.
    """
    expected = settings.admin_api_key
    if not expected:
        return
    if not x_admin_key or not secrets.compare_digest(x_admin_key, expected):
        raise HTTPException(status_code=401, detail="Not authenticated")
