"""
Customer (storefront user) administration endpoints.
"""
import re
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config.database import get_database
from ..models.user import SECRET_PROJECTION, to_customer
from ..schemas.common import SuccessResponse
from ..utils.dependencies import build_pagination, page_size, page_skip, validate_object_id
from ..utils.errors import server_error
from ..utils.serializers import serialize_docs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/customers", tags=["Customers"])


@router.get("", response_model=SuccessResponse)
async def list_customers(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    search: Optional[str] = Query(None, description="Match on first name, last name or email"),
    role: Optional[str] = Query(None, description="user or admin"),
    db=Depends(get_database)
):
    """List customers, newest first, with tier and full name."""
    try:
        limit = page_size(limit)
        filter_query = {}
        if role:
            filter_query["role"] = role
        if search:
            pattern = re.escape(search)
            filter_query["$or"] = [
                {"firstName": {"$regex": pattern, "$options": "i"}},
                {"lastName": {"$regex": pattern, "$options": "i"}},
                {"email": {"$regex": pattern, "$options": "i"}},
            ]

        total = await db.users.count_documents(filter_query)
        cursor = (
            db.users.find(filter_query, SECRET_PROJECTION)
            .sort("createdAt", -1)
            .skip(page_skip(page, limit))
            .limit(limit)
        )
        users = await cursor.to_list(length=limit)
        customers = [to_customer(user) for user in users]

        return SuccessResponse(data={
            "customers": serialize_docs(customers),
            "pagination": build_pagination(page, limit, total, len(customers), "totalCustomers"),
        })

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch customers: {str(e)}")
        raise server_error("Server error getting customers", e)


@router.delete("", response_model=SuccessResponse)
async def delete_customer(
    customer_id: Optional[str] = Query(None, alias="id"),
    db=Depends(get_database)
):
    if not customer_id:
        raise HTTPException(status_code=400, detail="Customer ID is required")

    try:
        result = await db.users.delete_one({"_id": validate_object_id(customer_id, "customer")})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Customer not found")

        logger.info(f"Customer deleted: {customer_id}")
        return SuccessResponse(message="Customer deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete customer {customer_id}: {str(e)}")
        raise server_error("Server error deleting customer", e)
