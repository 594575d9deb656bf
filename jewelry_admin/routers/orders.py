"""
Order administration endpoints.
Orders are addressed by their public ``orderId``, not the document id.
"""
import re
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo import ReturnDocument

from ..config.database import get_database
from ..schemas.common import SuccessResponse
from ..schemas.order import UpdateOrderStatusRequest
from ..services.notifications import get_notifier, notify_order_status
from ..utils.dependencies import build_pagination, page_size, page_skip, populate
from ..utils.errors import server_error
from ..utils.serializers import serialize_doc, serialize_docs, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/orders", tags=["Orders"])

USER_FIELDS = ["firstName", "lastName", "email"]

ORDER_STATS_PIPELINE = [
    {
        "$group": {
            "_id": "$status",
            "count": {"$sum": 1},
            "totalValue": {"$sum": "$orderSummary.total"},
        }
    }
]


@router.get("", response_model=SuccessResponse)
async def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    status: Optional[str] = Query(None, description="Filter by status; 'all' for any"),
    search: Optional[str] = Query(None, description="Match on order ID, customer name or email"),
    db=Depends(get_database)
):
    """List orders, newest first, with per-status counts and totals."""
    try:
        limit = page_size(limit)
        filter_query = {}
        if status and status != "all":
            filter_query["status"] = status
        if search:
            pattern = re.escape(search)
            filter_query["$or"] = [
                {"orderId": {"$regex": pattern, "$options": "i"}},
                {"shippingAddress.name": {"$regex": pattern, "$options": "i"}},
                {"shippingAddress.email": {"$regex": pattern, "$options": "i"}},
            ]

        total = await db.orders.count_documents(filter_query)
        cursor = db.orders.find(filter_query).sort("createdAt", -1).skip(page_skip(page, limit)).limit(limit)
        orders = await cursor.to_list(length=limit)
        orders = await populate(db, orders, "user", "users", USER_FIELDS)

        stats = await db.orders.aggregate(ORDER_STATS_PIPELINE).to_list(length=None)

        return SuccessResponse(data={
            "orders": serialize_docs(orders),
            "stats": stats,
            "pagination": build_pagination(page, limit, total, len(orders), "totalOrders"),
        })

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch orders: {str(e)}")
        raise server_error("Server error getting orders", e)


async def _update_status(order_id: Optional[str], status_update: UpdateOrderStatusRequest, db, notifier):
    if not order_id:
        raise HTTPException(status_code=400, detail="Order ID is required")

    try:
        order = await db.orders.find_one_and_update(
            {"orderId": order_id},
            {"$set": {"status": status_update.status, "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")

        logger.info(f"Order {order_id} status -> {status_update.status}")
        await notify_order_status(notifier, db, order)

        [order] = await populate(db, [order], "user", "users", USER_FIELDS)
        return SuccessResponse(message="Order status updated successfully", data=serialize_doc(order))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update order {order_id}: {str(e)}")
        raise server_error("Server error updating order status", e)


async def _delete(order_id: Optional[str], db):
    if not order_id:
        raise HTTPException(status_code=400, detail="Order ID is required")

    try:
        result = await db.orders.delete_one({"orderId": order_id})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Order not found")

        logger.info(f"Order deleted: {order_id}")
        return SuccessResponse(message="Order deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete order {order_id}: {str(e)}")
        raise server_error("Server error deleting order", e)


@router.put("", response_model=SuccessResponse)
async def update_order_status(
    status_update: UpdateOrderStatusRequest,
    order_id: Optional[str] = Query(None, alias="id"),
    db=Depends(get_database),
    notifier=Depends(get_notifier)
):
    """Update an order's status, addressed by ?id=<orderId>."""
    return await _update_status(order_id, status_update, db, notifier)


@router.put("/{order_id}", response_model=SuccessResponse)
async def update_order_status_by_path(
    order_id: str,
    status_update: UpdateOrderStatusRequest,
    db=Depends(get_database),
    notifier=Depends(get_notifier)
):
    return await _update_status(order_id, status_update, db, notifier)


@router.delete("", response_model=SuccessResponse)
async def delete_order(order_id: Optional[str] = Query(None, alias="id"), db=Depends(get_database)):
    return await _delete(order_id, db)


@router.delete("/{order_id}", response_model=SuccessResponse)
async def delete_order_by_path(order_id: str, db=Depends(get_database)):
    return await _delete(order_id, db)
