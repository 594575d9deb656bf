"""
Analytics endpoints: customer demographics and the dashboard overview.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from ..config.database import get_database
from ..config.settings import get_settings
from ..models.user import SECRET_PROJECTION
from ..schemas.common import SuccessResponse
from ..services.demographics import build_demographics
from ..services.overview import (
    ORDERS_BY_EMAIL_PIPELINE,
    RECENT_ORDERS,
    REVENUE_PIPELINE,
    top_customers,
)
from ..utils.errors import server_error
from ..utils.serializers import serialize_docs

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(tags=["Analytics"])


@router.get("/demographics", response_model=SuccessResponse)
async def demographics(db=Depends(get_database)):
    """Order counts per city and state, with map coordinates."""
    try:
        orders = await db.orders.find({}, {"shippingAddress": 1}).to_list(length=None)
        return SuccessResponse(data=build_demographics(orders))

    except Exception as e:
        logger.error(f"Failed to build demographics: {str(e)}")
        raise server_error("Failed to fetch demographics data", e)


@router.get("/admin/overview", response_model=SuccessResponse)
async def overview(db=Depends(get_database)):
    """Headline figures for the dashboard home page."""
    try:
        total_customers = await db.users.count_documents({})
        total_orders = await db.orders.count_documents({})
        total_products = await db.products.count_documents({})

        revenue = await db.orders.aggregate(REVENUE_PIPELINE).to_list(length=1)
        total_revenue = revenue[0]["totalRevenue"] if revenue else 0

        recent_orders = await db.orders.find({}).sort("createdAt", -1).limit(RECENT_ORDERS).to_list(length=RECENT_ORDERS)
        low_stock = await db.products.find(
            {"stock": {"$lt": settings.low_stock_threshold}}
        ).sort("stock", 1).to_list(length=None)

        order_counts = await db.orders.aggregate(ORDERS_BY_EMAIL_PIPELINE).to_list(length=None)
        emails = [row["_id"] for row in order_counts]
        users = await db.users.find({"email": {"$in": emails}}, SECRET_PROJECTION).to_list(length=None)

        return SuccessResponse(data={
            "totalCustomers": total_customers,
            "totalOrders": total_orders,
            "totalProducts": total_products,
            "totalRevenue": total_revenue,
            "recentOrders": serialize_docs(recent_orders),
            "lowStockProducts": serialize_docs(low_stock),
            "topCustomers": serialize_docs(top_customers(order_counts, users)),
        })

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to build overview: {str(e)}")
        raise server_error("Server error building overview", e)
