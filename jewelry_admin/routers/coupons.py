"""
Coupon administration endpoints.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..config.database import get_database
from ..models.coupon import CouponRuleError, check_coupon_rules, with_remaining_uses
from ..schemas.common import SuccessResponse
from ..schemas.coupon import CreateCouponRequest, UpdateCouponRequest
from ..services.coupons import COUPON_STATUSES, build_coupon_filter, coupon_stats_pipeline, stats_from_result
from ..utils.dependencies import build_pagination, page_size, page_skip, validate_object_id
from ..utils.errors import server_error
from ..utils.serializers import serialize_doc, serialize_docs, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/coupons", tags=["Coupons"])


@router.get("", response_model=SuccessResponse)
async def list_coupons(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: Optional[str] = Query(None, description="Match on name or code"),
    type: Optional[str] = Query(None, description="flat, percentage or all"),
    status: str = Query("all", description=f"One of {COUPON_STATUSES}"),
    db=Depends(get_database)
):
    """List coupons with status counts over the whole collection."""
    try:
        limit = page_size(limit)
        now = utcnow()
        filter_query = build_coupon_filter(search, type, status, now)

        total = await db.coupons.count_documents(filter_query)
        cursor = db.coupons.find(filter_query).sort("createdAt", -1).skip(page_skip(page, limit)).limit(limit)
        coupons = await cursor.to_list(length=limit)

        stats = await db.coupons.aggregate(coupon_stats_pipeline(now)).to_list(length=1)

        return SuccessResponse(data={
            "coupons": serialize_docs([with_remaining_uses(coupon) for coupon in coupons]),
            "stats": stats_from_result(stats),
            "pagination": build_pagination(page, limit, total, len(coupons), "totalCoupons"),
        })

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch coupons: {str(e)}")
        raise server_error("Server error getting coupons", e)


@router.post("", status_code=201, response_model=SuccessResponse)
async def create_coupon(coupon: CreateCouponRequest, db=Depends(get_database)):
    """Create a coupon; the code is stored uppercased and must be unique."""
    try:
        if await db.coupons.find_one({"code": coupon.code}, {"_id": 1}):
            raise HTTPException(status_code=400, detail="Coupon code already exists")

        coupon_doc = coupon.model_dump(by_alias=True, exclude_none=True)
        check_coupon_rules(coupon_doc)

        now = utcnow()
        coupon_doc.update({"usedCount": 0, "createdAt": now, "updatedAt": now})

        result = await db.coupons.insert_one(coupon_doc)
        created_coupon = await db.coupons.find_one({"_id": result.inserted_id})

        logger.info(f"Coupon created: {coupon.code}")
        return SuccessResponse(
            message="Coupon created successfully",
            data=serialize_doc(with_remaining_uses(created_coupon)),
        )

    except CouponRuleError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Coupon code already exists")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create coupon: {str(e)}")
        raise server_error("Server error creating coupon", e)


@router.put("/{coupon_id}", response_model=SuccessResponse)
async def update_coupon(coupon_id: str, coupon_update: UpdateCouponRequest, db=Depends(get_database)):
    """Partially update a coupon, re-checking its rules on the merged result."""
    try:
        object_id = validate_object_id(coupon_id, "coupon")
        existing = await db.coupons.find_one({"_id": object_id})
        if not existing:
            raise HTTPException(status_code=404, detail="Coupon not found")

        set_fields = coupon_update.to_update()
        cleared = coupon_update.cleared_dates()

        merged = {**existing, **set_fields}
        for field in cleared:
            merged.pop(field, None)
        check_coupon_rules(merged)

        update = {"$set": {**set_fields, "updatedAt": utcnow()}}
        if cleared:
            update["$unset"] = {field: "" for field in cleared}

        updated_coupon = await db.coupons.find_one_and_update(
            {"_id": object_id},
            update,
            return_document=ReturnDocument.AFTER,
        )
        if not updated_coupon:
            raise HTTPException(status_code=404, detail="Coupon not found")

        logger.info(f"Coupon updated: {coupon_id}")
        return SuccessResponse(
            message="Coupon updated successfully",
            data=serialize_doc(with_remaining_uses(updated_coupon)),
        )

    except CouponRuleError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Coupon code already exists")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update coupon {coupon_id}: {str(e)}")
        raise server_error("Server error updating coupon", e)


@router.delete("/{coupon_id}", response_model=SuccessResponse)
async def delete_coupon(coupon_id: str, db=Depends(get_database)):
    try:
        result = await db.coupons.delete_one({"_id": validate_object_id(coupon_id, "coupon")})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Coupon not found")

        logger.info(f"Coupon deleted: {coupon_id}")
        return SuccessResponse(message="Coupon deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete coupon {coupon_id}: {str(e)}")
        raise server_error("Server error deleting coupon", e)
