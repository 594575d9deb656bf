"""
Shipping location endpoints: per-zip-code charges and GST details.
"""
import re
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..config.database import get_database
from ..schemas.common import SuccessResponse
from ..schemas.shipping import CreateShippingRequest, UpdateShippingRequest
from ..utils.dependencies import build_pagination, page_size, page_skip, validate_object_id
from ..utils.errors import server_error
from ..utils.serializers import serialize_doc, serialize_docs, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/shipping", tags=["Shipping"])


@router.get("", response_model=SuccessResponse)
async def list_locations(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    search: Optional[str] = Query(None, description="Match on zip code or state"),
    state: Optional[str] = Query(None, description="Filter by state; 'all' for any"),
    db=Depends(get_database)
):
    """List active shipping locations and the states they cover."""
    try:
        limit = page_size(limit)
        filter_query = {"isActive": True}
        if search:
            pattern = re.escape(search)
            filter_query["$or"] = [
                {"zipCode": {"$regex": pattern, "$options": "i"}},
                {"state": {"$regex": pattern, "$options": "i"}},
            ]
        if state and state != "all":
            filter_query["state"] = {"$regex": re.escape(state), "$options": "i"}

        total = await db.shippings.count_documents(filter_query)
        cursor = db.shippings.find(filter_query).sort("createdAt", -1).skip(page_skip(page, limit)).limit(limit)
        locations = await cursor.to_list(length=limit)

        states = await db.shippings.distinct("state", {"isActive": True})

        return SuccessResponse(data={
            "locations": serialize_docs(locations),
            "states": sorted(states),
            "pagination": build_pagination(page, limit, total, len(locations), "totalLocations"),
        })

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch shipping locations: {str(e)}")
        raise server_error("Server error getting shipping data", e)


@router.post("", status_code=201, response_model=SuccessResponse)
@router.post("/add", status_code=201, response_model=SuccessResponse)
async def create_location(location: CreateShippingRequest, db=Depends(get_database)):
    """Add a deliverable zip code."""
    try:
        if await db.shippings.find_one({"zipCode": location.zip_code}, {"_id": 1}):
            raise HTTPException(status_code=400, detail="Zip code already exists")

        now = utcnow()
        location_doc = location.model_dump(by_alias=True)
        location_doc.update({"createdAt": now, "updatedAt": now})

        result = await db.shippings.insert_one(location_doc)
        created = await db.shippings.find_one({"_id": result.inserted_id})

        logger.info(f"Shipping location created: {location.zip_code} ({location.state})")
        return SuccessResponse(message="Shipping location created successfully", data=serialize_doc(created))

    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Zip code already exists")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create shipping location: {str(e)}")
        raise server_error("Server error creating shipping location", e)


@router.put("/{location_id}", response_model=SuccessResponse)
async def update_location(location_id: str, location_update: UpdateShippingRequest, db=Depends(get_database)):
    try:
        update_doc = location_update.to_update()
        update_doc["updatedAt"] = utcnow()

        updated = await db.shippings.find_one_and_update(
            {"_id": validate_object_id(location_id, "shipping location")},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise HTTPException(status_code=404, detail="Shipping location not found")

        logger.info(f"Shipping location updated: {location_id}")
        return SuccessResponse(message="Shipping location updated successfully", data=serialize_doc(updated))

    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Zip code already exists")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update shipping location {location_id}: {str(e)}")
        raise server_error("Server error updating shipping location", e)


@router.delete("/state/{state}", response_model=SuccessResponse)
async def delete_state(state: str, db=Depends(get_database)):
    """Delete every location of a state."""
    try:
        result = await db.shippings.delete_many({"state": state})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="No shipping locations found for this state")

        logger.info(f"Deleted {result.deleted_count} shipping locations for {state}")
        return SuccessResponse(
            message=f"Deleted {result.deleted_count} shipping location(s) for state: {state}",
            data={"deletedCount": result.deleted_count},
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete shipping locations for {state}: {str(e)}")
        raise server_error("Server error deleting shipping locations by state", e)


@router.delete("/{location_id}", response_model=SuccessResponse)
async def delete_location(location_id: str, db=Depends(get_database)):
    try:
        result = await db.shippings.delete_one({"_id": validate_object_id(location_id, "shipping location")})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Shipping location not found")

        logger.info(f"Shipping location deleted: {location_id}")
        return SuccessResponse(message="Shipping location deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete shipping location {location_id}: {str(e)}")
        raise server_error("Server error deleting shipping location", e)
