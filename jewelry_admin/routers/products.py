"""
Product catalog endpoints: CRUD, CSV bulk upload, CSV template and JSON import.
"""
import re
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse, Response
from pymongo import ReturnDocument
from pymongo.errors import BulkWriteError, DuplicateKeyError

from ..config.database import get_database
from ..config.settings import get_settings
from ..models.product import TAG_FLAGS, derive_tags
from ..schemas.common import SuccessResponse
from ..schemas.product import CreateProductRequest, ImportProductsRequest, UpdateProductRequest
from ..services.product_csv import (
    CSV_TEMPLATE,
    TEMPLATE_FILENAME,
    RowError,
    map_import_record,
    new_product_from_import,
    parse_products_csv,
)
from ..utils.dependencies import build_pagination, get_or_404, page_size, page_skip, validate_object_id
from ..utils.errors import server_error
from ..utils.rate_limit import strict_rate_limit
from ..utils.serializers import serialize_doc, serialize_docs, utcnow

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/products", tags=["Products"])

FLAG_FIELDS = {flag for flag, _ in TAG_FLAGS}


@router.get("", response_model=SuccessResponse)
async def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, description="Products per page"),
    get_all: bool = Query(False, alias="getAll", description="Return every product without paging"),
    search: Optional[str] = Query(None, description="Case-insensitive match on name or SKU"),
    category: Optional[str] = Query(None, description="Filter by category"),
    db=Depends(get_database)
):
    """List products, newest first."""
    try:
        limit = page_size(limit)
        filter_query = {}
        if search:
            pattern = re.escape(search)
            filter_query["$or"] = [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"sku": {"$regex": pattern, "$options": "i"}},
            ]
        if category and category != "all":
            filter_query["category"] = category

        cursor = db.products.find(filter_query).sort("createdAt", -1)

        if get_all:
            products = await cursor.to_list(length=None)
            return SuccessResponse(data={"products": serialize_docs(products), "pagination": None})

        total = await db.products.count_documents(filter_query)
        products = await cursor.skip(page_skip(page, limit)).limit(limit).to_list(length=limit)

        return SuccessResponse(data={
            "products": serialize_docs(products),
            "pagination": build_pagination(page, limit, total, len(products), "totalProducts"),
        })

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch products: {str(e)}")
        raise server_error("Server error fetching products", e)


@router.post("", status_code=201, response_model=SuccessResponse)
async def create_product(product: CreateProductRequest, db=Depends(get_database)):
    """Create a product from already-hosted image URLs."""
    try:
        if await db.products.find_one({"sku": product.sku}, {"_id": 1}):
            raise HTTPException(status_code=400, detail="Product with this SKU already exists")

        now = utcnow()
        product_doc = product.to_mongo()
        product_doc["createdAt"] = now
        product_doc["updatedAt"] = now

        result = await db.products.insert_one(product_doc)
        created_product = await db.products.find_one({"_id": result.inserted_id})

        logger.info(f"Product created: {product.name} (ID: {result.inserted_id})")
        return SuccessResponse(message="Product created successfully", data=serialize_doc(created_product))

    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Product with this SKU already exists")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create product: {str(e)}")
        raise server_error("Server error creating product", e)


@router.get("/csv-template")
async def csv_template():
    """Download the bulk-upload CSV template with sample rows."""
    return Response(
        content=CSV_TEMPLATE,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={TEMPLATE_FILENAME}"},
    )


@router.post("/bulk-upload", dependencies=[Depends(strict_rate_limit)])
async def bulk_upload(csv_file: Optional[UploadFile] = File(None, alias="csvFile"), db=Depends(get_database)):
    """
    Create products from an uploaded CSV.

    Invalid rows are reported and skipped; valid rows are inserted unordered,
    so one duplicate SKU does not block the rest of the batch.
    """
    if csv_file is None:
        raise HTTPException(status_code=400, detail="No CSV file uploaded")

    try:
        raw = await csv_file.read()
        if len(raw) > settings.max_csv_upload_bytes:
            raise HTTPException(status_code=400, detail="CSV file is too large")
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded")

        logger.info(f"📥 Bulk upload: {csv_file.filename} ({len(raw)} bytes)")
        products, errors, total_rows = parse_products_csv(text, settings.default_brand)

        if not products:
            message = "CSV processing completed with errors" if errors else "No valid products found in CSV file"
            raise HTTPException(status_code=400, detail={
                "message": message,
                "errors": errors,
                "processedProducts": 0,
            })

        now = utcnow()
        for product_doc in products:
            product_doc["createdAt"] = now
            product_doc["updatedAt"] = now

        try:
            result = await db.products.insert_many(products, ordered=False)
        except BulkWriteError as bwe:
            write_errors = bwe.details.get("writeErrors", [])
            logger.warning(f"⚠️ Bulk upload: {len(write_errors)} products rejected by the database")
            return JSONResponse(status_code=200, content={
                "success": False,
                "message": "Some products could not be created",
                "errors": [
                    {"message": err.get("errmsg"), "sku": (err.get("op") or {}).get("sku")}
                    for err in write_errors
                ],
                "createdCount": bwe.details.get("nInserted", 0),
            })

        created = await db.products.find({"_id": {"$in": result.inserted_ids}}).to_list(length=None)
        logger.info(f"✅ Bulk upload created {len(created)} products")
        return {
            "success": True,
            "message": f"Successfully created {len(created)} products",
            "data": serialize_docs(created),
            "totalProcessed": total_rows,
            "errors": errors,
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Bulk upload failed: {str(e)}")
        raise server_error("Server error during bulk upload", e)


@router.post("/import", dependencies=[Depends(strict_rate_limit)])
async def import_products(payload: ImportProductsRequest, db=Depends(get_database)):
    """
    Upsert exported records by _id, else by SKU, else insert them.

    Records that would create a product must be valid products. The whole
    batch is checked before anything is written; any invalid record fails
    the import with a 400 listing ``{record, message}`` per failure.
    """
    if not payload.products:
        raise HTTPException(status_code=400, detail="No products provided")

    try:
        planned = []
        errors = []
        new_skus = set()
        for index, raw in enumerate(payload.products, start=1):
            mapped = map_import_record(raw)

            if raw.get("_id"):
                query = {"_id": validate_object_id(str(raw["_id"]), "product")}
                action = "updatedById"
            elif mapped.get("sku"):
                query = {"sku": mapped["sku"]}
                action = "upsertBySku"
            else:
                query = None
                action = "created"

            existing = await db.products.find_one(query, {"_id": 1}) if query else None
            if existing is not None:
                planned.append((action, existing["_id"], mapped))
                continue

            try:
                new_doc = new_product_from_import(mapped, settings.default_brand)
            except RowError as e:
                errors.append({"record": index, "message": str(e)})
                continue

            sku = new_doc["sku"]
            if sku in new_skus or await db.products.find_one({"sku": sku}, {"_id": 1}):
                errors.append({"record": index, "message": f"Product with SKU {sku} already exists"})
                continue
            new_skus.add(sku)

            if query and "_id" in query:
                new_doc["_id"] = query["_id"]
            planned.append((action, None, new_doc))

        if errors:
            raise HTTPException(status_code=400, detail={
                "message": "Invalid product records, nothing was imported",
                "errors": errors,
            })

        results = []
        for action, product_id, doc in planned:
            now = utcnow()
            if product_id is not None:
                await db.products.update_one({"_id": product_id}, {"$set": {**doc, "updatedAt": now}})
            else:
                result = await db.products.insert_one({**doc, "createdAt": now, "updatedAt": now})
                product_id = result.inserted_id
            results.append({"id": str(product_id), "action": action})

        logger.info(f"📦 Imported {len(results)} products")
        return {"success": True, "message": f"Imported {len(results)} products", "results": results}

    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Product with this SKU already exists")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Product import failed: {str(e)}")
        raise server_error("Import failed", e)


@router.get("/{product_id}", response_model=SuccessResponse)
async def get_product(product_id: str, db=Depends(get_database)):
    """Get a specific product by ID"""
    try:
        product = await get_or_404(db.products, {"_id": validate_object_id(product_id, "product")}, "Product not found")
        return SuccessResponse(data=serialize_doc(product))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch product {product_id}: {str(e)}")
        raise server_error("Server error fetching product", e)


@router.put("/{product_id}", response_model=SuccessResponse)
async def update_product(product_id: str, product_update: UpdateProductRequest, db=Depends(get_database)):
    """Partially update a product; tags follow the merged flags."""
    try:
        object_id = validate_object_id(product_id, "product")
        existing = await get_or_404(db.products, {"_id": object_id}, "Product not found")

        update_doc = product_update.to_update()
        if FLAG_FIELDS & update_doc.keys():
            update_doc["tags"] = derive_tags({**existing, **update_doc})
        update_doc["updatedAt"] = utcnow()

        updated_product = await db.products.find_one_and_update(
            {"_id": object_id},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )
        if not updated_product:
            raise HTTPException(status_code=404, detail="Product not found")

        logger.info(f"Product updated: {product_id}")
        return SuccessResponse(message="Product updated successfully", data=serialize_doc(updated_product))

    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Product with this SKU already exists")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update product {product_id}: {str(e)}")
        raise server_error("Server error updating product", e)


@router.delete("/{product_id}", response_model=SuccessResponse)
async def delete_product(product_id: str, db=Depends(get_database)):
    """Delete a product"""
    try:
        result = await db.products.delete_one({"_id": validate_object_id(product_id, "product")})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Product not found")

        logger.info(f"Product deleted: {product_id}")
        return SuccessResponse(message="Product deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete product {product_id}: {str(e)}")
        raise server_error("Server error deleting product", e)
