"""
Spreadsheet product imports.

``parse_products_csv`` reads the bulk-upload CSV: each row is checked for
the required columns and value formats, then validated against the product
model. Rows that fail are reported by row number and left out of the batch.
``map_import_record`` maps loosely-named records from a JSON export onto
stored product fields; records that create a product go through
``new_product_from_import`` for the same model validation.
"""
import csv
import io
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from ..models.product import SPECIFICATION_FIELDS, TAG_FLAGS, ProductDocument

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["name", "price", "originalPrice", "cost", "category", "stock", "description", "sku"]

BOOLEAN_FIELDS = [flag for flag, _ in TAG_FLAGS]

TEMPLATE_FILENAME = "jewelry_products_template.csv"

OPTIONAL_IMPORT_FIELDS = ["description", "shortDescription", "subcategory"]

CSV_TEMPLATE = """name,price,originalPrice,cost,category,subcategory,stock,brand,description,shortDescription,sku,material,metalType,gemstone,dimensions,careInstructions,warranty,isNewArrival,isBestSeller,isFeatured,isGiftable,isOnSale,ringCumBangles,men,women,kids,images
"Pearl Drop Necklace",3999,5999,2500,necklaces,"Pearl Necklaces",25,Sabri,"Elegant pearl drop necklace for special occasions. Handcrafted with premium materials and attention to detail.","Elegant pearl drop necklace",NECK001,Pearl,sterling-silver,Pearl,"45cm chain length","Store in a dry place, avoid contact with perfumes and lotions","1 year",false,true,true,true,true,false,false,true,false,"https://images.unsplash.com/photo-1506630448388-4e683c67ddb0?w=400&h=400&fit=crop|https://images.unsplash.com/photo-1605100804763-247f67b3557e?w=400&h=400&fit=crop"
"Diamond Stud Earrings",5999,7999,3500,earrings,"Stud Earrings",20,Sabri,"Classic diamond stud earrings for everyday elegance. Perfect for any occasion.","Classic diamond stud earrings",EARR001,Diamond,sterling-silver,Diamond,"6mm studs","Store in jewelry box, clean with soft brush","1 year",false,true,true,true,true,false,false,true,false,"https://images.unsplash.com/photo-1506630448388-4e683c67ddb0?w=400&h=400&fit=crop|https://images.unsplash.com/photo-1605100804763-247f67b3557e?w=400&h=400&fit=crop"
"18K Gold Wedding Ring",8999,12999,5500,rings,"Wedding Rings",15,Sabri,"Premium 18K gold wedding ring with classic design. Perfect for your special day.","Premium 18K gold wedding ring",RING001,"18K Gold",gold-plated,,"Available in sizes 6-12","Professional cleaning recommended","2 years",false,true,true,true,true,false,true,false,false,"https://images.unsplash.com/photo-1605100804763-247f67b3557e?w=400&h=400&fit=crop"
"925 Sterling Silver Ring",1899,2999,1200,fine-silver,"Silver Rings",35,Sabri,"Premium 925 sterling silver ring with elegant design. Hypoallergenic and tarnish-resistant.","Premium 925 sterling silver ring",FS001,"925 Sterling Silver",sterling-silver,,"Available in sizes 6-12","Clean with silver polish cloth","1 year",false,true,true,true,true,false,false,true,false,"https://images.unsplash.com/photo-1605100804763-247f67b3557e?w=400&h=400&fit=crop"
"Ring-cum-Bangles Set",6999,9999,4500,bracelets,"Ring-Bangles",30,Sabri,"Unique ring-cum-bangles set combining the elegance of rings with the beauty of bangles. Perfect for special occasions.","Unique ring-cum-bangles set",RCB001,Silver,sterling-silver,,"Adjustable sizes","Store in jewelry box","1 year",false,true,true,true,true,true,false,true,false,"https://images.unsplash.com/photo-1605100804763-247f67b3557e?w=400&h=400&fit=crop"
"""


class RowError(ValueError):
    """A CSV row or import record that cannot become a product."""


def parse_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true" or value.strip() == "1"
    return bool(value)


def split_pipe_list(value: Any) -> List[str]:
    """'a | b ||c' -> ['a', 'b', 'c']"""
    if not value:
        return []
    return [part.strip() for part in str(value).split("|") if part.strip()]


def _to_float(value: Any, default: float = 0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _column(row: Mapping[str, Optional[str]], field: str) -> str:
    """Value of a column by camelCase or lowercase header, stripped."""
    value = row.get(field) or row.get(field.lower()) or ""
    return value.strip()


def _clean_row(row: Mapping[Optional[str], Any]) -> Dict[str, str]:
    # DictReader puts overflow cells under the None key and pads short rows with None
    return {
        key.strip(): value.strip() if isinstance(value, str) else ""
        for key, value in row.items()
        if key is not None
    }


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}" for detail in error.errors()
    )


def row_to_product(row: Mapping[str, str], default_brand: str) -> Dict[str, Any]:
    """
    Build a stored product document from one CSV row.

    Raises:
        RowError: If a required column is blank or a value is malformed
    """
    missing = [field for field in REQUIRED_FIELDS if not _column(row, field)]
    if missing:
        raise RowError(f"Missing required fields: {', '.join(missing)}")

    price = _to_float(_column(row, "price"), default=-1)
    if price <= 0:
        raise RowError("Invalid selling price value")

    original_price = _to_float(_column(row, "originalPrice"), default=-1)
    if original_price <= 0:
        raise RowError("Invalid original price value")

    try:
        stock = int(_column(row, "stock"))
    except ValueError:
        raise RowError("Invalid stock value")
    if stock < 0:
        raise RowError("Invalid stock value")

    specifications = {
        field: _column(row, field) for field in SPECIFICATION_FIELDS if _column(row, field)
    }

    data: Dict[str, Any] = {
        "name": _column(row, "name"),
        "price": price,
        "originalPrice": original_price,
        "cost": _to_float(_column(row, "cost")),
        "discount": _to_float(_column(row, "discount")),
        "category": _column(row, "category"),
        "subcategory": _column(row, "subcategory"),
        "stock": stock,
        "brand": _column(row, "brand") or default_brand,
        "description": _column(row, "description"),
        "shortDescription": _column(row, "shortDescription"),
        "sku": _column(row, "sku"),
        "specifications": specifications,
        "images": split_pipe_list(_column(row, "images")),
    }
    # Absent boolean columns read as false
    for flag in BOOLEAN_FIELDS:
        data[flag] = parse_boolean(_column(row, flag))

    try:
        product = ProductDocument(**data)
    except ValidationError as e:
        raise RowError(f"Error processing row: {_describe(e)}")

    return product.to_mongo()


def parse_products_csv(text: str, default_brand: str = "Sabri") -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]], int]:
    """
    Parse a bulk-upload CSV.

    Args:
        text: Decoded CSV content with a header row
        default_brand: Brand for rows that leave it blank

    Returns:
        (products, errors, total_rows) where errors are ``{row, message}``
        with 1-based data row numbers
    """
    products: List[Dict[str, Any]] = []
    errors: List[Dict[str, Any]] = []
    row_index = 0

    for raw_row in csv.DictReader(io.StringIO(text)):
        row_index += 1
        row = _clean_row(raw_row)

        if not any(row.values()):
            logger.debug(f"Skipping empty row {row_index}")
            continue

        try:
            products.append(row_to_product(row, default_brand))
        except RowError as e:
            errors.append({"row": row_index, "message": str(e)})

    logger.info(f"📄 CSV parsed: {row_index} rows, {len(products)} products, {len(errors)} errors")
    return products, errors, row_index


def map_import_record(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Map a loosely-named export record onto stored product fields."""
    sku = raw.get("sku") or raw.get("SKU")
    mapped: Dict[str, Any] = {
        "name": raw.get("name") or raw.get("title") or "",
        "category": raw.get("category") or "",
        "price": _to_float(raw.get("price")) if raw.get("price") else 0,
        "cost": _to_float(raw.get("cost")) if raw.get("cost") else 0,
        "stock": _to_int(raw.get("stock")) if raw.get("stock") else 0,
        "brand": raw.get("brand") or "",
        "isActive": raw.get("isActive") in (True, "true", "1"),
        "isFeatured": raw.get("isFeatured") in (True, "true", "1"),
        "tags": split_pipe_list(raw.get("tags")),
        "images": split_pipe_list(raw.get("images")),
    }
    if sku:
        mapped["sku"] = str(sku)
    # Optional text fields are only carried when the export has them
    for field in OPTIONAL_IMPORT_FIELDS:
        if raw.get(field):
            mapped[field] = str(raw[field])
    if raw.get("originalPrice"):
        mapped["originalPrice"] = _to_float(raw["originalPrice"])
    return mapped


def new_product_from_import(mapped: Mapping[str, Any], default_brand: str = "Sabri") -> Dict[str, Any]:
    """
    Full product document for an import record that creates a product.

    Tags from the export are kept; without them they are derived from the flags.

    Raises:
        RowError: If the record is not a valid product
    """
    data = {**mapped, "brand": mapped.get("brand") or default_brand}
    try:
        product = ProductDocument(**data)
    except ValidationError as e:
        raise RowError(f"Invalid product record: {_describe(e)}")

    doc = product.to_mongo()
    if mapped.get("tags"):
        doc["tags"] = list(mapped["tags"])
    return doc
