"""
MongoDB document serialization utilities
"""
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from bson import ObjectId


def convert_object_ids(doc: Any) -> Any:
    """
    Recursively convert ObjectId instances to strings.
    Populated references and embedded arrays (order items, images) are
    walked as well.

    Args:
        doc: Document that may contain ObjectIds at any level

    Returns:
        Document with all ObjectIds converted to strings
    """
    if isinstance(doc, dict):
        return {key: convert_object_ids(value) for key, value in doc.items()}
    elif isinstance(doc, list):
        return [convert_object_ids(item) for item in doc]
    elif isinstance(doc, ObjectId):
        return str(doc)
    else:
        return doc


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert a MongoDB document into a JSON-ready copy

    Args:
        doc: MongoDB document dictionary

    Returns:
        Copy of the document with every ObjectId converted to string, or None if input is None
    """
    if doc is None:
        return None
    return convert_object_ids(doc)


def serialize_docs(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Serialize a list of MongoDB documents, dropping empty entries."""
    return [serialize_doc(doc) for doc in docs if doc is not None]


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes read back from MongoDB as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
