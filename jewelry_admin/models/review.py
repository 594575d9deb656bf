"""
Review moderation rules.
"""
from typing import Any, Dict, Optional

REVIEW_STATUSES = ["pending", "approved", "rejected"]


def reviewer_name(user: Optional[Dict[str, Any]]) -> str:
    """Display name for a populated review author."""
    if not user:
        return "Anonymous"
    first = user.get("firstName") or ""
    last = user.get("lastName") or ""
    return f"{first} {last}".strip() or "Anonymous"
