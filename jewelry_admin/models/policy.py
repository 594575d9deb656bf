"""
Store policy pages (shipping, returns, privacy, ...) keyed by slug.
"""


def normalize_policy_key(key: str) -> str:
    return str(key).strip().lower()
