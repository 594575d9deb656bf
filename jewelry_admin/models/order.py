"""
Order document rules.
Orders are written by the storefront; the admin API only reads them,
changes their status and deletes them, so only the status rules live here.
"""
ORDER_STATUSES = ['pending', 'confirmed', 'processing', 'shipped', 'delivered', 'cancelled']


def validate_order_status(value: str) -> str:
    if value.lower() not in ORDER_STATUSES:
        raise ValueError(f'Invalid status. Must be one of: {ORDER_STATUSES}')
    return value.lower()
