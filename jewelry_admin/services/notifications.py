"""
Order status notifications.

Messages are built here and handed to a notifier. Delivery to devices is
not part of this service: the default notifier records the message in the
log. Failures never propagate to the caller of ``notify_order_status``.
"""
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Sabri Jewellery"
ORDERS_LINK = "/profile?tab=orders"

STATUS_MESSAGES = {
    "pending": ("⏳", "Your order is pending confirmation."),
    "confirmed": ("✅", "Your order has been confirmed!"),
    "processing": ("🔄", "Your order is being processed."),
    "shipped": ("🚚", "Your order has been shipped!"),
    "delivered": ("🎉", "Your order has been delivered!"),
    "cancelled": ("❌", "Your order has been cancelled."),
}


def build_order_status_message(order_id: str, status: str) -> Dict[str, Any]:
    """Title, body and data payload for an order status change."""
    emoji, text = STATUS_MESSAGES.get(status, ("📋", f"Order status updated to: {status}"))
    return {
        "title": f"{emoji} Order #{order_id} Update",
        "body": text,
        "data": {
            "orderId": order_id,
            "type": "order_status",
            "status": status,
            "link": ORDERS_LINK,
        },
    }


class LoggingNotifier:
    """Notifier that only logs what would be sent."""

    async def send(self, token: str, message: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"🔔 Notification for token {token[:8]}...: {message['title']}")
        return {"success": True}


_notifier = LoggingNotifier()


def get_notifier() -> LoggingNotifier:
    """FastAPI dependency returning the active notifier."""
    return _notifier


async def notify_order_status(
    notifier: Any,
    db: AsyncIOMotorDatabase,
    order: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Tell the order's customer about a status change, if they have a device token.

    Returns:
        The notifier's result, or None when nothing was sent or sending failed
    """
    try:
        user = order.get("user")
        user_id = user.get("_id") if isinstance(user, dict) else user
        if not isinstance(user_id, ObjectId):
            return None

        customer = await db.users.find_one({"_id": user_id}, {"fcmToken": 1})
        token = (customer or {}).get("fcmToken")
        if not token:
            logger.debug(f"No device token for order {order.get('orderId')}, skipping notification")
            return None

        message = build_order_status_message(order.get("orderId", ""), order.get("status", ""))
        return await notifier.send(token, message)

    except Exception as e:
        logger.error(f"❌ Order notification failed for {order.get('orderId')}: {e}")
        return None
