# logicbuilders/services/notification_service.py
from decimal import Decimal

from logicbuilders.celery_worker import celery_app
from logicbuilders.data.database import SessionLocal
from logicbuilders.data.models.notification import NotificationModel
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Customer notifications.
    Writes happen in a Celery task, outside the request that triggered them.
    """

    @staticmethod
    def send_order_notification(
        user_id: int,
        order_id: int,
        coupon_code: str | None = None,
        discount: Decimal | None = None,
        total_items: int = 0,
    ):
        #the order is already committed here; a broker outage must not fail the request
        try:
            send_order_notification_task.delay(
                user_id,
                order_id,
                coupon_code,
                str(discount) if discount is not None else None,
                total_items,
            )
        except Exception as e:
            logger.warning(f"Could not queue notification for order {order_id}: {e}")


def build_order_message(order_id: int, coupon_code: str | None, discount: str | None) -> str:
    message = f"Order #{order_id} placed successfully!"
    if coupon_code:
        message += f" Coupon {coupon_code} applied with ${discount} discount."
    return message + " We'll notify you when it's ready for delivery."


@celery_app.task(name="logicbuilders.services.notification_service.send_order_notification_task")
def send_order_notification_task(
    user_id: int,
    order_id: int,
    coupon_code: str | None = None,
    discount: str | None = None,
    total_items: int = 0,
):
    db = SessionLocal()
    try:
        db.add(
            NotificationModel(
                user_id=user_id,
                notification_text=build_order_message(order_id, coupon_code, discount),
                notification_type="order_placed",
                category="orders",
                link="/account/orders",
                priority="normal",
                data={
                    "order_id": order_id,
                    "coupon_used": coupon_code,
                    "discount_amount": discount,
                    "total_items": total_items,
                },
            )
        )
        db.commit()
        logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed")
    finally:
        db.close()

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
