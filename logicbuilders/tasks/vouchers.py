# logicbuilders/tasks/vouchers.py
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, update, func, exists

from logicbuilders.celery_worker import celery_app
from logicbuilders.data.database import SessionLocal
from logicbuilders.data.models.customer import CustomerModel
from logicbuilders.data.models.notification import NotificationModel
from logicbuilders.data.models.voucher import VoucherModel
from logicbuilders.domain.enums import VoucherStatus
from logicbuilders.utils import settings
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="logicbuilders.tasks.vouchers.expire_vouchers_task")
def expire_vouchers_task():
    logger.info("Expire vouchers task started")

    db = SessionLocal()
    try:
        now = datetime.now(timezone.utc)
        result = db.execute(
            update(VoucherModel)
            .where(
                VoucherModel.status == VoucherStatus.ACTIVE.value,
                VoucherModel.is_redeemed.is_(False),
                VoucherModel.expires_at <= now,
            )
            .values(status=VoucherStatus.EXPIRED.value)
            .execution_options(synchronize_session=False)
        )
        db.commit()

        logger.info(f"Expired {result.rowcount} vouchers")
        return result.rowcount
    finally:
        db.close()


@celery_app.task(name="logicbuilders.tasks.vouchers.notify_vouchers_available_task")
def notify_vouchers_available_task():
    """Remind users holding usable vouchers, at most once per reminder window."""
    logger.info("Voucher reminder task started")

    db = SessionLocal()
    try:
        now = datetime.now(timezone.utc)
        since = now - timedelta(days=settings.VOUCHER_REMINDER_DAYS)

        recently_notified = exists().where(
            NotificationModel.user_id == CustomerModel.user_id,
            NotificationModel.notification_type == "vouchers_available",
            NotificationModel.created_at > since,
        )

        rows = db.execute(
            select(CustomerModel.user_id, func.count(VoucherModel.id))
            .join(VoucherModel, VoucherModel.customer_id == CustomerModel.id)
            .where(
                VoucherModel.status == VoucherStatus.ACTIVE.value,
                VoucherModel.is_redeemed.is_(False),
                VoucherModel.expires_at > now,
                ~recently_notified,
            )
            .group_by(CustomerModel.user_id)
        ).all()

        for user_id, voucher_count in rows:
            db.add(
                NotificationModel(
                    user_id=user_id,
                    notification_text=(
                        f"You have {voucher_count} active voucher(s) available! "
                        "Use them in your cart before they expire."
                    ),
                    notification_type="vouchers_available",
                    category="promotions",
                    link="/account/vouchers",
                    priority="normal",
                    data={"voucher_count": voucher_count},
                )
            )
        db.commit()

        logger.info(f"Sent voucher reminders to {len(rows)} users")
        return len(rows)
    finally:
        db.close()
