# logicbuilders/celery_worker.py
from celery import Celery

from logicbuilders.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "logicbuilders",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

#tasks must be imported explicitly so the worker registers them
celery_app.conf.imports = (
    "logicbuilders.tasks.vouchers",
    "logicbuilders.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "expire-vouchers-every-minute": {
        "task": "logicbuilders.tasks.vouchers.expire_vouchers_task",
        "schedule": 60.0,
    },
    "notify-vouchers-available-daily": {
        "task": "logicbuilders.tasks.vouchers.notify_vouchers_available_task",
        "schedule": 24 * 60 * 60.0,
    },
}

celery_app.conf.timezone = "UTC"
