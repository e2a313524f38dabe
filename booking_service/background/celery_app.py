"""
Celery application configuration and setup.
"""

from celery import Celery
from celery.schedules import crontab

from booking_service.config.settings import settings

celery_app = Celery(
    "booking_service",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["booking_service.background.tasks.booking_tasks"],
)

celery_app.conf.update(
    task_routes={
        "process_outbox_events_task": {"queue": "outbox"},
        "expire_pending_bookings_task": {"queue": "maintenance"},
        "cleanup_outbox_events_task": {"queue": "maintenance"},
    },
    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    worker_hijack_root_logger=False,
    # Task configuration
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,
    task_default_queue="default",
    task_soft_time_limit=60,
    task_time_limit=120,
    beat_schedule={
        "process-outbox-events": {
            "task": "process_outbox_events_task",
            "schedule": float(settings.CELERY_PROCESS_OUTBOX_INTERVAL_SECONDS),
            "options": {"queue": "outbox"},
        },
        "expire-pending-bookings": {
            "task": "expire_pending_bookings_task",
            "schedule": float(settings.CELERY_EXPIRE_BOOKINGS_INTERVAL_SECONDS),
            "options": {"queue": "maintenance"},
        },
        "cleanup-outbox-events": {
            "task": "cleanup_outbox_events_task",
            "schedule": crontab(minute=0, hour=3),
            "kwargs": {"days_old": settings.OUTBOX_RETENTION_DAYS},
            "options": {"queue": "maintenance"},
        },
    },
)

if __name__ == "__main__":
    celery_app.start()
