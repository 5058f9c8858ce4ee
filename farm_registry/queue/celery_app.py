"""
Celery application - background jobs outside the request path.
Beat runs the expired access token purge on a fixed interval.
"""

from celery import Celery

from farm_registry.config import get_settings

settings = get_settings()

celery_app = Celery(
    "farm_registry",
    broker=settings.celery_broker_url,
    include=["farm_registry.queue.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    task_ignore_result=True,
    task_time_limit=300,
    task_soft_time_limit=60,
    worker_prefetch_multiplier=1,
    beat_schedule={
        "purge-expired-access-tokens": {
            "task": "farm_registry.queue.tasks.purge_expired_tokens_task",
            "schedule": float(settings.token_purge_interval_seconds),
        },
    },
)
