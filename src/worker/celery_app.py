"""Celery application for running critiques outside the API process."""

from celery import Celery

from config import settings

celery_app = Celery(
    "critic",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

celery_app.conf.update(
    # Job results are report dicts read back by GET /jobs/{id}
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    task_routes={
        "worker.tasks.*": {"queue": "critiques"},
    },

    # A critique holds its worker for the whole simulated delay
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,

    # Nothing is persisted, so finished reports only live as long as the result
    result_expires=86400,

    broker_connection_retry_on_startup=True,
)

celery_app.autodiscover_tasks(["worker"])
