from celery import Celery

from docextract.config import settings

celery_app = Celery(
    "doc_extract",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    # Parsing is CPU-bound, one document per worker process at a time
    worker_prefetch_multiplier=1,
    task_time_limit=int((settings.extraction_timeout_seconds or 30) * 4),
    task_routes={
        "docextract.tasks.extraction_tasks.*": {"queue": "extraction"},
    },
    task_default_queue="extraction",
)

celery_app.autodiscover_tasks(["docextract.tasks"], related_name="extraction_tasks")
