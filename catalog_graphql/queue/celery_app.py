"""
Celery application - product indexing off the request path.
"""

from celery import Celery
from celery.signals import setup_logging

from catalog_graphql.config import get_settings
from catalog_graphql.core.logging import configure_logging

settings = get_settings()

celery_app = Celery(
    "catalog_graphql",
    broker=settings.celery_broker_url,
    backend=settings.redis_url,
    include=["catalog_graphql.queue.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    task_track_started=True,
    task_time_limit=300,
    task_soft_time_limit=60,
    worker_prefetch_multiplier=1,
)


@setup_logging.connect
def _configure_worker_logging(**kwargs):
    configure_logging(settings.log_level)
