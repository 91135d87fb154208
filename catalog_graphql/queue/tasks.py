"""
Celery tasks - keep the products index in sync with the catalog.
"""

import logging

from catalog_graphql.core.exceptions import SearchEngineError
from catalog_graphql.queue.celery_app import celery_app
from catalog_graphql.search.elasticsearch_client import (
    ensure_products_index_sync,
    index_product_sync,
    remove_product_sync,
)

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def index_product_task(self, product_doc: dict):
    """Index one product document; retried while the engine is unavailable."""
    try:
        ensure_products_index_sync()
        if not index_product_sync(product_doc):
            raise SearchEngineError(f"Indexing product {product_doc.get('id')} failed")
    except SearchEngineError as exc:
        raise self.retry(exc=exc, countdown=5)


@celery_app.task(bind=True, max_retries=3)
def remove_product_task(self, product_id: int | str):
    try:
        if not remove_product_sync(product_id):
            raise SearchEngineError(f"Removing product {product_id} failed")
    except SearchEngineError as exc:
        raise self.retry(exc=exc, countdown=5)
