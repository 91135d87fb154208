"""
Health checks - for load balancers, Kubernetes, and monitoring.
Liveness is process-only; readiness pings the search engine.
"""

import logging

from fastapi import APIRouter, Response, status

from catalog_graphql.config import get_settings
from catalog_graphql.search.elasticsearch_client import get_elasticsearch

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(response: Response):
    """Readiness: can the search engine take queries?"""
    try:
        es = await get_elasticsearch()
        engine_up = bool(await es.ping())
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        engine_up = False
    if not engine_up:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "unavailable", "search_engine": False}
    return {"status": "ready", "search_engine": True}
