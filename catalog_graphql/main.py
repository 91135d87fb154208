"""
FastAPI application entry point.
Mounts the GraphQL endpoint, REST health checks and Prometheus metrics;
ensures the products index on startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app
from strawberry.fastapi import GraphQLRouter

from catalog_graphql.api.v1.router import api_router
from catalog_graphql.cache.redis_client import close_redis
from catalog_graphql.config import get_settings
from catalog_graphql.core.logging import configure_logging
from catalog_graphql.graphql.context import get_context
from catalog_graphql.graphql.schema import schema
from catalog_graphql.search.elasticsearch_client import close_elasticsearch, ensure_products_index

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: ensure the products index when ES is available. Shutdown: close clients."""
    try:
        await ensure_products_index()
    except Exception as e:
        # ES may be down; GraphQL queries report engine errors until it is back
        logger.warning("Could not ensure products index: %s", e)
    yield
    await close_elasticsearch()
    await close_redis()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        description="Catalog product search over GraphQL, backed by Elasticsearch.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    graphql_app = GraphQLRouter(schema, context_getter=get_context, graphql_ide="graphiql" if settings.debug else None)
    app.include_router(graphql_app, prefix="/graphql")

    return app


app = create_app()
