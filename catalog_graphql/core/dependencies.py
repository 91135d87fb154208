"""
FastAPI dependencies - search engine, result cache and resolver wiring.
Overridden in tests to swap in an in-memory engine.
"""

from typing import Annotated

from fastapi import Depends

from catalog_graphql.cache.redis_client import ResultCache
from catalog_graphql.config import get_settings
from catalog_graphql.db.repositories.search_term_repository import SearchTermRepository
from catalog_graphql.db.session import DbSession
from catalog_graphql.events import event_manager
from catalog_graphql.search.elasticsearch_client import ElasticsearchEngine
from catalog_graphql.search.engine import AbstractSearchEngine
from catalog_graphql.services.product_resolver import ProductResolver
from catalog_graphql.services.search_term_service import SearchTermService


def get_search_engine() -> AbstractSearchEngine:
    return ElasticsearchEngine()


def get_result_cache() -> ResultCache | None:
    settings = get_settings()
    if not settings.result_cache_enabled:
        return None
    return ResultCache(settings.result_cache_ttl)


async def get_product_resolver(
    session: DbSession,
    engine: Annotated[AbstractSearchEngine, Depends(get_search_engine)],
    cache: Annotated[ResultCache | None, Depends(get_result_cache)],
) -> ProductResolver:
    """Resolver with request-scoped search term persistence."""
    return ProductResolver(
        engine=engine,
        settings=get_settings(),
        event_manager=event_manager,
        cache=cache,
        search_terms=SearchTermService(SearchTermRepository(session)),
    )


ProductResolverDep = Annotated[ProductResolver, Depends(get_product_resolver)]
