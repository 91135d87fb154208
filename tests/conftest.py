"""
Pytest fixtures - in-memory search engine, resolver, test DB and HTTP client.
No Elasticsearch or Redis needed: the engine is faked and the result cache disabled.
"""

from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from catalog_graphql.config import Settings
from catalog_graphql.core.dependencies import get_result_cache, get_search_engine
from catalog_graphql.db.base import Base
from catalog_graphql.db.models.search_term import SearchTerm  # noqa: F401 - register table
from catalog_graphql.db.session import get_db
from catalog_graphql.events import EventManager
from catalog_graphql.main import app
from catalog_graphql.search.engine import AbstractSearchEngine
from catalog_graphql.search.response import Document, SearchResponse
from catalog_graphql.services.product_resolver import ProductResolver


class FakeSearchEngine(AbstractSearchEngine):
    """Returns a canned response and records every query it receives."""

    def __init__(self, response: SearchResponse):
        self.response = response
        self.calls = []

    async def execute_query(self, filters, sort, facets, paging):
        self.calls.append({"filters": filters, "sort": sort, "facets": facets, "paging": paging})
        return self.response

    @property
    def last_call(self):
        return self.calls[-1]

    def filters_by_name(self):
        return {f.name: f.value for f in self.last_call["filters"]}


def make_response() -> SearchResponse:
    documents = [
        Document.from_mapping({
            "id": "10",
            "sku": "SKU-10",
            "name": "Trail Jacket",
            "price": 99.99,
            "category_id": ["12", "3"],
            "inventory_sources": '[{"source_code": "default", "quantity": 5}]',
        }),
        Document.from_mapping({
            "id": "11",
            "sku": "SKU-11",
            "name": "Rain Coat",
            "price": 149.0,
            "category_id": ["12"],
            "inventory_sources": "not json",
        }),
        Document.from_mapping({"id": "12", "sku": "SKU-12", "name": "Wool Sweater", "price": 49.0}),
    ]
    return SearchResponse(
        num_found=45,
        current_page=1,
        documents=documents,
        facets={
            "category_id": {"12": 30, "3": 15, "": 2},
            "color": {"0": 4},
        },
        stats={"price_stats": {"min": 49.0, "max": 149.0, "avg": 99.3, "sum": 297.99, "count": 3}},
        debug_info={
            "params": {"size": 20, "from": 0},
            "code": 200,
            "message": "OK",
            "uri": "/products/_search",
        },
    )


@pytest.fixture
def search_engine() -> FakeSearchEngine:
    return FakeSearchEngine(make_response())


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        store_id=2,
        category_facets={"12": ["color", "size"]},
        category_stats={"12": ["special_price"]},
    )


@pytest.fixture
def event_manager() -> EventManager:
    return EventManager()


@pytest.fixture
def resolver(search_engine, settings, event_manager) -> ProductResolver:
    return ProductResolver(engine=search_engine, settings=settings, event_manager=event_manager)


@pytest.fixture
def context():
    return SimpleNamespace(args=None, search_term=None)


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession, search_engine: FakeSearchEngine):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_search_engine] = lambda: search_engine
    app.dependency_overrides[get_result_cache] = lambda: None
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
