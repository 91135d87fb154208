"""
GraphQL `products` query tests - full request through FastAPI and strawberry.
"""

import pytest
from httpx import AsyncClient

from catalog_graphql.db.repositories.search_term_repository import SearchTermRepository

PRODUCTS_QUERY = """
query Products($search: String, $filter: JSON, $pageSize: Int, $currentPage: Int, $sort: ProductSortInput) {
  products(search: $search, filter: $filter, pageSize: $pageSize, currentPage: $currentPage, sort: $sort) {
    total_count
    items { id sku name price category_id inventory_sources }
    page_info { page_size current_page total_pages }
    facets { code values { value_id count } }
    stats { code values }
  }
}
"""


async def _post(client: AsyncClient, query: str, variables: dict | None = None) -> dict:
    response = await client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_products_filter_query(client: AsyncClient, search_engine):
    body = await _post(client, PRODUCTS_QUERY, {"filter": {"category_id": {"eq": "12"}}, "pageSize": 20})

    assert "errors" not in body
    products = body["data"]["products"]
    assert products["total_count"] == 45
    assert [item["sku"] for item in products["items"]] == ["SKU-10", "SKU-11", "SKU-12"]
    assert products["items"][0]["category_id"] == ["12", "3"]
    assert products["items"][0]["inventory_sources"] == [{"source_code": "default", "quantity": 5}]
    assert products["page_info"] == {"page_size": 3, "current_page": 1, "total_pages": 3}
    assert products["facets"][0]["code"] == "category_id"
    assert products["stats"][0] == {
        "code": "price",
        "values": {"min": 49.0, "max": 149.0, "avg": 99.3, "sum": 297.99, "count": 3},
    }

    paging = search_engine.last_call["paging"]
    assert paging.page_size == 20
    assert [f.name for f in paging.fields] == ["id", "sku", "name", "price", "category_id", "inventory_sources"]


@pytest.mark.asyncio
async def test_products_requires_search_or_filter(client: AsyncClient, search_engine):
    body = await _post(client, "{ products(pageSize: 5) { total_count } }")
    assert body["data"] is None
    assert body["errors"][0]["message"] == "'search' or 'filter' input argument is required."
    assert search_engine.calls == []


@pytest.mark.asyncio
async def test_redirect_returns_empty_payload(client: AsyncClient):
    body = await _post(client, '{ products(search: "coat", redirect: true) { total_count items { sku } } }')
    assert body["data"]["products"] == {"total_count": 0, "items": []}


@pytest.mark.asyncio
async def test_sku_only_selection_through_fragment(client: AsyncClient, search_engine):
    query = """
    query { products(filter: {color: "red"}, pageSize: 1000) { ...Skus } }
    fragment Skus on ProductsPayload { items { __typename sku } }
    """
    body = await _post(client, query)
    assert "errors" not in body
    paging = search_engine.last_call["paging"]
    assert paging.page_size == 1000
    assert [f.name for f in paging.fields] == ["sku"]


@pytest.mark.asyncio
async def test_sort_argument(client: AsyncClient, search_engine):
    await _post(client, PRODUCTS_QUERY, {"filter": {"color": "red"}, "sort": {"sort_by": "price", "sort_order": "DESC"}})
    [sort] = search_engine.last_call["sort"]
    assert (sort.name, sort.direction) == ("price", "DESC")


@pytest.mark.asyncio
async def test_search_registers_search_term(client: AsyncClient, session, search_engine):
    body = await _post(client, PRODUCTS_QUERY, {"search": "rain coat"})
    assert "errors" not in body
    assert search_engine.last_call["paging"].text == "rain coat"

    term = await SearchTermRepository(session).get_by_text("rain coat", 1)
    assert term is not None
    assert term.popularity == 1
    assert term.num_results == 45
