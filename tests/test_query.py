"""
Query builder tests - filters, facets and the bundles handed to the engine.
"""

import pytest

from catalog_graphql.search.query import Field, Paging, Query


def test_add_filters_accepts_nested_lists(search_engine):
    query = Query(search_engine)
    query.add_filters([[Field("store_id", 1)], Field("status", 1), [Field("a", 1), Field("b", 2)]])
    assert list(query.filters) == ["store_id", "status", "a", "b"]
    assert query.get_filter("status")["field"].value == 1
    assert query.get_filter("missing") is None


def test_same_filter_name_replaces(search_engine):
    query = Query(search_engine)
    query.add_filter(Field("color", {"eq": "red"}))
    query.add_filter(Field("color", {"eq": "blue"}))
    assert query.get_filter("color")["field"].value == {"eq": "blue"}


def test_paging_offset():
    assert Paging(page_size=20, current_page=3).offset == 40
    assert Paging(page_size=20, current_page=0).offset == 0


def test_to_dict_is_order_independent_for_filters(search_engine):
    first = Query(search_engine).add_filter(Field("a", 1)).add_filter(Field("b", 2))
    second = Query(search_engine).add_filter(Field("b", 2)).add_filter(Field("a", 1))
    assert first.to_dict() == second.to_dict()


@pytest.mark.asyncio
async def test_get_response_passes_bundles(search_engine):
    query = (
        Query(search_engine)
        .add_filter(Field("status", 1))
        .add_sort(Field("price", direction="DESC"))
        .add_facet(Field("color"))
        .add_stat(Field("price"))
        .add_fields_to_select([Field("sku")])
        .set_page_size(5)
        .set_current_page(2)
        .set_query_text("coat")
    )
    response = await query.get_response()

    call = search_engine.last_call
    assert response is search_engine.response
    assert [f.name for f in call["filters"]] == ["status"]
    assert [s.name for s in call["sort"]] == ["price"]
    assert [f.name for f in call["facets"].facets] == ["color"]
    assert [s.name for s in call["facets"].stats] == ["price"]
    assert call["paging"].page_size == 5
    assert call["paging"].current_page == 2
    assert call["paging"].text == "coat"
    assert [f.name for f in call["paging"].fields] == ["sku"]
