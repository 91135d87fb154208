"""
Elasticsearch client - concrete search engine behind the product resolver.
Translates the engine-independent query into ES DSL and the ES response back.
Sync helpers used by Celery workers (no event loop in fork).
"""

import logging
from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch, Elasticsearch, TransportError

from catalog_graphql.config import get_settings
from catalog_graphql.core.exceptions import SearchEngineError
from catalog_graphql.search.engine import AbstractSearchEngine
from catalog_graphql.search.query import FacetRequest, Field, Paging
from catalog_graphql.search.response import Document, SearchResponse

logger = logging.getLogger(__name__)

settings = get_settings()

# Full-text fields with boosts
TEXT_FIELDS = ["name^3", "sku^2", "description"]
DEFAULT_FACET_LIMIT = 100
FACET_SUFFIX = "_facet"
STATS_SUFFIX = "_stats"
# sku-only listings page through up to 50000 documents
MAX_RESULT_WINDOW = 50000
# text attributes sort and aggregate on their keyword subfield
KEYWORD_SUBFIELDS = {"name": "name.keyword", "description": "description.keyword"}

_es_client: AsyncElasticsearch | None = None


def _es_client_options() -> dict:
    """Build Elasticsearch client options from settings (supports HTTPS + basic auth in URL)."""
    url = settings.elasticsearch_url
    basic_auth = None
    if "@" in url and "://" in url:
        from urllib.parse import urlparse

        parsed = urlparse(url)
        if parsed.username and parsed.password:
            basic_auth = (parsed.username, parsed.password)
        # Client takes credentials separately
        netloc = parsed.hostname or ""
        if parsed.port:
            netloc += f":{parsed.port}"
        url = f"{parsed.scheme}://{netloc}"
    opts = {
        "hosts": [url],
        "verify_certs": settings.elasticsearch_verify_certs,
        "request_timeout": 30,
    }
    if basic_auth:
        opts["basic_auth"] = basic_auth
    return opts


async def get_elasticsearch() -> AsyncElasticsearch:
    """Shared async client."""
    global _es_client
    if _es_client is None:
        _es_client = AsyncElasticsearch(**_es_client_options())
    return _es_client


async def close_elasticsearch() -> None:
    global _es_client
    if _es_client is not None:
        await _es_client.close()
        _es_client = None


def _products_index_mappings() -> dict:
    """Mapping for the products index (shared by async and sync create)."""
    return {
        "dynamic_templates": [
            {"strings_as_keywords": {"match_mapping_type": "string", "mapping": {"type": "keyword"}}},
        ],
        "properties": {
            "id": {"type": "keyword"},
            "sku": {"type": "keyword", "copy_to": "sku_text"},
            "sku_text": {"type": "text"},
            "name": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
            "description": {"type": "text", "fields": {"keyword": {"type": "keyword", "ignore_above": 256}}},
            "url_key": {"type": "keyword"},
            "price": {"type": "double"},
            "special_price": {"type": "double"},
            "category_id": {"type": "keyword"},
            "store_id": {"type": "integer"},
            "object_type": {"type": "keyword"},
            "visibility": {"type": "integer"},
            "status": {"type": "integer"},
            "thumbnail": {"type": "keyword", "index": False},
            "small_image": {"type": "keyword", "index": False},
            "inventory_sources": {"type": "keyword", "index": False},
        }
    }


def _products_index_settings() -> dict:
    return {"index": {"number_of_replicas": 0, "max_result_window": MAX_RESULT_WINDOW}}


async def ensure_products_index() -> None:
    """Create products index with mapping if not exists."""
    es = await get_elasticsearch()
    if not await es.indices.exists(index=settings.products_index):
        await es.indices.create(
            index=settings.products_index,
            settings=_products_index_settings(),
            mappings=_products_index_mappings(),
        )
        logger.info("Created index %s", settings.products_index)


def _condition_clauses(name: str, condition: Any) -> tuple[list[dict], list[dict]]:
    """Translate one filter condition into (filter, must_not) clauses."""
    if not isinstance(condition, dict):
        condition = {"eq": condition}
    must: list[dict] = []
    must_not: list[dict] = []
    range_spec: dict[str, Any] = {}
    for kind, value in condition.items():
        if kind == "eq":
            must.append({"terms": {name: value}} if isinstance(value, list) else {"term": {name: value}})
        elif kind == "neq":
            must_not.append({"term": {name: value}})
        elif kind == "in":
            must.append({"terms": {name: list(value)}})
        elif kind == "nin":
            must_not.append({"terms": {name: list(value)}})
        elif kind == "like":
            must.append({"wildcard": {name: {"value": str(value).replace("%", "*"), "case_insensitive": True}}})
        elif kind in ("gt", "lt"):
            range_spec[kind] = value
        elif kind in ("gteq", "from"):
            range_spec["gte"] = value
        elif kind in ("lteq", "to"):
            range_spec["lte"] = value
        else:
            raise SearchEngineError(f"Unsupported condition '{kind}' for field '{name}'")
    if range_spec:
        must.append({"range": {name: range_spec}})
    return must, must_not


def _keyword_field(name: str) -> str:
    return KEYWORD_SUBFIELDS.get(name, name)


def build_search_body(filters: list[Field], sort: list[Field], facets: FacetRequest, paging: Paging) -> dict:
    """ES search request as keyword arguments for `search()`."""
    must: list[dict] = []
    must_not: list[dict] = []
    for filter_field in filters:
        f_must, f_must_not = _condition_clauses(filter_field.name, filter_field.value)
        must.extend(f_must)
        must_not.extend(f_must_not)

    bool_query: dict[str, Any] = {"filter": must}
    if must_not:
        bool_query["must_not"] = must_not
    if paging.text:
        bool_query["must"] = [
            {"multi_match": {"query": paging.text, "fields": TEXT_FIELDS, "fuzziness": "AUTO"}}
        ]

    aggs: dict[str, Any] = {}
    for facet in facets.facets:
        limit = facet.data.get("limit", DEFAULT_FACET_LIMIT)
        # limit 0 asks for no values (price facets come from stats)
        if limit == 0:
            continue
        aggs[facet.name + FACET_SUFFIX] = {"terms": {"field": _keyword_field(facet.name), "size": limit}}
    for stat in facets.stats:
        aggs[stat.name + STATS_SUFFIX] = {"stats": {"field": stat.name}}

    body: dict[str, Any] = {
        "query": {"bool": bool_query},
        "from_": paging.offset,
        "size": paging.page_size,
        "track_total_hits": True,
    }
    if sort:
        body["sort"] = [{_keyword_field(s.name): {"order": (s.direction or "ASC").lower()}} for s in sort]
    if aggs:
        body["aggs"] = aggs
    if paging.fields:
        body["source"] = [f.name for f in paging.fields]
    return body


def parse_search_response(body: dict, paging: Paging) -> SearchResponse:
    hits = body["hits"]["hits"]
    total = body["hits"].get("total")
    num_found = total.get("value", len(hits)) if isinstance(total, dict) else len(hits)

    facets: dict[str, dict[Any, int]] = {}
    stats: dict[str, dict[str, Any]] = {}
    for name, agg in (body.get("aggregations") or {}).items():
        if name.endswith(FACET_SUFFIX):
            facets[name[: -len(FACET_SUFFIX)]] = {b["key"]: b["doc_count"] for b in agg.get("buckets", [])}
        elif name.endswith(STATS_SUFFIX):
            stats[name] = {k: agg.get(k) for k in ("min", "max", "avg", "sum", "count")}

    return SearchResponse(
        num_found=num_found,
        current_page=paging.current_page,
        documents=[Document.from_mapping(hit.get("_source") or {}) for hit in hits],
        facets=facets,
        stats=stats,
    )


class ElasticsearchEngine(AbstractSearchEngine):
    """Runs catalog queries against the products index."""

    def __init__(self, client: AsyncElasticsearch | None = None, index: str | None = None):
        self._client = client
        self.index = index or settings.products_index

    async def _get_client(self) -> AsyncElasticsearch:
        if self._client is None:
            self._client = await get_elasticsearch()
        return self._client

    async def execute_query(self, filters, sort, facets, paging) -> SearchResponse:
        body = build_search_body(filters, sort, facets, paging)
        es = await self._get_client()
        try:
            response = await es.search(index=self.index, **body)
        except ApiError as e:
            logger.warning("search failed: index=%s status=%s error=%s", self.index, e.meta.status, e)
            raise SearchEngineError(str(e), status=e.meta.status) from e
        except TransportError as e:
            logger.warning("search engine unreachable: index=%s error=%s", self.index, e)
            raise SearchEngineError(str(e)) from e

        # Response may be ObjectApiResponse; support both .body and dict access
        raw = getattr(response, "body", response)
        result = parse_search_response(raw, paging)
        params = {("from" if k == "from_" else k): v for k, v in body.items()}
        result.debug_info = {
            "params": params,
            "code": 200,
            "message": "OK",
            "uri": f"/{self.index}/_search",
        }
        if result.num_found == 0:
            logger.info("search: query text=%r returned 0 hits", paging.text)
        return result


# --- Sync API for Celery (workers run in sync context; async + new_event_loop fails after fork) ---

def _sync_es_client() -> Elasticsearch:
    """New sync client per call (safe in forked Celery worker)."""
    return Elasticsearch(**_es_client_options())


def ensure_products_index_sync() -> None:
    """Create products index if not exists. Call from Celery task."""
    try:
        es = _sync_es_client()
        if not es.indices.exists(index=settings.products_index):
            es.indices.create(
                index=settings.products_index,
                settings=_products_index_settings(),
                mappings=_products_index_mappings(),
            )
    except Exception as e:
        logger.warning("ensure_products_index_sync failed: %s", e)


def index_product_sync(doc: dict[str, Any]) -> bool:
    """Index a single product document. ES 8 requires id to be str."""
    try:
        es = _sync_es_client()
        payload = {k: v for k, v in doc.items() if v is not None}
        es.index(index=settings.products_index, id=str(doc["id"]), document=payload)
        return True
    except Exception as e:
        logger.warning("index_product_sync failed for doc id=%s: %s", doc.get("id"), e)
        return False


def remove_product_sync(product_id: int | str) -> bool:
    """Remove product from search index."""
    try:
        es = _sync_es_client()
        es.options(ignore_status=404).delete(index=settings.products_index, id=str(product_id))
        return True
    except Exception as e:
        logger.warning("remove_product_sync failed for id=%s: %s", product_id, e)
        return False
