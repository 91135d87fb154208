"""
Product resolver - GraphQL arguments in, catalog payload out.
Builds an engine query from search text, filters, sort and paging, runs it
through the search engine and reshapes the response into items, facets,
stats and page info. Event hooks fire at each stage so host code can adjust
args, query or result without subclassing.
"""

import json
import logging
import math
from typing import Any

from catalog_graphql import events
from catalog_graphql.cache.redis_client import ResultCache
from catalog_graphql.config import Settings, get_settings
from catalog_graphql.core.exceptions import GraphQLInputError
from catalog_graphql.events import EventManager, ResolveRequest, ResultHolder, SortSpec
from catalog_graphql.search.engine import AbstractSearchEngine
from catalog_graphql.search.fields import field_for_attribute, field_name_from_response, filter_field
from catalog_graphql.search.parser import parse_search_text
from catalog_graphql.search.query import CONDITION_TYPES, SORT_DIRECTIONS, Field, Query
from catalog_graphql.search.response import Document, SearchResponse
from catalog_graphql.services.facets import CategoryFacets
from catalog_graphql.services.search_term_service import SearchTermService

logger = logging.getLogger(__name__)

PRODUCT_OBJECT_TYPE = "product"
STATUS_ENABLED = 1
VISIBILITY_NOT_VISIBLE = 1

# filter argument shorthand -> attribute code
SHORTHAND_FILTERS = {"skus": "sku", "ids": "id"}


class ProductResolver:
    """Resolves the `products` GraphQL field against a search engine."""

    def __init__(
        self,
        engine: AbstractSearchEngine,
        settings: Settings | None = None,
        event_manager: EventManager | None = None,
        cache: ResultCache | None = None,
        search_terms: SearchTermService | None = None,
    ):
        self.engine = engine
        self.settings = settings or get_settings()
        self.events = event_manager if event_manager is not None else events.event_manager
        self.cache = cache
        self.search_terms = search_terms
        self.facets = CategoryFacets(self.settings)

    async def resolve(
        self,
        field: Any,
        context: Any,
        info: Any,
        selection: dict[str, Any],
        value: Any = None,
        args: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Run a product search.

        Args:
            field: Resolved GraphQL field name (passed through to observers)
            context: Request context; may carry `args` and `search_term`, receives
                `products_args` and `products`
            info: Host resolve info (passed through to observers)
            selection: Requested sub-fields as nested ``{name: True | {...}}``
            value: Parent value
            args: GraphQL arguments (`search`, `filter`, `sort`, `pageSize`,
                `currentPage`, `redirect`, `debug`)

        Raises:
            GraphQLInputError: Neither `search` nor `filter` given, or an invalid argument
            SearchEngineError: The engine failed
        """
        args = self.merge_context_args(context, args)

        request = ResolveRequest(field=field, context=context, info=info, value=value, args=args)
        self.events.dispatch(events.RESOLVE_BEFORE, resolve=request)
        args = request.args or {}

        search = args.get("search")
        if args.get("redirect") or search == "":
            return {"items": [], "total_count": 0}

        if search is None and args.get("filter") is None:
            raise GraphQLInputError("'search' or 'filter' input argument is required.")

        debug = bool(args.get("debug"))

        query = Query(self.engine)
        self.handle_filters(query, args)
        self.handle_sort(query, args)
        self.handle_facets(query, args)

        if self.is_sku_only_selection(selection):
            max_page_size = self.settings.sku_only_max_page_size
            query.add_fields_to_select([field_for_attribute("sku")])
        else:
            self.handle_fields_to_select(query, selection)
            max_page_size = self.settings.max_page_size

        page_size = args.get("pageSize")
        if page_size is not None and page_size < 1:
            raise GraphQLInputError("pageSize value must be greater than 0.")
        query.set_page_size(page_size if page_size is not None and page_size < max_page_size else max_page_size)

        current_page = args.get("currentPage")
        if current_page is not None and current_page < 1:
            raise GraphQLInputError("currentPage value must be greater than 0.")
        query.set_current_page(current_page or 1)

        if search:
            # search-term bookkeeping needs the hit count even when the client did not ask for it
            selection = {**selection, "total_count": True}
            query.set_query_text(parse_search_text(search, self.settings.search_max_length))

        result = await self.fetch_result(query, info, args, debug)

        if search and selection.get("total_count") and result.get("total_count") is not None:
            await self.record_search_term(context, result["total_count"])

        holder = ResultHolder(result=result)
        self.events.dispatch(events.RESULT_RETURN_BEFORE, result=holder)
        result = holder.result

        args_filter = args.get("filter")
        if isinstance(args_filter, dict) and args_filter.get("ids") and result.get("items"):
            result["items"] = self.sort_items_by_ids(result["items"], self.ids_from_condition(args_filter["ids"]))

        # Exposed for eager loading of related fields
        setattr(context, "products_args", args)
        setattr(context, "products", result)

        return result

    @staticmethod
    def merge_context_args(context: Any, args: dict[str, Any] | None) -> dict[str, Any]:
        """Context args fill in missing call args, or replace them when `overwrite_args` is set."""
        args = dict(args or {})
        context_args = getattr(context, "args", None)
        if context_args is None:
            return args
        if context_args.get("overwrite_args"):
            return {**args, **context_args}
        return {**context_args, **args}

    async def fetch_result(self, query: Query, info: Any, args: dict[str, Any], debug: bool) -> dict[str, Any]:
        # key the cache on the query as observers left it
        self.events.dispatch(events.RESPONSE_BEFORE, query=query, info=info, args=args)

        cache_key = None
        if self.cache is not None and self.settings.result_cache_enabled and not debug:
            cache_key = self.cache.key_for(query.to_dict(), searching=bool(query.query_text))
            cached = await self.cache.get(cache_key)
            if cached is not None:
                logger.debug("result cache hit %s", cache_key)
                return cached

        response = await query.get_response()
        self.events.dispatch(events.RESPONSE_AFTER, response=response)

        result = self.prepare_result_data(response, debug, query.page_size)
        if cache_key is not None:
            await self.cache.set(cache_key, result)
        return result

    # --- query building ---

    def handle_filters(self, query: Query, args: dict[str, Any]) -> None:
        query.add_filters([
            [filter_field("store_id", self.settings.store_id)],
            [filter_field("object_type", PRODUCT_OBJECT_TYPE)],
        ])

        args_filter = args.get("filter")
        if not isinstance(args_filter, dict) or args_filter.get("skus") is None:
            query.add_filter(filter_field("visibility", self.prepare_filter_value({"gt": VISIBILITY_NOT_VISIBLE})))

        self.add_out_of_stock_filter(query)

        if isinstance(args_filter, dict):
            filters = self.prepare_filters(args_filter)
            if filters:
                query.add_filters(filters)

        self.events.dispatch(events.FILTERS_ADD_AFTER, query=query, args=args)

    def add_out_of_stock_filter(self, query: Query) -> None:
        if not self.settings.show_out_of_stock_products:
            query.add_filter(filter_field("status", STATUS_ENABLED))

    def prepare_filters(self, args_filter: dict[str, Any]) -> list[Field]:
        """Filter argument -> filter fields. `skus` and `ids` are shorthands for conditions on sku/id."""
        fields = []
        for code, condition in args_filter.items():
            if condition is None:
                continue
            name = SHORTHAND_FILTERS.get(code, code)
            fields.append(filter_field(name, self.prepare_filter_value(condition)))
        return fields

    @staticmethod
    def prepare_filter_value(condition: Any) -> dict[str, Any]:
        if isinstance(condition, dict):
            if not condition:
                raise GraphQLInputError("Filter condition cannot be empty.")
            unknown = set(condition) - CONDITION_TYPES
            if unknown:
                raise GraphQLInputError(f"Unsupported filter condition: {', '.join(sorted(unknown))}.")
            return dict(condition)
        if isinstance(condition, (list, tuple)):
            return {"in": list(condition)}
        return {"eq": condition}

    def handle_sort(self, query: Query, args: dict[str, Any]) -> None:
        sort_args = args.get("sort") or {}
        sort_dir = "ASC"
        if sort_args.get("sort_order") in SORT_DIRECTIONS:
            sort_dir = sort_args["sort_order"]

        sort_spec = SortSpec(field=None, direction=sort_dir)
        if sort_args.get("sort_by"):
            sort_spec.field = self.prepare_sort_field(sort_args["sort_by"], sort_dir)
        elif args.get("search"):
            sort_spec.direction = "DESC"
            sort_spec.field = self.prepare_sort_field("score", sort_spec.direction)

        self.events.dispatch(events.SORT_ADD_BEFORE, sort=sort_spec)

        if sort_spec.field is not None:
            sort_spec.field.direction = sort_spec.direction
            query.add_sort(sort_spec.field)

        self.events.dispatch(events.SORT_ADD_AFTER, query=query, args=args)

    @staticmethod
    def prepare_sort_field(sort_by: str, sort_dir: str = "DESC") -> Field:
        return field_for_attribute(sort_by, sort_dir)

    def handle_facets(self, query: Query, args: dict[str, Any]) -> None:
        category_filter = query.get_filter("category_id")
        if category_filter:
            category_id = category_filter["field"].value
            if isinstance(category_id, dict):
                category_id = category_id.get("eq")
            if category_id is not None:
                query.add_facets(self.facets.facet_fields_for_category(category_id))
                query.add_stats(self.facets.stats_fields_for_category(category_id))

        for code in self.settings.base_stats:
            query.add_stat(field_for_attribute(code))

        for code in self.settings.base_facets:
            facet = field_for_attribute(code)
            if code == "price":
                # price is filtered through stats (min/max), not facet values
                facet.data["limit"] = 0
            query.add_facet(facet)

        query.add_facet(field_for_attribute("category_id"))

    @staticmethod
    def is_sku_only_selection(selection: dict[str, Any]) -> bool:
        """True when the client asks for nothing but skus (large id listings)."""
        if "items_ids" in selection:
            return True
        items = selection.get("items")
        if not isinstance(items, dict):
            return False
        limit = 2 if "__typename" in items else 1
        return len(items) <= limit and "sku" in items

    def handle_fields_to_select(self, query: Query, selection: dict[str, Any]) -> None:
        query.add_fields_to_select(
            [field_for_attribute(code) for code in self.parse_query_fields(selection) if not code.startswith("__")]
        )

    @staticmethod
    def parse_query_fields(selection: dict[str, Any]) -> list[str]:
        items = selection.get("items")
        return list(items) if isinstance(items, dict) else []

    # --- result shaping ---

    def prepare_result_data(self, response: SearchResponse, debug: bool, page_size: int) -> dict[str, Any]:
        debug_info: dict[str, Any] = {}
        if debug:
            raw = response.debug_info or {}
            debug_info = dict(raw.get("params") or {})
            debug_info["code"] = raw.get("code", 0)
            debug_info["message"] = raw.get("message", "")
            debug_info["uri"] = raw.get("uri", "")

        products = self.get_products(response.documents)
        return {
            "total_count": response.num_found,
            "items_ids": products["items_ids"],
            "items": products["items"],
            "page_info": {
                "page_size": len(response.documents),
                "current_page": response.current_page,
                "total_pages": math.ceil(response.num_found / page_size) if page_size else 0,
            },
            "facets": self.prepare_facets(response.facets),
            "stats": self.prepare_stats(response.stats),
            "debug_info": debug_info,
        }

    def get_products(self, documents: list[Document]) -> dict[str, list]:
        items = []
        items_ids = []
        for document in documents:
            self.events.dispatch(events.DOCUMENT_BEFORE, document=document)

            product_data: dict[str, Any] = {}
            for doc_field in document.fields:
                name, value = doc_field.name, doc_field.value
                if name == "sku":
                    items_ids.append(value)
                if name == "inventory_sources":
                    value = self.prepare_inventory_sources_value(value)
                product_data[name] = value

            self.events.dispatch(events.DOCUMENT_AFTER, product_data=product_data)
            items.append(product_data)
        return {"items": items, "items_ids": items_ids}

    @staticmethod
    def prepare_inventory_sources_value(value: Any) -> list | dict:
        """Inventory sources are stored as a JSON string; anything unreadable becomes []."""
        if isinstance(value, (list, dict)):
            return value
        if not isinstance(value, str):
            return []
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.debug("Unreadable inventory_sources value %r", value)
            return []
        return decoded if decoded and isinstance(decoded, (list, dict)) else []

    @staticmethod
    def prepare_facets(facets: dict[str, dict[Any, int]]) -> list[dict[str, Any]]:
        prepared_facets = []
        for code, values in facets.items():
            prepared_values = [
                {"value_id": value_id, "count": count}
                for value_id, count in values.items()
                if value_id not in (None, "", 0, "0")
            ]
            if prepared_values:
                prepared_facets.append({"code": code, "values": prepared_values})
        return prepared_facets

    @staticmethod
    def prepare_stats(stats: dict[str, dict[str, Any]]) -> list[dict[str, Any]]:
        return [{"code": field_name_from_response(name), "values": values} for name, values in stats.items()]

    async def record_search_term(self, context: Any, total_count: int) -> None:
        term = getattr(context, "search_term", None)
        if term is None or getattr(term, "id", None) is None or self.search_terms is None:
            return
        term.num_results = total_count
        await self.search_terms.update_num_results(term)

    @staticmethod
    def ids_from_condition(condition: Any) -> list[Any]:
        if isinstance(condition, dict):
            condition = condition.get("in", condition.get("eq", []))
        if isinstance(condition, (list, tuple)):
            return list(condition)
        return [condition]

    @staticmethod
    def sort_items_by_ids(items: list[dict[str, Any]], ids: list[Any]) -> list[dict[str, Any]]:
        """Order items as listed in the `ids` filter; unknown ids go last."""
        positions = {str(item_id): pos for pos, item_id in enumerate(ids)}
        return sorted(items, key=lambda item: positions.get(str(item.get("id")), len(ids)))
