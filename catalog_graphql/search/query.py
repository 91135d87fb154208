"""
Engine-independent search query - what the resolver asks for, not how it is run.
The query collects filters, sort, facets, stats, selected fields and paging,
then hands them to a search engine through `execute_query`.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from catalog_graphql.search.response import SearchResponse

if TYPE_CHECKING:
    from catalog_graphql.search.engine import AbstractSearchEngine

# Condition keys accepted in a filter value dict
CONDITION_TYPES = frozenset({"eq", "neq", "in", "nin", "gt", "lt", "gteq", "lteq", "from", "to", "like"})

SORT_DIRECTIONS = ("ASC", "DESC")


@dataclass
class Field:
    """Attribute reference. Carries a filter condition, a sort direction or facet options."""

    name: str
    value: Any = None
    direction: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "direction": self.direction, "data": dict(self.data)}


@dataclass(frozen=True)
class FacetRequest:
    facets: list[Field]
    stats: list[Field]


@dataclass(frozen=True)
class Paging:
    page_size: int
    current_page: int
    text: str | None = None
    fields: list[Field] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return max(self.current_page - 1, 0) * self.page_size


class Query:
    """Mutable query builder bound to one search engine."""

    def __init__(self, engine: "AbstractSearchEngine", page_size: int = 20):
        self.engine = engine
        self.filters: dict[str, dict[str, Field]] = {}
        self.sort: list[Field] = []
        self.facets: dict[str, Field] = {}
        self.stats: dict[str, Field] = {}
        self.fields_to_select: dict[str, Field] = {}
        self.page_size = page_size
        self.current_page = 1
        self.query_text: str | None = None

    # Filters are keyed by field name; adding the same field again replaces it.
    def add_filter(self, filter_field: Field) -> "Query":
        self.filters[filter_field.name] = {"field": filter_field}
        return self

    def add_filters(self, filters: Iterable[Field | Iterable[Field]]) -> "Query":
        for item in filters:
            if isinstance(item, Field):
                self.add_filter(item)
            else:
                for nested in item:
                    self.add_filter(nested)
        return self

    def get_filter(self, name: str) -> dict[str, Field] | None:
        return self.filters.get(name)

    def add_sort(self, sort_field: Field) -> "Query":
        self.sort.append(sort_field)
        return self

    def add_facet(self, facet: Field) -> "Query":
        self.facets[facet.name] = facet
        return self

    def add_facets(self, facets: Iterable[Field]) -> "Query":
        for facet in facets:
            self.add_facet(facet)
        return self

    def add_stat(self, stat: Field) -> "Query":
        self.stats[stat.name] = stat
        return self

    def add_stats(self, stats: Iterable[Field]) -> "Query":
        for stat in stats:
            self.add_stat(stat)
        return self

    def add_fields_to_select(self, fields: Iterable[Field]) -> "Query":
        for select_field in fields:
            self.fields_to_select[select_field.name] = select_field
        return self

    def set_page_size(self, page_size: int) -> "Query":
        self.page_size = page_size
        return self

    def set_current_page(self, current_page: int) -> "Query":
        self.current_page = current_page
        return self

    def set_query_text(self, text: str | None) -> "Query":
        self.query_text = text
        return self

    def get_paging(self) -> Paging:
        return Paging(
            page_size=self.page_size,
            current_page=self.current_page,
            text=self.query_text,
            fields=list(self.fields_to_select.values()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain representation, used for cache keys and debug output."""
        return {
            "filters": {name: f["field"].to_dict() for name, f in sorted(self.filters.items())},
            "sort": [f.to_dict() for f in self.sort],
            "facets": sorted(self.facets),
            "stats": sorted(self.stats),
            "fields": sorted(self.fields_to_select),
            "page_size": self.page_size,
            "current_page": self.current_page,
            "text": self.query_text,
        }

    async def get_response(self) -> SearchResponse:
        """Run the query through the bound engine."""
        return await self.engine.execute_query(
            [f["field"] for f in self.filters.values()],
            list(self.sort),
            FacetRequest(facets=list(self.facets.values()), stats=list(self.stats.values())),
            self.get_paging(),
        )
