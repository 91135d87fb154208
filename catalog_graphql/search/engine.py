"""
Search engine abstraction. The resolver only talks to this interface;
ranking, query planning and storage live behind it.
"""

from abc import ABC, abstractmethod

from catalog_graphql.search.query import FacetRequest, Field, Paging
from catalog_graphql.search.response import SearchResponse


class AbstractSearchEngine(ABC):
    """Executes a built query and returns documents with facets and stats."""

    @abstractmethod
    async def execute_query(
        self,
        filters: list[Field],
        sort: list[Field],
        facets: FacetRequest,
        paging: Paging,
    ) -> SearchResponse:
        """Run one query.

        Args:
            filters: Fields whose value is a scalar or a condition dict
            sort: Fields with a direction, applied in order
            facets: Facet fields (``data["limit"]`` caps values) and stats fields
            paging: Page size/number plus optional search text and fields to return

        Raises:
            SearchEngineError: When the engine rejects the query or is unreachable
        """
        raise NotImplementedError
