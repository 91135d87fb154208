"""
Error types raised by the resolver and the search engine adapter.
"""


class CatalogGraphQLError(Exception):
    """Base error for this service."""


class GraphQLInputError(CatalogGraphQLError):
    """Invalid resolver arguments. Message is shown to the GraphQL client as-is."""


class SearchEngineError(CatalogGraphQLError):
    """The search engine rejected the query or could not be reached."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
