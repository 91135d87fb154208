# Repository pattern: abstract data access

from catalog_graphql.db.repositories.search_term_repository import SearchTermRepository

__all__ = ["SearchTermRepository"]
