"""
Search term repository - lookups by query text within a store.
"""

from sqlalchemy import select

from catalog_graphql.db.models.search_term import SearchTerm
from catalog_graphql.db.repositories.base_repository import BaseRepository


class SearchTermRepository(BaseRepository[SearchTerm]):
    def __init__(self, session):
        super().__init__(session, SearchTerm)

    async def get_by_text(self, query_text: str, store_id: int) -> SearchTerm | None:
        result = await self.session.execute(
            select(SearchTerm).where(SearchTerm.query_text == query_text, SearchTerm.store_id == store_id)
        )
        return result.scalar_one_or_none()
