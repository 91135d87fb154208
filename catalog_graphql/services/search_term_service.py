"""
Search term bookkeeping - popularity on each search, result count after it runs.
"""

import logging

from catalog_graphql.db.models.search_term import SearchTerm
from catalog_graphql.db.repositories.search_term_repository import SearchTermRepository

logger = logging.getLogger(__name__)

# Matches the search_terms.query_text column
MAX_QUERY_TEXT_LENGTH = 255


class SearchTermService:
    def __init__(self, repo: SearchTermRepository):
        self.repo = repo

    async def register(self, query_text: str, store_id: int) -> SearchTerm | None:
        """Load or create the term for this store and bump its popularity."""
        query_text = query_text.strip()[:MAX_QUERY_TEXT_LENGTH]
        if not query_text:
            return None
        term = await self.repo.get_by_text(query_text, store_id)
        if term is None:
            term = await self.repo.add(
                SearchTerm(query_text=query_text, store_id=store_id, popularity=1, num_results=0)
            )
        else:
            term.popularity += 1
            await self.repo.save(term)
        return term

    async def update_num_results(self, term: SearchTerm) -> SearchTerm:
        """Persist the result count set on the term."""
        logger.debug("search term %r: %d result(s)", term.query_text, term.num_results)
        return await self.repo.save(term)
