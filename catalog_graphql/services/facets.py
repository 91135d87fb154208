"""Category-driven facet and stats attributes, configured per category id."""

from typing import Any

from catalog_graphql.config import Settings
from catalog_graphql.search.fields import field_for_attribute
from catalog_graphql.search.query import Field


class CategoryFacets:
    def __init__(self, settings: Settings):
        self.settings = settings

    def facet_fields_for_category(self, category_id: Any) -> list[Field]:
        codes = self.settings.category_facets.get(str(category_id), [])
        return [field_for_attribute(code) for code in codes]

    def stats_fields_for_category(self, category_id: Any) -> list[Field]:
        codes = self.settings.category_stats.get(str(category_id), [])
        return [field_for_attribute(code) for code in codes]
