"""
Attribute code <-> engine field name mapping.
Facet and stats aggregations come back under suffixed names; strip them to get the attribute code.
"""

from typing import Any

from catalog_graphql.search.query import Field

# GraphQL/attribute code -> engine field
ATTRIBUTE_ALIASES = {
    "category": "category_id",
    "score": "_score",
}

RESPONSE_SUFFIXES = ("_facet", "_stats", "_f")


def engine_field_name(attribute_code: str) -> str:
    return ATTRIBUTE_ALIASES.get(attribute_code, attribute_code)


def field_for_attribute(attribute_code: str, direction: str | None = None) -> Field:
    """Field for sort, facet, stats or select use."""
    return Field(name=engine_field_name(attribute_code), direction=direction)


def filter_field(attribute_code: str, value: Any) -> Field:
    """Field carrying a filter condition (scalar or condition dict)."""
    return Field(name=engine_field_name(attribute_code), value=value)


def field_name_from_response(response_field: str) -> str:
    for suffix in RESPONSE_SUFFIXES:
        if response_field.endswith(suffix) and len(response_field) > len(suffix):
            return response_field[: -len(suffix)]
    return response_field
