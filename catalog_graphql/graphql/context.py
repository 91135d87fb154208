"""
GraphQL request context - carries the resolver and per-request state.
`args` lets host code inject default (or overriding) `products` arguments;
`products_args` / `products` hold the last resolved search for eager loading.
"""

from typing import Any

from strawberry.fastapi import BaseContext

from catalog_graphql.core.dependencies import ProductResolverDep
from catalog_graphql.db.models.search_term import SearchTerm
from catalog_graphql.services.product_resolver import ProductResolver


class ProductsContext(BaseContext):
    def __init__(self, resolver: ProductResolver, args: dict[str, Any] | None = None):
        super().__init__()
        self.resolver = resolver
        self.args = args
        self.search_term: SearchTerm | None = None
        self.products_args: dict[str, Any] | None = None
        self.products: dict[str, Any] | None = None


async def get_context(resolver: ProductResolverDep) -> ProductsContext:
    return ProductsContext(resolver=resolver)
