"""
GraphQL schema - `products` query backed by the product resolver.
Output field names stay snake_case; paging arguments are camelCase.
"""

from typing import Annotated, Optional

import strawberry
from strawberry.scalars import JSON
from strawberry.schema.config import StrawberryConfig
from strawberry.types import Info

from catalog_graphql.graphql.context import ProductsContext
from catalog_graphql.graphql.selection import field_selection
from catalog_graphql.graphql.types import ProductSortInput, ProductsPayload

# items { sku } and similar nested selections
SELECTION_DEPTH = 3


@strawberry.type
class Query:
    @strawberry.field(description="Search and filter catalog products.")
    async def products(
        self,
        info: Info[ProductsContext, None],
        search: Optional[str] = None,
        filter_: Annotated[Optional[JSON], strawberry.argument(name="filter")] = None,
        sort: Optional[ProductSortInput] = None,
        page_size: Annotated[Optional[int], strawberry.argument(name="pageSize")] = None,
        current_page: Annotated[Optional[int], strawberry.argument(name="currentPage")] = None,
        redirect: Optional[bool] = None,
        debug: Optional[bool] = None,
    ) -> ProductsPayload:
        context = info.context
        resolver = context.resolver
        args = {
            "search": search,
            "filter": filter_,
            "sort": sort.to_args() if sort else None,
            "pageSize": page_size,
            "currentPage": current_page,
            "redirect": redirect,
            "debug": debug,
        }
        args = {k: v for k, v in args.items() if v is not None}

        if search and context.search_term is None and resolver.search_terms is not None:
            context.search_term = await resolver.search_terms.register(search, resolver.settings.store_id)

        result = await resolver.resolve(
            field=info.field_name,
            context=context,
            info=info,
            selection=field_selection(info, SELECTION_DEPTH),
            value=None,
            args=args,
        )
        return ProductsPayload.from_result(result)


schema = strawberry.Schema(query=Query, config=StrawberryConfig(auto_camel_case=False))
