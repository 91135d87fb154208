"""GraphQL types for the product search payload."""

from enum import Enum
from typing import Any, Optional

import strawberry
from strawberry.scalars import JSON


@strawberry.enum
class SortEnum(Enum):
    ASC = "ASC"
    DESC = "DESC"


@strawberry.input
class ProductSortInput:
    sort_by: Optional[str] = None
    sort_order: Optional[SortEnum] = None

    def to_args(self) -> dict[str, Any]:
        return {
            "sort_by": self.sort_by,
            "sort_order": self.sort_order.value if self.sort_order else None,
        }


@strawberry.type
class Product:
    id: Optional[strawberry.ID] = None
    sku: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url_key: Optional[str] = None
    price: Optional[float] = None
    special_price: Optional[float] = None
    thumbnail: Optional[str] = None
    small_image: Optional[str] = None
    category_id: Optional[list[str]] = None
    visibility: Optional[int] = None
    status: Optional[int] = None
    inventory_sources: Optional[JSON] = None

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "Product":
        product = cls(**{name: data.get(name) for name in PRODUCT_FIELDS})
        # Single-valued category ids come back as scalars
        if product.category_id is not None and not isinstance(product.category_id, list):
            product.category_id = [product.category_id]
        return product


PRODUCT_FIELDS = (
    "id",
    "sku",
    "name",
    "description",
    "url_key",
    "price",
    "special_price",
    "thumbnail",
    "small_image",
    "category_id",
    "visibility",
    "status",
    "inventory_sources",
)


@strawberry.type
class PageInfo:
    page_size: Optional[int] = None
    current_page: Optional[int] = None
    total_pages: Optional[int] = None


@strawberry.type
class FacetValue:
    value_id: str
    count: int


@strawberry.type
class Facet:
    code: str
    values: list[FacetValue]


@strawberry.type
class Stat:
    code: str
    values: JSON


@strawberry.type
class ProductsPayload:
    total_count: Optional[int] = None
    items_ids: Optional[list[str]] = None
    items: list[Product] = strawberry.field(default_factory=list)
    page_info: Optional[PageInfo] = None
    facets: list[Facet] = strawberry.field(default_factory=list)
    stats: list[Stat] = strawberry.field(default_factory=list)
    debug_info: Optional[JSON] = None

    @classmethod
    def from_result(cls, result: dict[str, Any]) -> "ProductsPayload":
        page_info = result.get("page_info")
        return cls(
            total_count=result.get("total_count"),
            items_ids=result.get("items_ids"),
            items=[Product.from_data(item) for item in result.get("items") or []],
            page_info=PageInfo(**page_info) if page_info else None,
            facets=[
                Facet(code=f["code"], values=[FacetValue(value_id=str(v["value_id"]), count=v["count"]) for v in f["values"]])
                for f in result.get("facets") or []
            ],
            stats=[Stat(code=s["code"], values=s["values"]) for s in result.get("stats") or []],
            debug_info=result.get("debug_info") or None,
        )
