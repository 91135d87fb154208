"""
In-process event hooks around the product resolver.
Observers are plain callables registered by event name; they receive the
event data as keyword arguments and may mutate the holders passed in.
Observer errors propagate to the resolver caller.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from catalog_graphql.search.query import Field

logger = logging.getLogger(__name__)

RESOLVE_BEFORE = "product_resolver_resolve_before"
FILTERS_ADD_AFTER = "product_resolver_filters_add_after"
SORT_ADD_BEFORE = "product_resolver_sort_add_before"
SORT_ADD_AFTER = "product_resolver_sort_add_after"
RESPONSE_BEFORE = "product_resolver_response_before"
RESPONSE_AFTER = "product_resolver_response_after"
DOCUMENT_BEFORE = "product_resolver_document_before"
DOCUMENT_AFTER = "product_resolver_document_after"
RESULT_RETURN_BEFORE = "product_resolver_result_return_before"

Observer = Callable[..., None]


@dataclass
class ResolveRequest:
    """Resolver input; observers may replace `args` or `value`."""

    field: Any
    context: Any
    info: Any
    value: Any
    args: dict[str, Any]


@dataclass
class SortSpec:
    field: Field | None
    direction: str


@dataclass
class ResultHolder:
    result: dict[str, Any]


class EventManager:
    def __init__(self):
        self._observers: dict[str, list[Observer]] = defaultdict(list)

    def subscribe(self, name: str, observer: Observer) -> None:
        self._observers[name].append(observer)

    def unsubscribe(self, name: str, observer: Observer) -> None:
        if observer in self._observers.get(name, []):
            self._observers[name].remove(observer)

    def dispatch(self, name: str, **data: Any) -> None:
        observers = list(self._observers.get(name, ()))
        if observers:
            logger.debug("dispatch %s to %d observer(s)", name, len(observers))
        for observer in observers:
            observer(**data)


# Process-wide manager used by the GraphQL layer
event_manager = EventManager()
