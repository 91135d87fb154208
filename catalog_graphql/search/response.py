"""Search engine response - documents, facet counts, stats and debug info."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DocumentField:
    name: str
    value: Any


@dataclass
class Document:
    fields: list[DocumentField] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Document":
        return cls(fields=[DocumentField(name, value) for name, value in data.items()])

    def get(self, name: str, default: Any = None) -> Any:
        for doc_field in self.fields:
            if doc_field.name == name:
                return doc_field.value
        return default


@dataclass
class SearchResponse:
    num_found: int = 0
    current_page: int = 1
    documents: list[Document] = field(default_factory=list)
    # attribute code -> {value id: count}
    facets: dict[str, dict[Any, int]] = field(default_factory=dict)
    # engine stats field name -> {"min": .., "max": .., ...}
    stats: dict[str, dict[str, Any]] = field(default_factory=dict)
    debug_info: dict[str, Any] = field(default_factory=dict)
