"""
Field-selection introspection - which sub-fields the client asked for.
Turns strawberry selections (fragments included) into ``{name: True | {...}}``.
"""

from typing import Any

from strawberry.types import Info
from strawberry.types.nodes import FragmentSpread, InlineFragment, SelectedField

Selection = SelectedField | FragmentSpread | InlineFragment


def _collect(selections: list[Selection], depth: int) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for node in selections:
        if isinstance(node, SelectedField):
            if depth > 0 and node.selections:
                nested = _collect(node.selections, depth - 1)
                existing = result.get(node.name)
                result[node.name] = {**existing, **nested} if isinstance(existing, dict) else nested
            else:
                result.setdefault(node.name, True)
        else:
            # Fragment fields belong to the enclosing level
            for name, value in _collect(node.selections, depth).items():
                existing = result.get(name)
                if isinstance(existing, dict) and isinstance(value, dict):
                    result[name] = {**existing, **value}
                else:
                    result[name] = value
    return result


def field_selection(info: Info, depth: int = 1) -> dict[str, Any]:
    """Sub-fields of the field being resolved, nested up to `depth` levels below it."""
    selected = info.selected_fields
    if not selected:
        return {}
    return _collect(selected[0].selections, depth)
