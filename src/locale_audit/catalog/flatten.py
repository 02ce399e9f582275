"""Flattening of parsed JSON resource trees into dotted key paths."""

from __future__ import annotations

import json
from typing import Any, Iterator

from locale_audit.model.catalog import Scalar


def join_key(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def index_key(prefix: str, index: int) -> str:
    return f"{prefix}[{index}]"


def flatten(node: Any, prefix: str = "") -> Iterator[tuple[str, Scalar]]:
    """Yield ``(flattened_key, scalar_value)`` for every scalar leaf.

    >>> list(flatten({"a": {"b": "x"}, "c": ["y"]}))
    [('a.b', 'x'), ('c[0]', 'y')]

    Empty objects and arrays produce nothing.
    """
    if isinstance(node, dict):
        for name, value in node.items():
            yield from flatten(value, join_key(prefix, name))
    elif isinstance(node, list):
        for i, value in enumerate(node):
            yield from flatten(value, index_key(prefix, i))
    elif prefix:
        yield prefix, node


def _first_wins(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for name, value in pairs:
        obj.setdefault(name, value)
    return obj


def parse_resource(text: str) -> Any:
    """Parse resource JSON keeping the *first* value of a repeated key.

    ``json.loads`` alone keeps the last one.  Raises ``ValueError`` on
    malformed input.
    """
    return json.loads(text, object_pairs_hook=_first_wins)
