"""Additive JSON resource patching.

``apply`` inserts one dotted key into resource text and returns the new
text.  It never raises: well-formed text is edited structurally, text the
JSON parser rejects gets a best-effort flat insertion, anything else is
returned unchanged.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

_logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "TODO: Add translation"


def add_nested_key(tree: dict[str, Any], dotted_path: str, value: Any) -> dict[str, Any]:
    """Set *value* at *dotted_path*, creating intermediate objects.

    A non-object value in the way is replaced by a new object.
    """
    segments = dotted_path.split(".")
    node = tree
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = value
    return tree


def _dump(tree: Any) -> str:
    return json.dumps(tree, indent=2, ensure_ascii=False) + "\n"


def _textual_insert(text: str, dotted_path: str, value: str) -> str:
    stripped = text.rstrip()
    if not stripped.endswith("}"):
        return text
    close = len(stripped) - 1
    body = stripped[:close].rstrip()
    name = json.dumps(dotted_path, ensure_ascii=False)
    if re.search(re.escape(name) + r"\s*:", body):
        return text
    member = f"  {name}: {json.dumps(value, ensure_ascii=False)}"
    if body.endswith("{"):
        return f"{body}\n{member}\n}}\n"
    separator = "" if body.endswith(",") else ","
    return f"{body}{separator}\n{member}\n}}\n"


def apply(text: str, dotted_path: str, value: str = DEFAULT_PLACEHOLDER) -> str:
    """Return *text* with *value* set at *dotted_path*.

    Applying the same edit twice yields the same text as applying it once.
    """
    try:
        tree = json.loads(text) if text.strip() else {}
    except (ValueError, RecursionError):
        _logger.debug("Resource text is not valid JSON — inserting %r textually", dotted_path)
        return _textual_insert(text, dotted_path, value)

    if not isinstance(tree, dict):
        _logger.debug("Resource root is not an object — left unchanged")
        return text
    return _dump(add_nested_key(tree, dotted_path, value))
