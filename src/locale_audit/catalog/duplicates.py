"""Best-effort textual key scan of raw resource JSON.

``json.loads`` silently collapses a repeated object key, so duplicates must
be found in the raw text before the structural parse.  This scanner walks
the characters once, tracking strings and object/array nesting, and
records for each object member:

  - the position of the first occurrence of every member path, used to
    anchor catalog entries at a real line, and
  - every repeat of a property name inside the *same* object.

It is deliberately not a validating tokenizer.  Malformed input simply
yields whatever could be recognised; structural truth comes from the JSON
parser afterwards.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from locale_audit.catalog.flatten import index_key, join_key

_WHITESPACE = " \t\r\n"


@dataclass(frozen=True, slots=True)
class RawKey:
    """A property name as it appears in the text."""

    name: str
    path: str
    line: int
    column: int


@dataclass(slots=True)
class KeyScan:
    positions: dict[str, tuple[int, int]] = field(default_factory=dict)
    duplicates: list[RawKey] = field(default_factory=list)

    def locate(self, key: str) -> tuple[int, int] | None:
        """Position of *key*, or of its nearest recorded ancestor."""
        probe = key
        while probe:
            hit = self.positions.get(probe)
            if hit is not None:
                return hit
            probe = _parent(probe)
        return None


@dataclass(slots=True)
class _Frame:
    kind: str
    path: str
    seen: set[str] = field(default_factory=set)
    index: int = 0
    member: str = ""


def _parent(key: str) -> str:
    if key.endswith("]"):
        return key[: key.rfind("[")]
    return key.rpartition(".")[0]


def _decode(raw: str) -> str:
    try:
        return json.loads(f'"{raw}"')
    except ValueError:
        return raw


def scan_keys(text: str) -> KeyScan:
    """Scan *text* and return member positions and same-object repeats."""
    scan = KeyScan()
    stack: list[_Frame] = []
    n = len(text)
    i = 0
    line = 1
    line_start = 0

    while i < n:
        ch = text[i]

        if ch == "\n":
            line += 1
            line_start = i + 1
            i += 1
            continue

        if ch == '"':
            start, start_line = i, line
            column = i - line_start + 1
            i += 1
            while i < n and text[i] != '"':
                if text[i] == "\\":
                    i += 1
                elif text[i] == "\n":
                    line += 1
                    line_start = i + 1
                i += 1
            raw = text[start + 1 : i]
            i += 1

            j = i
            while j < n and text[j] in _WHITESPACE:
                j += 1
            if j < n and text[j] == ":" and stack and stack[-1].kind == "object":
                frame = stack[-1]
                name = _decode(raw)
                path = join_key(frame.path, name)
                frame.member = path
                if name in frame.seen:
                    scan.duplicates.append(RawKey(name, path, start_line, column))
                else:
                    frame.seen.add(name)
                    scan.positions.setdefault(path, (start_line, column))
            continue

        if ch in "{[":
            if not stack:
                path = ""
            elif stack[-1].kind == "object":
                path = stack[-1].member or stack[-1].path
            else:
                path = index_key(stack[-1].path, stack[-1].index)
            stack.append(_Frame("object" if ch == "{" else "array", path))
        elif ch in "}]":
            if stack:
                stack.pop()
        elif ch == "," and stack and stack[-1].kind == "array":
            stack[-1].index += 1
        i += 1

    return scan
