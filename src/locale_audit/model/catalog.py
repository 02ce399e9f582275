"""Catalog — the immutable cross-culture map of known localization keys.

Built once per analysis pass by ``catalog.builder`` and shared by
reference afterwards.  All lookups honour the case-sensitivity policy the
catalog was built with; the policy cannot change after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence, Union

from locale_audit.model.diagnostic import Location

DEFAULT_CULTURE = "default"

Scalar = Union[str, int, float, bool, None]


@dataclass(frozen=True, slots=True)
class ResourceFile:
    """Raw resource text as handed to the catalog builder.

    ``text`` is ``None`` when the file could not be read; such files are
    skipped.  ``path`` is the POSIX path relative to the scan root and is
    what diagnostics and culture inference see.
    """

    path: str
    text: str | None
    abs_path: Path | None = None


@dataclass(frozen=True, slots=True)
class ResourceEntry:
    """One flattened key defined in one resource file."""

    key: str
    culture: str
    location: Location
    value: Scalar = None


@dataclass(frozen=True, slots=True)
class DuplicateOccurrence:
    """A key repeated inside one JSON object of one file."""

    key: str
    culture: str
    location: Location


def effective_cultures(explicit: Sequence[str], discovered: Sequence[str]) -> tuple[str, ...]:
    """Culture set used for partial-missing comparison.

    Explicit configuration wins.  Otherwise the discovered cultures are
    used without the ``default`` sentinel, unless that sentinel is all there
    is.
    """
    if explicit:
        return tuple(explicit)
    real = tuple(c for c in discovered if c != DEFAULT_CULTURE)
    return real if real else tuple(discovered)


@dataclass(frozen=True)
class Catalog:
    """Read-only key catalog.  Safe to share across threads."""

    entries: tuple[ResourceEntry, ...] = ()
    duplicates: tuple[DuplicateOccurrence, ...] = ()
    discovered_cultures: tuple[str, ...] = ()
    case_sensitive: bool = True
    files_parsed: tuple[str, ...] = ()
    files_skipped: tuple[str, ...] = ()

    _keys: tuple[str, ...] = field(init=False, repr=False, compare=False)
    _norm_keys: frozenset[str] = field(init=False, repr=False, compare=False)
    _by_culture: Mapping[str, frozenset[str]] = field(init=False, repr=False, compare=False)
    _norm_by_culture: Mapping[str, frozenset[str]] = field(init=False, repr=False, compare=False)
    _first: Mapping[str, ResourceEntry] = field(init=False, repr=False, compare=False)
    _first_by_culture: Mapping[tuple[str, str], ResourceEntry] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        keys: list[str] = []
        first: dict[str, ResourceEntry] = {}
        first_by_culture: dict[tuple[str, str], ResourceEntry] = {}
        by_culture: dict[str, set[str]] = {}
        norm_by_culture: dict[str, set[str]] = {}

        for entry in self.entries:
            norm = self.normalize(entry.key)
            if norm not in first:
                first[norm] = entry
                keys.append(entry.key)
            first_by_culture.setdefault((norm, entry.culture), entry)
            by_culture.setdefault(entry.culture, set()).add(entry.key)
            norm_by_culture.setdefault(entry.culture, set()).add(norm)

        object.__setattr__(self, "_keys", tuple(keys))
        object.__setattr__(self, "_norm_keys", frozenset(first))
        object.__setattr__(
            self,
            "_by_culture",
            MappingProxyType({c: frozenset(v) for c, v in by_culture.items()}),
        )
        object.__setattr__(
            self,
            "_norm_by_culture",
            MappingProxyType({c: frozenset(v) for c, v in norm_by_culture.items()}),
        )
        object.__setattr__(self, "_first", MappingProxyType(first))
        object.__setattr__(self, "_first_by_culture", MappingProxyType(first_by_culture))

    # ── case policy ─────────────────────────────────────────────────

    def normalize(self, key: str) -> str:
        return key if self.case_sensitive else key.lower()

    # ── views ───────────────────────────────────────────────────────

    @property
    def keys(self) -> tuple[str, ...]:
        """Global key union in discovery order (first spelling wins)."""
        return self._keys

    @property
    def keys_by_culture(self) -> Mapping[str, frozenset[str]]:
        return self._by_culture

    @property
    def cultures(self) -> tuple[str, ...]:
        """Cultures that contributed at least one key, in discovery order."""
        return tuple(self._by_culture)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    # ── lookups ─────────────────────────────────────────────────────

    def contains(self, key: str) -> bool:
        return self.normalize(key) in self._norm_keys

    def contains_in(self, key: str, culture: str) -> bool:
        keys = self._norm_by_culture.get(culture)
        return keys is not None and self.normalize(key) in keys

    def missing_cultures(self, key: str, required: Iterable[str]) -> list[str]:
        """Return the cultures in *required* that do not define *key*, sorted."""
        return sorted(c for c in required if not self.contains_in(key, c))

    def cultures_with(self, key: str) -> list[str]:
        return [c for c in self._norm_by_culture if self.contains_in(key, c)]

    def first_entry(self, key: str, culture: str | None = None) -> ResourceEntry | None:
        norm = self.normalize(key)
        if culture is not None:
            hit = self._first_by_culture.get((norm, culture))
            if hit is not None:
                return hit
        return self._first.get(norm)

    def first_location(self, key: str, culture: str | None = None) -> Location | None:
        entry = self.first_entry(key, culture)
        return entry.location if entry is not None else None

    def value_of(self, key: str, culture: str | None = None) -> Scalar:
        entry = self.first_entry(key, culture)
        return entry.value if entry is not None else None

    def effective_cultures(self, explicit: Sequence[str] = ()) -> tuple[str, ...]:
        return effective_cultures(explicit, self.discovered_cultures)

    def summary(self, explicit: Sequence[str] = ()) -> dict:
        """JSON-friendly overview used by run results."""
        return {
            "key_count": len(self._keys),
            "cultures": sorted(self.discovered_cultures),
            "effective_cultures": sorted(self.effective_cultures(explicit)),
            "keys_by_culture": {c: len(v) for c, v in sorted(self._by_culture.items())},
            "duplicate_count": len(self.duplicates),
            "files_parsed": list(self.files_parsed),
            "files_skipped": list(self.files_skipped),
        }
