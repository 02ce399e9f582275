"""Fuzzy "did you mean" ranking for unresolved localization keys.

Scoring, first matching rule wins (higher is closer):

  exact match                          1000
  candidate contains the missing key    800
  missing key contains the candidate    700
  shared prefix of length L > 0         500 + 10 * L
  edit distance D <= max(len) // 3      300 - 10 * D
  anything else                         excluded
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from locale_audit.model.catalog import Catalog

DEFAULT_TOP = 5
DEFAULT_FALLBACK = 3


@dataclass(frozen=True, slots=True)
class SuggestionCandidate:
    key: str
    score: int

    def to_dict(self) -> dict:
        return {"key": self.key, "score": self.score}


def levenshtein(a: str, b: str) -> int:
    """Classic insert/delete/substitute edit distance."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def common_prefix_length(a: str, b: str) -> int:
    n = 0
    for ca, cb in zip(a, b):
        if ca != cb:
            break
        n += 1
    return n


def similarity_score(missing: str, candidate: str, case_sensitive: bool = True) -> int:
    """Score *candidate* against *missing*; ``0`` means not similar."""
    if not case_sensitive:
        missing, candidate = missing.lower(), candidate.lower()

    if missing == candidate:
        return 1000
    if missing in candidate:
        return 800
    if candidate in missing:
        return 700

    prefix = common_prefix_length(missing, candidate)
    if prefix > 0:
        return 500 + prefix * 10

    distance = levenshtein(missing, candidate)
    if distance <= max(len(missing), len(candidate)) // 3:
        return 300 - distance * 10
    return 0


def suggest(
    missing_key: str,
    catalog_keys: Iterable[str],
    case_sensitive: bool = True,
    top: int = DEFAULT_TOP,
) -> list[SuggestionCandidate]:
    """Rank *catalog_keys* by similarity to *missing_key*.

    Descending score; equal scores keep catalog order.
    """
    scored: list[SuggestionCandidate] = []
    for key in catalog_keys:
        score = similarity_score(missing_key, key, case_sensitive)
        if score > 0:
            scored.append(SuggestionCandidate(key, score))
    scored.sort(key=lambda c: -c.score)
    return scored[:top] if top > 0 else scored


def fallback_keys(catalog: Catalog | Sequence[str], n: int = DEFAULT_FALLBACK) -> list[str]:
    """First *n* catalog keys, offered when nothing scores."""
    keys = catalog.keys if isinstance(catalog, Catalog) else catalog
    return list(keys[:n])
