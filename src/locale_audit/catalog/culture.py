"""Culture inference for resource files.

A resource file's culture comes from, in order:

1. an explicitly configured culture found in its directory or file name,
2. a culture-looking last segment of the file stem (``Program.en.json``),
3. a well-known culture code found anywhere in the path,
4. the ``default`` sentinel.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Iterable, Sequence

from locale_audit.model.catalog import DEFAULT_CULTURE, effective_cultures

__all__ = ["COMMON_CULTURES", "CultureResolver", "effective_cultures", "DEFAULT_CULTURE"]

_CULTURE_SEGMENT_RE = re.compile(r"^[a-zA-Z]{2}(-[a-zA-Z]{2,8})?$")

COMMON_CULTURES: tuple[str, ...] = (
    "en", "en-US", "fr", "de", "es", "it", "ja", "zh", "pt", "ru", "th", "ko",
    "ar", "hi", "tr", "pl", "nl", "sv", "da", "no", "fi", "cs", "sk", "hu",
    "ro", "bg", "hr", "sr", "sl", "et", "lv", "lt", "uk", "be", "mk", "sq",
    "az", "ka", "am", "is", "fo", "mt", "cy", "eu", "ca", "gl", "ast", "br",
    "co", "fur", "rm", "sc", "vec", "lij", "pms", "nap", "scn",
)


class CultureResolver:
    """Maps a resource file path to a culture identifier.  Never raises."""

    def __init__(self, explicit_cultures: Iterable[str] = ()) -> None:
        self.explicit_cultures: tuple[str, ...] = tuple(explicit_cultures)

    def resolve(self, file_path: str) -> str:
        path = PurePosixPath(file_path.replace("\\", "/"))
        directory = str(path.parent).lower() if str(path.parent) != "." else ""
        stem = path.stem

        for culture in self.explicit_cultures:
            if _contained(culture, directory, stem):
                return culture

        last = stem.split(".")[-1]
        if _CULTURE_SEGMENT_RE.match(last):
            return last.lower()

        for culture in COMMON_CULTURES:
            if _token_contained(culture, directory, stem):
                return culture

        return DEFAULT_CULTURE

    def discover(self, file_paths: Iterable[str]) -> tuple[str, ...]:
        """Distinct cultures of *file_paths*, in first-seen order."""
        seen: dict[str, None] = {}
        for p in file_paths:
            seen.setdefault(self.resolve(p), None)
        return tuple(seen)

    def effective(self, discovered: Sequence[str]) -> tuple[str, ...]:
        return effective_cultures(self.explicit_cultures, discovered)


def _contained(culture: str, directory: str, stem: str) -> bool:
    needle = culture.lower()
    return needle in directory or needle in stem.lower()


def _token_contained(culture: str, directory: str, stem: str) -> bool:
    # Narrower than the explicit-culture substring match: well-known codes
    # must stand alone, so "es" is not found in "locales" or "Resources".
    pattern = re.compile(rf"(?<![a-z]){re.escape(culture.lower())}(?![a-z])")
    return bool(pattern.search(directory) or pattern.search(stem.lower()))
