"""Resource catalog builder — JSON resource files in, immutable ``Catalog`` out.

Per file:

  1. unreadable text → skipped
  2. textual key scan (``catalog.duplicates``) → raw duplicate keys and
     member positions
  3. structural parse (first value of a repeated key wins) → skipped on
     malformed JSON, but raw duplicates found in step 2 are kept
  4. flatten scalar leaves → ``ResourceEntry`` per key, anchored at the
     line of the key when the scan found it
  5. culture from ``CultureResolver``

Files are independent, so step 1–5 run in a thread pool; contributions
are merged in input order, which keeps catalog discovery order stable.
A failure in one file never aborts the others.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from locale_audit.catalog.culture import CultureResolver
from locale_audit.catalog.duplicates import scan_keys
from locale_audit.catalog.flatten import flatten, parse_resource
from locale_audit.core.cancellation import CancellationToken, OperationCancelled, check_cancelled
from locale_audit.core.config import LocalizationConfig
from locale_audit.model.catalog import Catalog, DuplicateOccurrence, ResourceEntry, ResourceFile
from locale_audit.model.diagnostic import Location
from locale_audit.utils.determinism import normalize_path

_logger = logging.getLogger(__name__)

_DEFAULT_MAX_WORKERS = 8


def default_workers() -> int:
    """Worker count: ``LOCALE_AUDIT_WORKERS`` env var, else up to 8 CPUs."""
    raw = os.environ.get("LOCALE_AUDIT_WORKERS", "")
    if raw.strip():
        try:
            return max(1, int(raw))
        except ValueError:
            _logger.warning("Ignoring invalid LOCALE_AUDIT_WORKERS=%r", raw)
    return min(_DEFAULT_MAX_WORKERS, os.cpu_count() or 1)


def read_resource_files(paths: Iterable[Path], root: Path) -> list[ResourceFile]:
    """Read *paths* as ``ResourceFile`` objects; unreadable files get ``text=None``."""
    files: list[ResourceFile] = []
    for p in paths:
        rel = normalize_path(p, root)
        try:
            text: str | None = p.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            _logger.debug("Cannot read resource file %s: %s", rel, e)
            text = None
        files.append(ResourceFile(path=rel, text=text, abs_path=p))
    return files


@dataclass(frozen=True, slots=True)
class FileContribution:
    """What one resource file adds to the catalog."""

    path: str
    culture: str
    entries: tuple[ResourceEntry, ...] = ()
    duplicates: tuple[DuplicateOccurrence, ...] = ()
    parsed: bool = False


class ResourceCatalogBuilder:
    """Builds a ``Catalog`` from resource files.

    Usage::

        builder = ResourceCatalogBuilder(config)
        catalog = builder.build(read_resource_files(paths, root))
    """

    def __init__(
        self,
        config: LocalizationConfig | None = None,
        *,
        root: Path | None = None,
        workers: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> None:
        self.config = config or LocalizationConfig()
        self.root = root or Path.cwd()
        self.resolver = CultureResolver(self.config.cultures)
        self.workers = workers if workers is not None else default_workers()
        self.cancel = cancel

    def build(self, files: Iterable[ResourceFile | Path]) -> Catalog:
        """Process every file and merge the results into one catalog.

        Plain paths are read relative to the builder's root first.
        """
        check_cancelled(self.cancel)
        files = self._coerce(files)
        if self.workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                contributions = list(pool.map(self._safe_process, files))
        else:
            contributions = [self._safe_process(f) for f in files]
        check_cancelled(self.cancel)

        entries: list[ResourceEntry] = []
        duplicates: list[DuplicateOccurrence] = []
        parsed: list[str] = []
        skipped: list[str] = []
        for c in contributions:
            entries.extend(c.entries)
            duplicates.extend(c.duplicates)
            (parsed if c.parsed else skipped).append(c.path)

        catalog = Catalog(
            entries=tuple(entries),
            duplicates=tuple(duplicates),
            discovered_cultures=self.resolver.discover(f.path for f in files),
            case_sensitive=self.config.key_case_sensitive,
            files_parsed=tuple(parsed),
            files_skipped=tuple(skipped),
        )
        _logger.debug(
            "Catalog built: %d keys, %d cultures, %d file(s) skipped",
            len(catalog.keys),
            len(catalog.discovered_cultures),
            len(skipped),
        )
        return catalog

    def _coerce(self, files: Iterable[ResourceFile | Path]) -> list[ResourceFile]:
        resources: list[ResourceFile] = []
        for f in files:
            if isinstance(f, ResourceFile):
                resources.append(f)
            else:
                resources.extend(read_resource_files([Path(f)], self.root))
        return resources

    def _safe_process(self, resource: ResourceFile) -> FileContribution:
        check_cancelled(self.cancel)
        try:
            return self.process_file(resource)
        except OperationCancelled:
            raise
        except Exception:
            _logger.exception("Resource file '%s' raised an exception — skipped", resource.path)
            return FileContribution(path=resource.path, culture=self.resolver.resolve(resource.path))

    def process_file(self, resource: ResourceFile) -> FileContribution:
        culture = self.resolver.resolve(resource.path)
        if resource.text is None:
            _logger.debug("Resource file '%s' is unreadable — skipped", resource.path)
            return FileContribution(path=resource.path, culture=culture)

        scan = scan_keys(resource.text)
        duplicates = [
            DuplicateOccurrence(
                key=raw.path,
                culture=culture,
                location=Location(resource.path, raw.line, raw.line, raw.column),
            )
            for raw in scan.duplicates
        ]

        try:
            tree = parse_resource(resource.text)
        except ValueError as e:
            _logger.debug("Resource file '%s' is not valid JSON (%s) — skipped", resource.path, e)
            return FileContribution(
                path=resource.path, culture=culture, duplicates=tuple(duplicates)
            )

        entries: list[ResourceEntry] = []
        seen: set[str] = set()
        for key, value in flatten(tree):
            line, column = scan.locate(key) or (1, 1)
            location = Location(resource.path, line, line, column)
            norm = key if self.config.key_case_sensitive else key.lower()
            if norm in seen:
                # Two spellings of one key under the case policy, or a
                # dotted property name colliding with a nested path.
                duplicates.append(DuplicateOccurrence(key=key, culture=culture, location=location))
                continue
            seen.add(norm)
            entries.append(ResourceEntry(key=key, culture=culture, location=location, value=value))

        return FileContribution(
            path=resource.path,
            culture=culture,
            entries=tuple(entries),
            duplicates=tuple(duplicates),
            parsed=True,
        )
