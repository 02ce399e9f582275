"""Diagnostic engine — usage sites in, diagnostics out.

Two phases:

  streaming  ``on_usage`` classifies each usage as it arrives
             (Missing / PartialMissing) and records the key as used.
             Safe to call from many threads at once.
  barrier    ``finalize`` runs once, after every usage has been observed,
             and emits the whole-program diagnostics (Unused / Duplicate).

The catalog is immutable, so the only shared mutable state is the
used-key set, guarded by a lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from locale_audit.core.cancellation import CancellationToken, check_cancelled
from locale_audit.core.config import LocalizationConfig
from locale_audit.model import DiagnosticKind
from locale_audit.model.catalog import Catalog
from locale_audit.model.diagnostic import Diagnostic, Location, UsageSite

_logger = logging.getLogger(__name__)


class UsedKeySet:
    """Insert-only, lock-protected set of normalized keys."""

    def __init__(self) -> None:
        self._keys: set[str] = set()
        self._lock = threading.Lock()

    def add(self, key: str) -> None:
        with self._lock:
            self._keys.add(key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def snapshot(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._keys)


class DiagnosticEngine:
    """Correlates usage sites against a catalog.

    Usage::

        engine = DiagnosticEngine(catalog, config)
        for site in sites:
            engine.on_usage(site)
        diagnostics = engine.finalize()
    """

    def __init__(self, catalog: Catalog, config: LocalizationConfig | None = None) -> None:
        self.catalog = catalog
        self.config = config or LocalizationConfig()
        self.cultures = catalog.effective_cultures(self.config.cultures)
        self.used = UsedKeySet()
        self._finalized = False
        self._finalize_lock = threading.Lock()

    # ── streaming phase ─────────────────────────────────────────────

    def on_usage(self, site: UsageSite) -> Diagnostic | None:
        """Classify one usage; return its diagnostic, if any."""
        key = site.key
        if not key or not key.strip():
            return None

        self.used.add(self.catalog.normalize(key))

        if not self.catalog.contains(key):
            return Diagnostic.create(DiagnosticKind.MISSING, key, site.location)

        if len(self.cultures) > 1 and self.config.warn_on_partial_missing:
            missing = self.catalog.missing_cultures(key, self.cultures)
            if missing:
                return Diagnostic.create(
                    DiagnosticKind.PARTIAL_MISSING,
                    key,
                    site.location,
                    missing_cultures=missing,
                )
        return None

    # ── barrier phase ───────────────────────────────────────────────

    def finalize(self) -> list[Diagnostic]:
        """Emit Unused and Duplicate diagnostics.  Callable exactly once."""
        with self._finalize_lock:
            if self._finalized:
                raise RuntimeError("DiagnosticEngine.finalize() called twice")
            self._finalized = True

        used = self.used.snapshot()
        diagnostics: list[Diagnostic] = []

        for key in self.catalog.keys:
            if self.catalog.normalize(key) in used:
                continue
            entry = self.catalog.first_entry(key)
            location = entry.location if entry is not None else Location("")
            diagnostics.append(
                Diagnostic.create(
                    DiagnosticKind.UNUSED,
                    key,
                    location,
                    culture=entry.culture if entry is not None else "",
                )
            )

        for dup in self.catalog.duplicates:
            diagnostics.append(
                Diagnostic.create(
                    DiagnosticKind.DUPLICATE, dup.key, dup.location, culture=dup.culture
                )
            )

        _logger.debug(
            "Finalize: %d used key(s), %d end-of-pass diagnostic(s)",
            len(used),
            len(diagnostics),
        )
        return diagnostics

    # ── convenience ─────────────────────────────────────────────────

    def analyze(
        self,
        usages: Iterable[UsageSite],
        cancel: CancellationToken | None = None,
    ) -> list[Diagnostic]:
        """Stream *usages*, then finalize.

        Raises ``OperationCancelled`` (and returns nothing) if *cancel*
        fires before the pass completes.
        """
        staged: list[Diagnostic] = []
        for site in usages:
            check_cancelled(cancel)
            diagnostic = self.on_usage(site)
            if diagnostic is not None:
                staged.append(diagnostic)
        check_cancelled(cancel)
        staged.extend(self.finalize())
        return staged
