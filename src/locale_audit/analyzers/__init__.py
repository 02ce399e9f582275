"""Analyzers turn catalog + usage facts into diagnostics.

Two pieces:

1. **Usage scanners** (``UsageScanner`` protocol) — extract literal key
   usages from source files.  ``PythonUsageScanner`` is the shipped
   implementation; other languages plug in by satisfying the protocol.

2. **DiagnosticEngine** — correlates ``UsageSite`` facts against an
   immutable ``Catalog`` and emits Missing / PartialMissing / Unused /
   Duplicate diagnostics.
"""

from __future__ import annotations

from typing import Protocol

from locale_audit.model.diagnostic import UsageSite


class UsageScanner(Protocol):
    """Every usage scanner must expose ``id``, ``extensions`` and ``scan()``."""

    id: str
    extensions: tuple[str, ...]

    def scan(self, path: str, source: str) -> list[UsageSite]:
        """Return the literal key usages in *source* (reported at *path*)."""
        ...


# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    if name == "DiagnosticEngine":
        from .engine import DiagnosticEngine
        return DiagnosticEngine
    if name == "PythonUsageScanner":
        from .python_usages import PythonUsageScanner
        return PythonUsageScanner
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
