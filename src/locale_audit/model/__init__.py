"""Enums shared across the engine, fix and reporting layers."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Diagnostic severity as reported to the user."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticKind(str, Enum):
    """The fixed taxonomy of localization diagnostics."""

    MISSING = "missing"
    UNUSED = "unused"
    PARTIAL_MISSING = "partial_missing"
    DUPLICATE = "duplicate"


class AccessorType(str, Enum):
    """How code reaches a localized string: ``x["key"]`` or ``x.get("key")``."""

    INDEXER = "indexer"
    METHOD = "method"
