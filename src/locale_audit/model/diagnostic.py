"""Diagnostic — the normalized engine output for a single detected issue."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable

from locale_audit.model import DiagnosticKind, Severity
from locale_audit.rules import rule_for


@dataclass(frozen=True, slots=True)
class Location:
    """Source location: a code call-site or a place inside a resource file."""

    path: str
    line_start: int = 1
    line_end: int = 1
    column: int = 1

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "column": self.column,
        }

    def __str__(self) -> str:
        return f"{self.path}:{self.line_start}:{self.column}"


@dataclass(frozen=True, slots=True)
class UsageSite:
    """A call-site where code passed a literal key to a localization accessor."""

    key: str
    location: Location


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Immutable, schema-aligned diagnostic.

    Corresponds to ``diagnostics[]`` in ``check_result.schema.json``.
    """

    diagnostic_id: str
    kind: DiagnosticKind
    rule_id: str
    code: str
    severity: Severity
    key: str
    message: str
    location: Location
    fingerprint: str
    missing_cultures: tuple[str, ...] = ()
    culture: str = ""

    @classmethod
    def create(
        cls,
        kind: DiagnosticKind,
        key: str,
        location: Location,
        *,
        missing_cultures: Iterable[str] = (),
        culture: str = "",
    ) -> "Diagnostic":
        """Build a diagnostic from the rule registry (id assigned later)."""
        rule = rule_for(kind)
        missing = tuple(missing_cultures)
        if kind is DiagnosticKind.PARTIAL_MISSING:
            message = rule.format(key, ", ".join(missing))
        else:
            message = rule.format(key)
        return cls(
            diagnostic_id="",
            kind=kind,
            rule_id=rule.rule_id,
            code=rule.code,
            severity=rule.severity,
            key=key,
            message=message,
            location=location,
            fingerprint=make_fingerprint(rule.rule_id, location.path, key, location.line_start),
            missing_cultures=missing,
            culture=culture,
        )

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        d: dict = {
            "diagnostic_id": self.diagnostic_id,
            "kind": self.kind.value,
            "rule_id": self.rule_id,
            "code": self.code,
            "severity": self.severity.value,
            "key": self.key,
            "message": self.message,
            "location": self.location.to_dict(),
            "fingerprint": self.fingerprint,
        }
        if self.missing_cultures:
            d["missing_cultures"] = list(self.missing_cultures)
        if self.culture:
            d["culture"] = self.culture
        return d


def make_fingerprint(rule_id: str, rel_path: str, key: str, line: int) -> str:
    """Deterministic diagnostic fingerprint: sha256(rule|path|key|line)."""
    rel_path = rel_path.replace("\\", "/")
    payload = "|".join([rule_id, rel_path, key, str(line)])
    return "sha256:" + hashlib.sha256(payload.encode()).hexdigest()


def sort_key(d: Diagnostic) -> tuple:
    return (d.location.path, d.location.line_start, d.location.column, d.rule_id, d.key)


def assign_ids(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
    """Order *diagnostics* deterministically and assign stable ids in place."""
    diagnostics.sort(key=sort_key)
    for i, d in enumerate(diagnostics):
        object.__setattr__(d, "diagnostic_id", f"loc_{d.fingerprint[7:15]}_{i:04d}")
    return diagnostics
