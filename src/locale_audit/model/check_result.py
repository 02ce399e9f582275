"""CheckResult — the immutable, schema-aligned check artifact."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from locale_audit import __version__
from locale_audit.model import Severity
from locale_audit.model.diagnostic import Diagnostic


@dataclass(slots=True)
class CheckResult:
    """Assembled check result matching ``check_result.schema.json``.

    Constructed by ``core.runner`` after the finalize pass has run.
    """

    # ── run metadata ────────────────────────────────────────────────
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
    )
    tool_version: str = __version__
    engine_version: str = "engine_v1"

    config: dict = field(default_factory=dict)

    # ── catalog / usage summary ─────────────────────────────────────
    catalog: dict = field(default_factory=dict)
    usage_count: int = 0
    source_files: int = 0

    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.WARNING)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the full result JSON matching the schema."""
        severity_counts: dict[str, int] = {}
        code_counts: dict[str, int] = {}
        for d in self.diagnostics:
            severity_counts[d.severity.value] = severity_counts.get(d.severity.value, 0) + 1
            code_counts[d.code] = code_counts.get(d.code, 0) + 1

        return {
            "schema_version": "check_result_v1",
            "run": {
                "run_id": self.run_id,
                "created_at": self.created_at,
                "tool_version": self.tool_version,
                "engine_version": self.engine_version,
                "config": self.config,
            },
            "summary": {
                "usage_count": self.usage_count,
                "source_files": self.source_files,
                "counts": {
                    "diagnostics_total": len(self.diagnostics),
                    "by_severity": severity_counts,
                    "by_code": code_counts,
                },
            },
            "catalog": self.catalog,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
