"""Shared utilities: canonical JSON output and the exit-code contract."""

from locale_audit.utils.exit_codes import ExitCode
from locale_audit.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = ["ExitCode", "stable_json_dump", "stable_json_dumps"]
