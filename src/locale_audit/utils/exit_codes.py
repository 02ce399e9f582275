"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — no error diagnostics (and no warnings under --strict)
  1   Violation — error diagnostics found, or warnings under --strict
  2   Error — usage error, missing path, bad configuration, runtime failure
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
