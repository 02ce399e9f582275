"""Determinism helpers for CI-reproducible output.

In ``--ci`` mode timestamps are fixed and run ids are derived from the
scanned inputs, so two runs over the same tree produce byte-identical
JSON.
"""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"


def deterministic_timestamp(ci_mode: bool = False) -> str:
    if ci_mode:
        return FIXED_TIMESTAMP
    return datetime.now(timezone.utc).isoformat()


def deterministic_run_id(root: Path, files: Iterable[Path], ci_mode: bool = False) -> str:
    """Content-addressed run id in CI mode, random otherwise.

    The CI id hashes each input's root-relative path and size.
    """
    if not ci_mode:
        return str(uuid.uuid4())
    h = hashlib.sha256()
    for p in sorted(files):
        h.update(normalize_path(p, root).encode("utf-8"))
        try:
            h.update(str(p.stat().st_size).encode("utf-8"))
        except OSError:
            h.update(b"0")
    return "ci-" + h.hexdigest()[:12]


def normalize_path(path: Path, root: Path) -> str:
    """Root-relative POSIX path, or the absolute POSIX path outside *root*."""
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.resolve().as_posix()
