"""Acceptance tests for deterministic (--ci) mode helpers."""

from __future__ import annotations

from pathlib import Path

from locale_audit.utils.determinism import (
    FIXED_TIMESTAMP,
    deterministic_run_id,
    deterministic_timestamp,
    normalize_path,
)


class TestDeterminismUtilities:
    """Unit tests for determinism module utilities."""

    def test_fixed_timestamp_constant(self):
        """FIXED_TIMESTAMP is ISO 8601 with timezone."""
        assert FIXED_TIMESTAMP == "2000-01-01T00:00:00+00:00"

    def test_timestamp_fixed_in_ci_mode(self):
        assert deterministic_timestamp(ci_mode=True) == FIXED_TIMESTAMP

    def test_timestamp_live_outside_ci_mode(self):
        assert deterministic_timestamp() != FIXED_TIMESTAMP

    def test_run_id_is_content_addressed(self, tmp_path: Path):
        a = tmp_path / "a.json"
        b = tmp_path / "b.json"
        a.write_text("{}", encoding="utf-8")
        b.write_text('{"k": 1}', encoding="utf-8")
        first = deterministic_run_id(tmp_path, [a, b], ci_mode=True)
        assert first.startswith("ci-")
        assert first == deterministic_run_id(tmp_path, [b, a], ci_mode=True)
        b.write_text('{"k": 12}', encoding="utf-8")
        assert first != deterministic_run_id(tmp_path, [a, b], ci_mode=True)

    def test_run_id_independent_of_root_location(self, tmp_path: Path):
        ids = []
        for name in ("one", "two"):
            root = tmp_path / name
            root.mkdir()
            f = root / "x.json"
            f.write_text("{}", encoding="utf-8")
            ids.append(deterministic_run_id(root, [f], ci_mode=True))
        assert ids[0] == ids[1]

    def test_run_id_random_outside_ci_mode(self, tmp_path: Path):
        assert deterministic_run_id(tmp_path, []) != deterministic_run_id(tmp_path, [])

    def test_normalize_path(self, tmp_path: Path):
        assert normalize_path(tmp_path / "Resources" / "en.json", tmp_path) == "Resources/en.json"
