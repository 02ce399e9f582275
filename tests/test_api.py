"""Tests for the programmatic API surface."""

from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

import locale_audit
from locale_audit.api import (
    check_project,
    create_missing_key,
    fill_partial_key,
    suggest_keys,
    validate_instance,
)


class TestCheckProject:
    def test_returns_result_and_dict(self, project: Path):
        result, result_dict = check_project(project, ci_mode=True)
        assert result_dict == result.to_dict()
        assert result_dict["summary"]["counts"]["diagnostics_total"] == 4

    def test_accepts_str_root(self, project: Path):
        _, result_dict = check_project(str(project), ci_mode=True)
        assert result_dict["schema_version"] == "check_result_v1"

    def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            check_project(tmp_path / "nope")

    def test_config_discovered_from_root(self, project: Path):
        (project / ".locale-audit.yaml").write_text(
            "localization_warn_on_partial_missing: false\n", encoding="utf-8"
        )
        _, result_dict = check_project(project, ci_mode=True)
        assert "PARTIAL_MISSING_KEY" not in result_dict["summary"]["counts"]["by_code"]
        assert result_dict["run"]["config"]["warn_on_partial_missing"] is False

    def test_package_reexports(self):
        assert locale_audit.check_project is check_project
        assert isinstance(locale_audit.__version__, str)


class TestSuggestKeys:
    def test_ranked_candidates(self, project: Path):
        candidates = suggest_keys(project, "user.emal")
        assert candidates[0].key == "user.email"
        assert candidates[0].score == 580

    def test_fallback_when_nothing_scores(self, project: Path):
        candidates = suggest_keys(project, "zz")
        assert [c.key for c in candidates] == ["home.title", "home.subtitle", "user.name"]
        assert all(c.score == 0 for c in candidates)

    def test_fallback_can_be_disabled(self, project: Path):
        assert suggest_keys(project, "zz", fallback=False) == []


class TestFixes:
    def test_create_missing_key_in_all_files(self, project: Path):
        fixes, results = create_missing_key(project, "user.phone", create_backup=False)
        assert len(fixes) == 2
        assert all(r.success for r in results)
        en = json.loads((project / "Resources" / "app.en.json").read_text(encoding="utf-8"))
        assert en["user"]["phone"] == "TODO: Add translation"

    def test_create_missing_key_dry_run(self, project: Path):
        before = (project / "Resources" / "app.th.json").read_text(encoding="utf-8")
        fixes, _ = create_missing_key(project, "user.phone", cultures=["th"], dry_run=True)
        assert [f.culture for f in fixes] == ["th"]
        assert (project / "Resources" / "app.th.json").read_text(encoding="utf-8") == before

    def test_fill_partial_key(self, project: Path):
        fixes, results = fill_partial_key(project, "user.email", create_backup=False)
        assert [f.culture for f in fixes] == ["th"]
        assert fixes[0].rule_id == "LOC003"
        th = json.loads((project / "Resources" / "app.th.json").read_text(encoding="utf-8"))
        assert th["user"]["email"] == "TODO: Translate from en"

    def test_fill_partial_key_nothing_to_do(self, project: Path):
        assert fill_partial_key(project, "home.title") == ([], [])


class TestValidateInstance:
    def test_valid_result(self, project: Path):
        _, result_dict = check_project(project, ci_mode=True)
        validate_instance(result_dict)

    def test_invalid_result(self):
        with pytest.raises(jsonschema.ValidationError):
            validate_instance({"schema_version": "check_result_v1"})
