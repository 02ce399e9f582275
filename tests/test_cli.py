"""CLI behaviour: exit codes, CI guard and deterministic artifacts."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from locale_audit.__main__ import main

REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(args: list[str], cwd: Path, *, ci: bool = False) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env.pop("CI", None)
    env.pop("LOCALE_AUDIT_DETERMINISTIC", None)
    if ci:
        env["CI"] = "true"
    env["PYTHONHASHSEED"] = "0"
    env["PYTHONPATH"] = str(REPO_ROOT / "src")
    return subprocess.run(
        [sys.executable, "-m", "locale_audit", *args],
        cwd=str(cwd),
        env=env,
        capture_output=True,
        text=True,
    )


@pytest.fixture()
def no_ci_env(monkeypatch):
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("LOCALE_AUDIT_DETERMINISTIC", raising=False)


class TestCheckSubprocess:
    def test_violations_exit_1(self, project: Path):
        p = _run(["check", "."], project)
        assert p.returncode == 1, p.stderr
        assert "LOC001" in p.stderr
        assert p.stdout == ""

    def test_ci_env_requires_ci_flag(self, project: Path):
        p = _run(["check", "."], project, ci=True)
        assert p.returncode == 2
        assert p.stdout == ""
        assert (
            p.stderr.strip()
            == "error: CI environment requires deterministic mode for check. Re-run with --ci/--deterministic."
        )

    def test_ci_output_is_byte_identical(self, project: Path):
        a = _run(["check", ".", "--ci", "--json"], project, ci=True)
        b = _run(["check", ".", "--ci", "--json"], project, ci=True)
        assert a.returncode == 1
        assert a.stdout == b.stdout
        data = json.loads(a.stdout)
        assert data["run"]["config"]["root"] == "proj"

    def test_version(self, project: Path):
        p = _run(["--version"], project)
        assert p.returncode == 0
        assert p.stdout.startswith("locale-audit ")


@pytest.mark.usefixtures("no_ci_env")
class TestCheckInProcess:
    def test_clean_project_exits_0(self, project: Path):
        (project / "src" / "app.py").write_text(
            'translate("home.title")\n', encoding="utf-8"
        )
        (project / "Resources" / "app.th.json").write_text(
            '{"home": {"title": "x"}}\n', encoding="utf-8"
        )
        (project / "Resources" / "app.en.json").write_text(
            '{"home": {"title": "x"}}\n', encoding="utf-8"
        )
        assert main(["check", str(project)]) == 0

    def test_strict_treats_warnings_as_violations(self, project: Path):
        (project / "src" / "app.py").write_text("", encoding="utf-8")
        (project / "Resources" / "app.th.json").write_text('{"a": "x"}\n', encoding="utf-8")
        (project / "Resources" / "app.en.json").write_text('{"a": "x"}\n', encoding="utf-8")
        assert main(["check", str(project)]) == 0
        assert main(["check", str(project), "--strict"]) == 1

    def test_missing_root_exits_2(self, tmp_path: Path):
        assert main(["check", str(tmp_path / "nope")]) == 2

    def test_bad_config_exits_2(self, project: Path):
        (project / ".locale-audit.yaml").write_text("colour: red\n", encoding="utf-8")
        assert main(["check", str(project)]) == 2

    def test_no_command_exits_2(self):
        assert main([]) == 2

    def test_out_writes_artifact_then_validate(self, project: Path, tmp_path: Path, capsys):
        out = tmp_path / "out"
        main(["check", str(project), "--ci", "--out", str(out)])
        capsys.readouterr()
        assert main(["validate", str(out / "check_result.json")]) == 0
        assert capsys.readouterr().out.strip() == "OK"


@pytest.mark.usefixtures("no_ci_env")
class TestValidate:
    def test_invalid_instance_exits_1(self, tmp_path: Path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"schema_version": "check_result_v1"}', encoding="utf-8")
        assert main(["validate", str(path)]) == 1
        assert capsys.readouterr().err.startswith("FAIL:")

    def test_unreadable_instance_exits_2(self, tmp_path: Path):
        assert main(["validate", str(tmp_path / "missing.json")]) == 2


@pytest.mark.usefixtures("no_ci_env")
class TestSuggestAndFix:
    def test_suggest_prints_ranked_keys(self, project: Path, capsys):
        assert main(["suggest", str(project), "user.emal"]) == 0
        first = capsys.readouterr().out.splitlines()[0]
        assert first == "  580  user.email"

    def test_suggest_json(self, project: Path, capsys):
        assert main(["suggest", str(project), "user.emal", "--top", "1", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == [{"key": "user.email", "score": 580}]

    def test_fix_dry_run_leaves_files(self, project: Path, capsys):
        before = (project / "Resources" / "app.en.json").read_text(encoding="utf-8")
        assert main(["fix", str(project), "user.phone", "--culture", "en", "--dry-run"]) == 0
        out = capsys.readouterr().out
        assert "[LOC001] Add 'user.phone' to en resources" in out
        assert "Resources/app.en.json" in out
        assert (project / "Resources" / "app.en.json").read_text(encoding="utf-8") == before

    def test_fix_writes_backup(self, project: Path):
        assert main(["fix", str(project), "user.phone", "--culture", "th"]) == 0
        assert (project / "Resources" / "app.th.json.bak").exists()
        th = json.loads((project / "Resources" / "app.th.json").read_text(encoding="utf-8"))
        assert th["user"]["phone"] == "TODO: Add translation"

    def test_fix_partial_json(self, project: Path, capsys):
        assert main(["fix-partial", str(project), "user.email", "--no-backup", "--json"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert [f["culture"] for f in report["fixes"]] == ["th"]
        assert not (project / "Resources" / "app.th.json.bak").exists()
