"""Shared fixtures: a small project with resources in two cultures."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

EN = textwrap.dedent(
    """\
    {
      "home": {
        "title": "Home",
        "subtitle": "Welcome"
      },
      "user": {
        "name": "Name",
        "email": "Email"
      },
      "legacy": "Old"
    }
    """
)

TH = textwrap.dedent(
    """\
    {
      "home": {
        "title": "หน้าแรก",
        "subtitle": "ยินดีต้อนรับ",
        "subtitle": "ซ้ำ"
      },
      "user": {
        "name": "ชื่อ"
      },
      "legacy": "เก่า"
    }
    """
)

APP = textwrap.dedent(
    """\
    from i18n import localizer, translate


    def header():
        return localizer.get("home.title"), translate("home.subtitle")


    def profile():
        return localizer["user.name"], localizer["user.email"], translate("user.phone")
    """
)


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """Project root with ``Resources/app.{en,th}.json`` and one source file."""
    root = tmp_path / "proj"
    (root / "Resources").mkdir(parents=True)
    (root / "Resources" / "app.en.json").write_text(EN, encoding="utf-8")
    (root / "Resources" / "app.th.json").write_text(TH, encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "app.py").write_text(APP, encoding="utf-8")
    return root
