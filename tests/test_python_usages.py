"""Tests for extracting literal key usages from Python source."""

from __future__ import annotations

import textwrap

from locale_audit.analyzers.python_usages import PythonUsageScanner
from locale_audit.core.config import LocalizationConfig


def _keys(source: str, config: LocalizationConfig | None = None) -> list[str]:
    sites = PythonUsageScanner(config).scan("app.py", textwrap.dedent(source))
    return [s.key for s in sites]


class TestDefaultAccessors:
    """``Indexer:IStringLocalizer;Method:Localizer.Get,Translate``."""

    def test_method_accessors(self):
        source = """\
            title = localizer.get("home.title")
            body = self._localizer.Get("home.body")
            other = translate("home.other")
            deep = app.i18n.translate("home.deep")
            """
        assert _keys(source) == ["home.title", "home.body", "home.other", "home.deep"]

    def test_indexer_accessor(self):
        source = """\
            a = localizer["nav.home"]
            b = self.string_localizer["nav.about"]
            c = settings["not.a.key"]
            """
        assert _keys(source) == ["nav.home", "nav.about"]

    def test_unrelated_get_is_ignored(self):
        assert _keys('value = config.get("timeout")\n') == []

    def test_non_literal_arguments_ignored(self):
        source = """\
            localizer.get(name)
            localizer.get(f"user.{field}")
            localizer["a" + suffix]
            translate()
            """
        assert _keys(source) == []

    def test_location_of_key_literal(self):
        source = """\
            def view():
                return translate(
                    "home.title"
                )
            """
        [site] = PythonUsageScanner().scan("pkg/views.py", textwrap.dedent(source))
        assert site.location.path == "pkg/views.py"
        assert site.location.line_start == 3
        assert site.location.column == 9

    def test_sites_ordered_by_position(self):
        source = """\
            x = translate(translate("inner.key") and "outer.key")
            y = translate("second.line")
            """
        assert _keys(source) == ["inner.key", "second.line"]

    def test_syntax_error_yields_nothing(self):
        assert _keys("def broken(:\n") == []


class TestConfiguredAccessors:
    def test_custom_method_names(self):
        config = LocalizationConfig.from_mapping({"accessor_kinds": "Method:_,gettext"})
        source = """\
            _("a.key")
            gettext("b.key")
            translate("c.key")
            """
        assert _keys(source, config) == ["a.key", "b.key"]

    def test_custom_indexer_type(self):
        config = LocalizationConfig.from_mapping({"accessor_kinds": "Indexer:Messages"})
        source = """\
            messages["m.one"]
            self._messages["m.two"]
            localizer["m.three"]
            """
        assert _keys(source, config) == ["m.one", "m.two"]
