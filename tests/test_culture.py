"""Tests for resource-file culture inference."""

from __future__ import annotations

import pytest

from locale_audit.catalog.culture import CultureResolver, effective_cultures


class TestResolve:
    """Resolution order: explicit → stem suffix → common code → default."""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("Resources/Program.en.json", "en"),
            ("Resources/messages.TH.json", "th"),
            ("i18n/app.pt-BR.json", "pt-br"),
            ("es-MX.json", "es-mx"),
            ("locales/fr/strings.json", "fr"),
            ("strings.json", "default"),
            ("locales/strings.json", "default"),
        ],
    )
    def test_without_explicit_cultures(self, path, expected):
        assert CultureResolver().resolve(path) == expected

    def test_explicit_culture_wins_as_configured(self):
        resolver = CultureResolver(["en-US", "th"])
        assert resolver.resolve("i18n/EN-us/app.json") == "en-US"
        assert resolver.resolve("Resources/Program.th.json") == "th"

    def test_explicit_culture_matches_substring(self):
        resolver = CultureResolver(["th"])
        assert resolver.resolve("resources/thai/app.json") == "th"

    def test_common_code_not_found_inside_words(self):
        # "es" in "locales", "de" in "default" must not match.
        assert CultureResolver().resolve("locales/defaults.json") == "default"
        assert CultureResolver().resolve("Resources/app.json") == "default"

    def test_backslash_paths(self):
        assert CultureResolver().resolve("Resources\\de\\app.json") == "de"

    def test_never_raises_on_odd_input(self):
        assert CultureResolver().resolve("") == "default"


class TestDiscoverAndEffective:
    """Discovered culture order and effective culture selection."""

    def test_discover_first_seen_order(self):
        resolver = CultureResolver()
        paths = ["a.th.json", "b.en.json", "c.th.json", "plain.json"]
        assert resolver.discover(paths) == ("th", "en", "default")

    def test_effective_prefers_explicit(self):
        assert effective_cultures(["en"], ["en", "th"]) == ("en",)

    def test_effective_drops_default_sentinel(self):
        assert effective_cultures([], ["default", "en", "th"]) == ("en", "th")

    def test_effective_keeps_default_when_alone(self):
        assert effective_cultures([], ["default"]) == ("default",)

    def test_resolver_effective(self):
        resolver = CultureResolver(["en", "es"])
        assert resolver.effective(["th"]) == ("en", "es")
