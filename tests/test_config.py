"""Tests for configuration loading and discovery."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from locale_audit.core.config import (
    AccessorKind,
    ConfigError,
    LocalizationConfig,
    parse_accessor_kinds,
)
from locale_audit.model import AccessorType


class TestDefaults:
    def test_default_config(self):
        config = LocalizationConfig()
        assert config.json_patterns == ("**/*.json",)
        assert config.cultures == ()
        assert config.key_case_sensitive is True
        assert config.warn_on_partial_missing is True
        assert config.accessor_names(AccessorType.INDEXER) == ("IStringLocalizer",)
        assert config.accessor_names(AccessorType.METHOD) == ("Localizer.Get", "Translate")


class TestAccessorKinds:
    def test_parse_string_form(self):
        kinds = parse_accessor_kinds("Indexer:IStringLocalizer;Method:Localizer.Get,Translate")
        assert kinds == (
            AccessorKind(AccessorType.INDEXER, ("IStringLocalizer",)),
            AccessorKind(AccessorType.METHOD, ("Localizer.Get", "Translate")),
        )

    def test_parse_mapping_form(self):
        kinds = parse_accessor_kinds({"Method": ["_", "gettext"]})
        assert kinds == (AccessorKind(AccessorType.METHOD, ("_", "gettext")),)

    def test_malformed_entries_ignored(self):
        kinds = parse_accessor_kinds("nonsense;Property:Foo;Method:")
        assert kinds == ()

    def test_round_trip_to_str(self):
        kind = AccessorKind(AccessorType.METHOD, ("a", "b"))
        assert kind.to_str() == "Method:a,b"


class TestFromMapping:
    def test_editorconfig_names(self):
        config = LocalizationConfig.from_mapping(
            {
                "localization_json_patterns": "**/Resources/*.json, **/i18n/*.json",
                "localization_cultures": "en, th",
                "localization_key_case": "insensitive",
                "localization_warn_on_partial_missing": "false",
                "localization_allowed_dynamic_patterns": "error.*",
            }
        )
        assert config.json_patterns == ("**/Resources/*.json", "**/i18n/*.json")
        assert config.cultures == ("en", "th")
        assert config.key_case_sensitive is False
        assert config.warn_on_partial_missing is False
        assert config.allowed_dynamic_patterns == ("error.*",)

    def test_short_names_and_lists(self):
        config = LocalizationConfig.from_mapping({"cultures": ["en", "es"], "exclude": ["vendor"]})
        assert config.cultures == ("en", "es")
        assert config.exclude == ("vendor",)

    def test_unknown_option_rejected(self):
        with pytest.raises(ConfigError):
            LocalizationConfig.from_mapping({"localization_colour": "red"})

    def test_bad_boolean_rejected(self):
        with pytest.raises(ConfigError):
            LocalizationConfig.from_mapping({"warn_on_partial_missing": "maybe"})


class TestYaml:
    def test_from_yaml_with_section(self, tmp_path: Path):
        path = tmp_path / ".locale-audit.yaml"
        path.write_text(
            textwrap.dedent(
                """\
                locale_audit:
                  localization_cultures: [en, th]
                  localization_accessor_kinds:
                    Method: [t]
                """
            ),
            encoding="utf-8",
        )
        config = LocalizationConfig.from_yaml(path)
        assert config.cultures == ("en", "th")
        assert config.accessor_names(AccessorType.METHOD) == ("t",)

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("a: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            LocalizationConfig.from_yaml(path)

    def test_non_mapping_raises_config_error(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            LocalizationConfig.from_yaml(path)

    def test_discover(self, tmp_path: Path):
        (tmp_path / ".locale-audit.yml").write_text("cultures: fr\n", encoding="utf-8")
        assert LocalizationConfig.discover(tmp_path).cultures == ("fr",)

    def test_discover_defaults(self, tmp_path: Path):
        assert LocalizationConfig.discover(tmp_path) == LocalizationConfig()


class TestOverrides:
    def test_none_values_ignored(self):
        base = LocalizationConfig(cultures=("en",))
        assert base.with_overrides(cultures=None, key_case_sensitive=False).cultures == ("en",)
        assert base.with_overrides(key_case_sensitive=False).key_case_sensitive is False

    def test_to_dict(self):
        d = LocalizationConfig().to_dict()
        assert d["accessor_kinds"] == ["Indexer:IStringLocalizer", "Method:Localizer.Get,Translate"]
        assert d["json_patterns"] == ["**/*.json"]
