"""Localization check configuration.

Option names follow the ``.editorconfig``-style keys of the analyzer this
tool grew out of, so an existing configuration can be pasted into
``.locale-audit.yaml`` unchanged::

    localization_json_patterns: "**/Resources/*.json"
    localization_accessor_kinds: "Indexer:IStringLocalizer;Method:Localizer.Get,Translate"
    localization_cultures: "en, th"
    localization_key_case: sensitive
    localization_warn_on_partial_missing: true

Short field names (``cultures``, ``key_case_sensitive`` ...) and YAML lists
are accepted as well.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from locale_audit.model import AccessorType

DEFAULT_JSON_PATTERNS: tuple[str, ...] = ("**/*.json",)
DEFAULT_ACCESSOR_KINDS = "Indexer:IStringLocalizer;Method:Localizer.Get,Translate"
CONFIG_FILE_NAMES: tuple[str, ...] = (
    ".locale-audit.yaml",
    ".locale-audit.yml",
    "locale-audit.yaml",
)

# long (editorconfig) name -> dataclass field
_ALIASES: dict[str, str] = {
    "localization_json_patterns": "json_patterns",
    "localization_accessor_kinds": "accessor_kinds",
    "localization_cultures": "cultures",
    "localization_key_case": "key_case",
    "localization_warn_on_partial_missing": "warn_on_partial_missing",
    "localization_allowed_dynamic_patterns": "allowed_dynamic_patterns",
}


class ConfigError(ValueError):
    """Raised for unreadable or ill-typed configuration."""


@dataclass(frozen=True, slots=True)
class AccessorKind:
    """One accessor rule: an indexer type name or a method name list."""

    type: AccessorType
    names: tuple[str, ...]

    def to_str(self) -> str:
        return f"{self.type.value.capitalize()}:{','.join(self.names)}"


def _split(value: Any, sep: str = ",") -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(s.strip() for s in value.split(sep) if s.strip())
    if isinstance(value, Iterable):
        return tuple(str(s).strip() for s in value if str(s).strip())
    raise ConfigError(f"expected a string or a list, got {type(value).__name__}")


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise ConfigError(f"{name}: expected a boolean, got {value!r}")


def parse_accessor_kinds(value: Any) -> tuple[AccessorKind, ...]:
    """Parse ``Kind:name,name;Kind:name`` (or an equivalent YAML mapping).

    Entries without a colon or with an unknown kind are ignored.
    """
    if isinstance(value, Mapping):
        parts = [f"{k}:{','.join(_split(v))}" for k, v in value.items()]
    elif isinstance(value, str):
        parts = list(_split(value, ";"))
    else:
        parts = list(_split(value))

    result: list[AccessorKind] = []
    for part in parts:
        kind_str, sep, names_str = part.partition(":")
        if not sep:
            continue
        try:
            accessor_type = AccessorType(kind_str.strip().lower())
        except ValueError:
            continue
        names = _split(names_str)
        if names:
            result.append(AccessorKind(accessor_type, names))
    return tuple(result)


@dataclass(frozen=True)
class LocalizationConfig:
    """Immutable localization check configuration."""

    json_patterns: tuple[str, ...] = DEFAULT_JSON_PATTERNS
    accessor_kinds: tuple[AccessorKind, ...] = field(
        default_factory=lambda: parse_accessor_kinds(DEFAULT_ACCESSOR_KINDS)
    )
    cultures: tuple[str, ...] = ()
    key_case_sensitive: bool = True
    warn_on_partial_missing: bool = True
    # Parsed and reported, but not consulted when classifying keys.
    allowed_dynamic_patterns: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    # ── construction ────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LocalizationConfig":
        """Build a config from a flat mapping of option names to values."""
        kwargs: dict[str, Any] = {}
        for raw_name, value in data.items():
            name = _ALIASES.get(raw_name, raw_name)
            if name == "json_patterns":
                kwargs[name] = _split(value) or DEFAULT_JSON_PATTERNS
            elif name == "accessor_kinds":
                kwargs[name] = parse_accessor_kinds(value)
            elif name in ("cultures", "allowed_dynamic_patterns", "exclude"):
                kwargs[name] = _split(value)
            elif name == "key_case":
                kwargs["key_case_sensitive"] = str(value).strip().lower() == "sensitive"
            elif name in ("key_case_sensitive", "warn_on_partial_missing"):
                kwargs[name] = _parse_bool(raw_name, value)
            else:
                raise ConfigError(f"unknown configuration option: {raw_name!r}")
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path) -> "LocalizationConfig":
        """Load configuration from a YAML file.

        The options may sit at the top level or under a ``locale_audit``
        section.
        """
        import yaml

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"cannot read {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}") from e

        if not isinstance(data, Mapping):
            raise ConfigError(f"{path}: expected a mapping at the top level")
        section = data.get("locale_audit", data)
        if not isinstance(section, Mapping):
            raise ConfigError(f"{path}: 'locale_audit' must be a mapping")
        return cls.from_mapping(section)

    @classmethod
    def discover(cls, root: Path) -> "LocalizationConfig":
        """Load the first config file found under *root*, else defaults."""
        for name in CONFIG_FILE_NAMES:
            candidate = root / name
            if candidate.is_file():
                return cls.from_yaml(candidate)
        return cls()

    def with_overrides(self, **changes: Any) -> "LocalizationConfig":
        """Return a copy with the non-``None`` *changes* applied."""
        return dataclasses.replace(self, **{k: v for k, v in changes.items() if v is not None})

    # ── queries ─────────────────────────────────────────────────────

    def accessor_names(self, accessor_type: AccessorType) -> tuple[str, ...]:
        names: list[str] = []
        for kind in self.accessor_kinds:
            if kind.type is accessor_type:
                names.extend(kind.names)
        return tuple(names)

    def to_dict(self) -> dict[str, Any]:
        return {
            "json_patterns": list(self.json_patterns),
            "accessor_kinds": [k.to_str() for k in self.accessor_kinds],
            "cultures": list(self.cultures),
            "key_case_sensitive": self.key_case_sensitive,
            "warn_on_partial_missing": self.warn_on_partial_missing,
            "allowed_dynamic_patterns": list(self.allowed_dynamic_patterns),
            "exclude": list(self.exclude),
        }
