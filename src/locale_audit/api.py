"""
locale_audit.api
================

Programmatic entrypoints for using locale_audit as a library.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (ci_mode=True)
  - Stable, JSON-friendly outputs that match existing contracts

Non-goals:
  - Owning presentation (UI strings) — callers render results

Usage::

    from locale_audit.api import check_project, suggest_keys, create_missing_key

    result, result_dict = check_project(".", ci_mode=True)
    suggestions = suggest_keys(".", "home.titel")
    fixes, results = create_missing_key(".", "home.subtitle", cultures=["th"])
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

from locale_audit.analyzers import UsageScanner
from locale_audit.catalog.builder import ResourceCatalogBuilder, read_resource_files
from locale_audit.catalog.culture import CultureResolver
from locale_audit.contracts.load import validate_instance as _validate_instance
from locale_audit.core.cancellation import CancellationToken
from locale_audit.core.config import LocalizationConfig
from locale_audit.core.discover import discover_resource_files
from locale_audit.core.runner import run_check
from locale_audit.fixes.json_patcher import DEFAULT_PLACEHOLDER
from locale_audit.fixes.key_fixer import (
    FixResult,
    KeyFix,
    apply_key_fixes,
    partial_fix_targets,
    placeholder_for,
    plan_key_fixes,
)
from locale_audit.fixes.suggestions import (
    DEFAULT_TOP,
    SuggestionCandidate,
    fallback_keys,
    suggest,
)
from locale_audit.model.catalog import Catalog, ResourceFile
from locale_audit.model.check_result import CheckResult
from locale_audit.rules import LOC_PARTIAL_001


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def _resolve_root(root: str | Path, what: str) -> Path:
    root_p = _to_path(root).resolve()
    if not root_p.exists():
        raise FileNotFoundError(f"{what}: root does not exist: {root_p}")
    return root_p


def _load(
    root: Path, config: Optional[LocalizationConfig]
) -> tuple[LocalizationConfig, list[ResourceFile], Catalog]:
    config = config or LocalizationConfig.discover(root)
    paths = discover_resource_files(root, config.json_patterns, exclude=config.exclude)
    resources = read_resource_files(paths, root)
    catalog = ResourceCatalogBuilder(config, root=root).build(resources)
    return config, resources, catalog


# ── check_project ───────────────────────────────────────────────────


def check_project(
    root: str | Path,
    *,
    config: Optional[LocalizationConfig] = None,
    ci_mode: bool = False,
    scanner: Optional[UsageScanner] = None,
    cancel: Optional[CancellationToken] = None,
    out_dir: Optional[Path] = None,
) -> tuple[CheckResult, dict[str, Any]]:
    """Run the full consistency check programmatically.

    Parameters
    ----------
    root:
        Directory to check.
    config:
        Configuration; discovered from *root* (``.locale-audit.yaml``)
        when omitted.
    ci_mode:
        If True, output is byte-deterministic (fixed timestamps, run id
        derived from the inputs).
    scanner:
        Override the usage scanner.  Must conform to the ``UsageScanner``
        protocol.
    cancel:
        Optional token; firing it aborts the check with
        ``OperationCancelled``.

    Returns
    -------
    ``(CheckResult, check_result_dict)``
        The dataclass and the schema-aligned JSON dict.

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    """
    root_p = _resolve_root(root, "check_project")
    result = run_check(
        root_p,
        config=config or LocalizationConfig.discover(root_p),
        scanner=scanner,
        cancel=cancel,
        out_dir=out_dir,
        ci_mode=ci_mode,
    )
    return result, result.to_dict()


# ── suggest_keys ────────────────────────────────────────────────────


def suggest_keys(
    root: str | Path,
    key: str,
    *,
    top: int = DEFAULT_TOP,
    config: Optional[LocalizationConfig] = None,
    fallback: bool = True,
) -> list[SuggestionCandidate]:
    """Rank catalog keys under *root* by similarity to *key*.

    When nothing is similar and *fallback* is set, the first catalog keys
    are returned with score 0.
    """
    root_p = _resolve_root(root, "suggest_keys")
    config, _, catalog = _load(root_p, config)
    candidates = suggest(key, catalog.keys, case_sensitive=config.key_case_sensitive, top=top)
    if not candidates and fallback:
        candidates = [SuggestionCandidate(k, 0) for k in fallback_keys(catalog)]
    return candidates


# ── fixes ───────────────────────────────────────────────────────────


def create_missing_key(
    root: str | Path,
    key: str,
    *,
    cultures: Iterable[str] = (),
    value: str = DEFAULT_PLACEHOLDER,
    config: Optional[LocalizationConfig] = None,
    dry_run: bool = False,
    create_backup: bool = True,
) -> tuple[list[KeyFix], list[FixResult]]:
    """Add *key* to the resource files of *cultures* (all files when empty)."""
    root_p = _resolve_root(root, "create_missing_key")
    config, resources, _ = _load(root_p, config)
    fixes = plan_key_fixes(
        resources, key, cultures, value, resolver=CultureResolver(config.cultures)
    )
    return fixes, apply_key_fixes(fixes, create_backup=create_backup, dry_run=dry_run)


def fill_partial_key(
    root: str | Path,
    key: str,
    *,
    config: Optional[LocalizationConfig] = None,
    dry_run: bool = False,
    create_backup: bool = True,
) -> tuple[list[KeyFix], list[FixResult]]:
    """Add *key* to every effective culture that lacks it.

    The placeholder names a culture that already holds the key.  Returns
    empty lists when no culture lacks it.
    """
    root_p = _resolve_root(root, "fill_partial_key")
    config, resources, catalog = _load(root_p, config)
    targets = partial_fix_targets(catalog, key, config.cultures)
    if not targets:
        return [], []
    fixes = plan_key_fixes(
        resources,
        key,
        targets,
        placeholder_for(catalog, key),
        resolver=CultureResolver(config.cultures),
        rule_id=LOC_PARTIAL_001,
    )
    return fixes, apply_key_fixes(fixes, create_backup=create_backup, dry_run=dry_run)


# ── validate_instance ───────────────────────────────────────────────


def validate_instance(instance: dict[str, Any], schema_name: str = "check_result.schema.json") -> None:
    """Validate *instance* against a bundled schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    _validate_instance(instance, schema_name)
