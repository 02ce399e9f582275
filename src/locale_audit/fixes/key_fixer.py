"""
Key Fixer
=========
Adds missing localization keys to JSON resource files.

Supported fixes:
- Missing key (LOC001) → add the key, with a placeholder, to every resource
  file or to the files of the chosen cultures
- Partially missing key (LOC003) → add the key to the cultures that lack it,
  with a "translate from" placeholder naming a culture that has it

Usage:
    from locale_audit.fixes.key_fixer import plan_key_fixes, apply_key_fixes

    fixes = plan_key_fixes(resource_files, "home.title", ["th"])

    # Preview fixes
    for fix in fixes:
        print(fix.describe())

    # Apply fixes
    apply_key_fixes(fixes)
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from locale_audit.catalog.culture import CultureResolver
from locale_audit.fixes import json_patcher
from locale_audit.fixes.json_patcher import DEFAULT_PLACEHOLDER
from locale_audit.model.catalog import Catalog, ResourceFile
from locale_audit.rules import LOC_MISSING_001

_logger = logging.getLogger(__name__)


@dataclass
class KeyFix:
    """One resource file edit that adds a key."""

    file_path: Path
    rel_path: str
    culture: str
    key: str
    old_text: str
    new_text: str
    rule_id: str = LOC_MISSING_001
    value: str = DEFAULT_PLACEHOLDER

    @property
    def description(self) -> str:
        return f"Add '{self.key}' to {self.culture} resources"

    def describe(self) -> str:
        """Human-readable description of the fix."""
        return (
            f"[{self.rule_id}] {self.description}\n"
            f"  File: {self.rel_path}\n"
            f"  + {self.key}: {self.value!r}"
        )

    def to_dict(self) -> dict:
        return {
            "file_path": self.rel_path,
            "culture": self.culture,
            "key": self.key,
            "value": self.value,
            "rule_id": self.rule_id,
            "description": self.description,
        }


@dataclass
class FixResult:
    """Result of applying fixes to a file."""

    file_path: Path
    fixes_applied: int
    fixes_skipped: int
    backup_path: Optional[Path] = None
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> dict:
        return {
            "file_path": str(self.file_path),
            "fixes_applied": self.fixes_applied,
            "fixes_skipped": self.fixes_skipped,
            "backup_path": str(self.backup_path) if self.backup_path else None,
            "errors": list(self.errors),
        }


def _targets(target_cultures: Iterable[str]) -> set[str]:
    return {c.lower() for c in target_cultures if c.strip()}


def add_missing_key(
    resource_files: Sequence[ResourceFile],
    missing_key: str,
    target_cultures: Iterable[str] = (),
    placeholder: str = DEFAULT_PLACEHOLDER,
    *,
    resolver: CultureResolver | None = None,
) -> dict[str, str]:
    """Return ``{path: new_text}`` for every file that should receive *missing_key*.

    Empty *target_cultures* means every resource file.  Unreadable files
    are left alone.
    """
    resolver = resolver or CultureResolver()
    targets = _targets(target_cultures)
    changed: dict[str, str] = {}
    for resource in resource_files:
        if resource.text is None:
            continue
        if targets and resolver.resolve(resource.path).lower() not in targets:
            continue
        changed[resource.path] = json_patcher.apply(resource.text, missing_key, placeholder)
    return changed


def plan_key_fixes(
    resource_files: Sequence[ResourceFile],
    key: str,
    target_cultures: Iterable[str] = (),
    value: str = DEFAULT_PLACEHOLDER,
    *,
    resolver: CultureResolver | None = None,
    rule_id: str = LOC_MISSING_001,
) -> list[KeyFix]:
    """Plan the edits that add *key*; files that would not change are dropped."""
    resolver = resolver or CultureResolver()
    by_path = {r.path: r for r in resource_files}
    fixes: list[KeyFix] = []
    patched = add_missing_key(resource_files, key, target_cultures, value, resolver=resolver)
    for path, new_text in patched.items():
        resource = by_path[path]
        if new_text == resource.text:
            _logger.debug("'%s' already up to date for key %r", path, key)
            continue
        fixes.append(
            KeyFix(
                file_path=resource.abs_path or Path(path),
                rel_path=path,
                culture=resolver.resolve(path),
                key=key,
                old_text=resource.text or "",
                new_text=new_text,
                rule_id=rule_id,
                value=value,
            )
        )
    return fixes


def apply_key_fixes(
    fixes: Sequence[KeyFix],
    create_backup: bool = True,
    dry_run: bool = False,
) -> list[FixResult]:
    """
    Write planned fixes to disk.

    Args:
        fixes: Fixes from ``plan_key_fixes``
        create_backup: Whether to create a .bak backup of each file
        dry_run: If True, don't actually modify any file

    Returns:
        One FixResult per fix, in input order
    """
    results: list[FixResult] = []
    for fix in fixes:
        result = FixResult(file_path=fix.file_path, fixes_applied=0, fixes_skipped=0)
        results.append(result)

        try:
            current = fix.file_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            result.errors.append(f"Error reading file: {e}")
            result.fixes_skipped += 1
            continue

        # The file changed since the fix was planned.
        if current != fix.old_text:
            result.fixes_skipped += 1
            continue

        result.fixes_applied += 1
        if dry_run:
            continue

        if create_backup:
            backup_path = fix.file_path.with_suffix(fix.file_path.suffix + ".bak")
            try:
                shutil.copy2(fix.file_path, backup_path)
                result.backup_path = backup_path
            except OSError as e:
                result.errors.append(f"Error creating backup: {e}")

        try:
            fix.file_path.write_text(fix.new_text, encoding="utf-8")
        except OSError as e:
            result.errors.append(f"Error writing file: {e}")
            result.fixes_applied -= 1
            result.fixes_skipped += 1

    return results


def placeholder_for(catalog: Catalog, key: str) -> str:
    """``TODO: Translate from <culture>`` when some culture defines *key*."""
    for culture in catalog.cultures:
        if catalog.contains_in(key, culture):
            return f"TODO: Translate from {culture}"
    return DEFAULT_PLACEHOLDER


def partial_fix_targets(catalog: Catalog, key: str, explicit: Sequence[str] = ()) -> list[str]:
    """Effective cultures that lack *key*, sorted."""
    return catalog.missing_cultures(key, catalog.effective_cultures(explicit))
