"""CLI entry-point for locale_audit.

Usage:
    python -m locale_audit check <root> [--config FILE] [--json] [--out DIR] [--ci] [--strict]
    python -m locale_audit check <root> [--culture C ...] [--case-insensitive] [--no-partial-warnings]
    python -m locale_audit suggest <root> <key> [--top N] [--json]
    python -m locale_audit fix <root> <key> [--culture C ...] [--value TEXT] [--dry-run] [--no-backup]
    python -m locale_audit fix-partial <root> <key> [--dry-run] [--no-backup]
    python -m locale_audit validate <instance.json> [schema_name]
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from locale_audit import __version__
from locale_audit.core.config import ConfigError, LocalizationConfig
from locale_audit.fixes.json_patcher import DEFAULT_PLACEHOLDER
from locale_audit.fixes.suggestions import DEFAULT_TOP
from locale_audit.utils.exit_codes import ExitCode
from locale_audit.utils.json_norm import stable_json_dump


def _env_requires_ci_mode() -> bool:
    """Return True when the environment signals deterministic mode is required."""
    if os.getenv("LOCALE_AUDIT_DETERMINISTIC") == "1":
        return True
    ci = os.getenv("CI", "")
    return ci.lower() in ("1", "true", "yes", "on")


def _require_ci_flag(ci_mode: bool, *, what: str) -> int | None:
    """If CI env is active but --ci was not passed, emit an error and return ExitCode.ERROR."""
    if _env_requires_ci_mode() and not ci_mode:
        print(
            f"error: CI environment requires deterministic mode for {what}. "
            f"Re-run with --ci/--deterministic.",
            file=sys.stderr,
        )
        return ExitCode.ERROR
    return None


from locale_audit.api import (  # noqa: E402
    check_project as _api_check_project,
    create_missing_key as _api_create_missing_key,
    fill_partial_key as _api_fill_partial_key,
    suggest_keys as _api_suggest_keys,
    validate_instance as _api_validate_instance,
)


# ── output helpers ──────────────────────────────────────────────────


def _print_human(result_dict: dict) -> None:
    """Pretty-print a human-readable summary to stderr."""
    summary = result_dict.get("summary", {})
    counts = summary.get("counts", {})
    catalog = result_dict.get("catalog", {})

    print("", file=sys.stderr)
    print(
        f"   Keys       : {catalog.get('key_count', 0)} "
        f"in {', '.join(catalog.get('effective_cultures', [])) or '-'}",
        file=sys.stderr,
    )
    print(
        f"   Usages     : {summary.get('usage_count', 0)} "
        f"in {summary.get('source_files', 0)} file(s)",
        file=sys.stderr,
    )
    print(f"   Diagnostics: {counts.get('diagnostics_total', 0)}", file=sys.stderr)
    by_sev = counts.get("by_severity", {})
    if by_sev:
        parts = [f"{k}={v}" for k, v in sorted(by_sev.items()) if v]
        print(f"   Severity   : {', '.join(parts)}", file=sys.stderr)

    diagnostics = result_dict.get("diagnostics", [])
    for d in diagnostics[:50]:
        loc = d.get("location", {})
        print(
            f"   {loc.get('path', '?')}:{loc.get('line_start', '?')}:{loc.get('column', '?')}"
            f"  {d.get('severity', '?')} {d.get('rule_id', '?')}  {d.get('message', '')}",
            file=sys.stderr,
        )
    if len(diagnostics) > 50:
        print(f"   … and {len(diagnostics) - 50} more", file=sys.stderr)
    print("", file=sys.stderr)


def _exit_code_from_counts(result_dict: dict, strict: bool) -> int:
    by_sev = result_dict.get("summary", {}).get("counts", {}).get("by_severity", {})
    if by_sev.get("error", 0):
        return ExitCode.VIOLATION
    if strict and by_sev.get("warning", 0):
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS


# ── parser ──────────────────────────────────────────────────────────


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: .locale-audit.yaml in the root).",
    )
    p.add_argument(
        "--culture",
        dest="cultures",
        action="append",
        default=None,
        metavar="C",
        help="Culture to compare (repeatable). Overrides the config file.",
    )
    p.add_argument(
        "--case-insensitive",
        dest="case_insensitive",
        action="store_true",
        default=False,
        help="Compare keys ignoring case.",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="locale-audit",
        description="Consistency checks between localization keys in code and JSON resources.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )
    sub = p.add_subparsers(dest="command")

    # ── check ───────────────────────────────────────────────────────
    check_p = sub.add_parser("check", help="Check key usages against resource files.")
    check_p.add_argument("root", type=Path, help="Project root to check.")
    _add_config_args(check_p)
    check_p.add_argument(
        "--no-partial-warnings",
        dest="no_partial",
        action="store_true",
        default=False,
        help="Do not report keys missing in only some cultures.",
    )
    check_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the full CheckResult JSON to stdout.",
    )
    check_p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Directory to write check_result.json into.",
    )
    check_p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Enable deterministic output (stable IDs, timestamps, ordering).",
    )
    check_p.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Treat warnings as violations.",
    )

    # ── suggest ─────────────────────────────────────────────────────
    sug_p = sub.add_parser("suggest", help="Suggest existing keys similar to a missing one.")
    sug_p.add_argument("root", type=Path, help="Project root.")
    sug_p.add_argument("key", help="The unresolved key.")
    _add_config_args(sug_p)
    sug_p.add_argument("--top", type=int, default=DEFAULT_TOP)
    sug_p.add_argument("--json", dest="json_out", action="store_true", default=False)

    # ── fix ─────────────────────────────────────────────────────────
    fix_p = sub.add_parser("fix", help="Add a missing key to resource files.")
    fix_p.add_argument("root", type=Path, help="Project root.")
    fix_p.add_argument("key", help="Dotted key to add.")
    _add_config_args(fix_p)
    fix_p.add_argument("--value", default=DEFAULT_PLACEHOLDER, help="Placeholder value.")

    # ── fix-partial ─────────────────────────────────────────────────
    part_p = sub.add_parser(
        "fix-partial", help="Add a key to every culture that lacks it."
    )
    part_p.add_argument("root", type=Path, help="Project root.")
    part_p.add_argument("key", help="Dotted key to complete.")
    _add_config_args(part_p)

    for fp in (fix_p, part_p):
        fp.add_argument("--dry-run", action="store_true", default=False)
        fp.add_argument(
            "--no-backup",
            dest="backup",
            action="store_false",
            default=True,
            help="Do not write .bak copies.",
        )
        fp.add_argument("--json", dest="json_out", action="store_true", default=False)

    # ── validate ────────────────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON instance against a bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    val_p.add_argument(
        "schema_name",
        nargs="?",
        default="check_result.schema.json",
        help="Schema filename (default: check_result.schema.json)",
    )
    return p


def _load_config(args: argparse.Namespace, root: Path) -> LocalizationConfig:
    if args.config is not None:
        config = LocalizationConfig.from_yaml(args.config)
    else:
        config = LocalizationConfig.discover(root)
    return config.with_overrides(
        cultures=tuple(args.cultures) if args.cultures else None,
        key_case_sensitive=False if args.case_insensitive else None,
        warn_on_partial_missing=False if getattr(args, "no_partial", False) else None,
    )


# ── handlers ────────────────────────────────────────────────────────


def _handle_check(args: argparse.Namespace, root: Path, config: LocalizationConfig) -> int:
    ci_mode = bool(args.ci_mode)
    rc = _require_ci_flag(ci_mode, what="check")
    if rc is not None:
        return rc

    _, result_dict = _api_check_project(
        root, config=config, ci_mode=ci_mode, out_dir=args.out
    )
    _print_human(result_dict)
    if args.json_out:
        stable_json_dump(result_dict, sys.stdout, ci_mode=ci_mode, indent=2)
    return _exit_code_from_counts(result_dict, args.strict)


def _handle_suggest(args: argparse.Namespace, root: Path, config: LocalizationConfig) -> int:
    candidates = _api_suggest_keys(root, args.key, top=args.top, config=config)
    if args.json_out:
        stable_json_dump([c.to_dict() for c in candidates], sys.stdout)
    elif not candidates:
        print(f"no keys similar to '{args.key}'", file=sys.stderr)
    else:
        for c in candidates:
            print(f"{c.score:5d}  {c.key}")
    return ExitCode.SUCCESS


def _report_fixes(args: argparse.Namespace, fixes: list, results: list) -> int:
    if args.json_out:
        stable_json_dump(
            {
                "dry_run": args.dry_run,
                "fixes": [f.to_dict() for f in fixes],
                "results": [r.to_dict() for r in results],
            },
            sys.stdout,
        )
    else:
        if not fixes:
            print("nothing to fix", file=sys.stderr)
        for fix in fixes:
            print(fix.describe())
    if any(not r.success for r in results):
        for r in results:
            for err in r.errors:
                print(f"error: {r.file_path}: {err}", file=sys.stderr)
        return ExitCode.ERROR
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = clean, 1 = violations, 2 = error)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help(sys.stderr)
        return ExitCode.ERROR

    # ── validate subcommand ─────────────────────────────────────────
    if args.command == "validate":
        import jsonschema

        try:
            instance_dict = json.loads(Path(args.instance).read_text(encoding="utf-8"))
            _api_validate_instance(instance_dict, args.schema_name)
        except jsonschema.exceptions.ValidationError as e:
            print(f"FAIL: {e.message}", file=sys.stderr)
            return ExitCode.VIOLATION
        except (OSError, ValueError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return ExitCode.ERROR
        print("OK")
        return ExitCode.SUCCESS

    root: Path = args.root.resolve()
    if not root.is_dir():
        print(f"error: root is not a directory: {root}", file=sys.stderr)
        return ExitCode.ERROR

    try:
        config = _load_config(args, root)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    if args.command == "check":
        return _handle_check(args, root, config)

    if args.command == "suggest":
        return _handle_suggest(args, root, config)

    if args.command == "fix":
        fixes, results = _api_create_missing_key(
            root,
            args.key,
            cultures=args.cultures or (),
            value=args.value,
            config=config,
            dry_run=args.dry_run,
            create_backup=args.backup,
        )
        return _report_fixes(args, fixes, results)

    if args.command == "fix-partial":
        fixes, results = _api_fill_partial_key(
            root,
            args.key,
            config=config,
            dry_run=args.dry_run,
            create_backup=args.backup,
        )
        return _report_fixes(args, fixes, results)

    parser.print_help(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
