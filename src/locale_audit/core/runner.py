"""Runner — orchestrates catalog, usage scan and diagnostics, builds CheckResult."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from locale_audit.analyzers import UsageScanner
from locale_audit.analyzers.engine import DiagnosticEngine
from locale_audit.analyzers.python_usages import PythonUsageScanner
from locale_audit.catalog.builder import ResourceCatalogBuilder, default_workers, read_resource_files
from locale_audit.contracts.load import validate_instance
from locale_audit.core.cancellation import CancellationToken, OperationCancelled, check_cancelled
from locale_audit.core.config import LocalizationConfig
from locale_audit.core.discover import discover_resource_files, discover_source_files
from locale_audit.model.check_result import CheckResult
from locale_audit.model.diagnostic import Diagnostic, UsageSite, assign_ids
from locale_audit.utils.determinism import (
    deterministic_run_id,
    deterministic_timestamp,
    normalize_path,
)
from locale_audit.utils.json_norm import stable_json_dumps

_logger = logging.getLogger(__name__)

RESULT_FILE_NAME = "check_result.json"


def _scan_file(
    scanner: UsageScanner,
    path: Path,
    root: Path,
    cancel: CancellationToken | None,
) -> list[UsageSite]:
    check_cancelled(cancel)
    rel = normalize_path(path, root)
    try:
        source = path.read_text(encoding="utf-8", errors="replace")
        return scanner.scan(rel, source)
    except OperationCancelled:
        raise
    except Exception:
        _logger.exception("Source file '%s' raised an exception — skipped", rel)
        return []


def run_check(
    root: Path,
    *,
    config: LocalizationConfig | None = None,
    scanner: UsageScanner | None = None,
    cancel: CancellationToken | None = None,
    workers: int | None = None,
    on_diagnostic: Callable[[Diagnostic], None] | None = None,
    out_dir: Path | None = None,
    ci_mode: bool = False,
    # Testing hooks for golden-fixture determinism
    _run_id: str | None = None,
    _created_at: str | None = None,
) -> CheckResult:
    """Check *root* and assemble a ``CheckResult``.

    Missing / PartialMissing diagnostics are streamed to *on_diagnostic*
    as source files are scanned; Unused / Duplicate follow after every
    file has been processed.  Raises ``OperationCancelled`` if *cancel*
    fires, in which case nothing is returned or written.
    """
    root = root.resolve()
    config = config or LocalizationConfig()
    scanner = scanner or PythonUsageScanner(config)
    workers = workers if workers is not None else default_workers()

    # ── 1. catalog ──────────────────────────────────────────────────
    resource_paths = discover_resource_files(root, config.json_patterns, exclude=config.exclude)
    builder = ResourceCatalogBuilder(config, root=root, workers=workers, cancel=cancel)
    catalog = builder.build(read_resource_files(resource_paths, root))

    # ── 2. usages (streamed) ────────────────────────────────────────
    source_paths = discover_source_files(root, scanner.extensions, exclude=config.exclude)
    engine = DiagnosticEngine(catalog, config)
    staged: list[Diagnostic] = []
    usage_count = 0

    def _consume(sites: list[UsageSite]) -> None:
        nonlocal usage_count
        for site in sites:
            usage_count += 1
            diagnostic = engine.on_usage(site)
            if diagnostic is not None:
                staged.append(diagnostic)
                if on_diagnostic is not None:
                    on_diagnostic(diagnostic)

    if workers > 1 and len(source_paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_scan_file, scanner, p, root, cancel) for p in source_paths]
            try:
                for future in futures:
                    _consume(future.result())
            except OperationCancelled:
                for future in futures:
                    future.cancel()
                _logger.warning("Check of %s cancelled — partial results dropped", root)
                raise
    else:
        for p in source_paths:
            _consume(_scan_file(scanner, p, root, cancel))

    # ── 3. barrier: whole-program diagnostics ───────────────────────
    check_cancelled(cancel)
    end_of_pass = engine.finalize()
    if on_diagnostic is not None:
        for diagnostic in end_of_pass:
            on_diagnostic(diagnostic)
    diagnostics = assign_ids(staged + end_of_pass)

    # ── 4. assemble CheckResult ─────────────────────────────────────
    result = CheckResult(
        run_id=_run_id
        or deterministic_run_id(root, [*resource_paths, *source_paths], ci_mode),
        created_at=_created_at or deterministic_timestamp(ci_mode),
        config={"root": root.name if ci_mode else str(root), **config.to_dict()},
        catalog=catalog.summary(config.cultures),
        usage_count=usage_count,
        source_files=len(source_paths),
        diagnostics=diagnostics,
    )

    # ── 5. validate output against schema ───────────────────────────
    result_dict = result.to_dict()
    validate_instance(result_dict, "check_result.schema.json")

    # ── 6. optionally write artifacts to disk ───────────────────────
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / RESULT_FILE_NAME).write_text(
            stable_json_dumps(result_dict, ci_mode=ci_mode),
            encoding="utf-8",
        )
    _logger.debug(
        "Check of %s: %d usage(s), %d diagnostic(s)", root, usage_count, len(diagnostics)
    )
    return result
