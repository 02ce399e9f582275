"""Python usage scanner — finds literal localization keys with ``ast``.

Recognised forms, driven by ``LocalizationConfig.accessor_kinds``:

  Method:Localizer.Get   ``localizer.get("home.title")``,
                         ``self._localizer.Get("home.title")``
  Method:Translate       ``translate("home.title")``, ``i18n.translate(...)``
  Indexer:IStringLocalizer
                         ``localizer["home.title"]``,
                         ``self.string_localizer["home.title"]``

Only a constant string as the first argument (or as the subscript) is a
usage.  Anything computed at runtime is ignored.
"""

from __future__ import annotations

import ast
import logging
import re

from locale_audit.core.config import LocalizationConfig
from locale_audit.model import AccessorType
from locale_audit.model.diagnostic import Location, UsageSite

_logger = logging.getLogger(__name__)

_CAMEL_WORD_RE = re.compile(r"[A-Z][a-z0-9]*|[a-z0-9]+")


def _norm(segment: str) -> str:
    return segment.replace("_", "").lower()


def _dotted(node: ast.expr) -> list[str]:
    """Name segments of ``a.b.c``; unknown bases are dropped."""
    parts: list[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if isinstance(node, ast.Name):
        parts.append(node.id)
    parts.reverse()
    return parts


def _indexer_suffixes(type_name: str) -> tuple[str, ...]:
    """``IStringLocalizer`` -> ``("istringlocalizer", "localizer")``."""
    words = _CAMEL_WORD_RE.findall(type_name)
    suffixes = [_norm(type_name)]
    if words:
        suffixes.append(words[-1].lower())
    return tuple(dict.fromkeys(s for s in suffixes if s))


class PythonUsageScanner:
    """Extracts ``UsageSite`` facts from Python source."""

    id: str = "python_usages"
    extensions: tuple[str, ...] = (".py",)

    def __init__(self, config: LocalizationConfig | None = None) -> None:
        config = config or LocalizationConfig()
        self._methods = [
            [_norm(s) for s in name.split(".") if s]
            for name in config.accessor_names(AccessorType.METHOD)
        ]
        self._indexers: tuple[str, ...] = tuple(
            s
            for name in config.accessor_names(AccessorType.INDEXER)
            for s in _indexer_suffixes(name)
        )

    # ── matching ────────────────────────────────────────────────────

    def _is_method(self, func: ast.expr) -> bool:
        segments = [_norm(s) for s in _dotted(func)]
        if not segments:
            return False
        for wanted in self._methods:
            if wanted and segments[-len(wanted):] == wanted:
                return True
        return False

    def _is_indexer(self, target: ast.expr) -> bool:
        segments = _dotted(target)
        if not segments:
            return False
        last = _norm(segments[-1])
        return any(last.endswith(suffix) for suffix in self._indexers)

    # ── scanning ────────────────────────────────────────────────────

    def scan(self, path: str, source: str) -> list[UsageSite]:
        try:
            tree = ast.parse(source, filename=path)
        except SyntaxError as e:
            _logger.debug("Cannot parse %s: %s — skipped", path, e)
            return []

        sites: list[UsageSite] = []
        for node in ast.walk(tree):
            key_node: ast.expr | None = None
            if isinstance(node, ast.Call) and node.args and self._is_method(node.func):
                key_node = node.args[0]
            elif isinstance(node, ast.Subscript) and self._is_indexer(node.value):
                key_node = node.slice

            if not (isinstance(key_node, ast.Constant) and isinstance(key_node.value, str)):
                continue
            line = key_node.lineno
            sites.append(
                UsageSite(
                    key=key_node.value,
                    location=Location(
                        path=path,
                        line_start=line,
                        line_end=getattr(key_node, "end_lineno", line) or line,
                        column=key_node.col_offset + 1,
                    ),
                )
            )

        sites.sort(key=lambda s: (s.location.line_start, s.location.column))
        return sites
