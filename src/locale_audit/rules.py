"""Canonical rule registry.

Single source of truth for the diagnostic identifiers emitted by
locale-audit.  Two identifiers are stable per rule:

  rule id  - short ``LOCnnn`` id, used in fingerprints and suppressions
  code     - descriptive ``*_KEY`` code, used in reports and CI gates

Structure:
  RULES            - kind -> Rule descriptor
  PUBLIC_RULE_IDS  - stable, supported, safe for downstream consumption
  PUBLIC_CODES     - the matching descriptive codes
"""

from __future__ import annotations

from dataclasses import dataclass

from locale_audit.model import DiagnosticKind, Severity

# ── Rule ids (public) ───────────────────────────────────────────────
LOC_MISSING_001 = "LOC001"
LOC_UNUSED_001 = "LOC002"
LOC_PARTIAL_001 = "LOC003"
LOC_DUPLICATE_001 = "LOC004"

MISSING_KEY = "MISSING_KEY"
UNUSED_KEY = "UNUSED_KEY"
PARTIAL_MISSING_KEY = "PARTIAL_MISSING_KEY"
DUPLICATE_KEY = "DUPLICATE_KEY"


@dataclass(frozen=True, slots=True)
class Rule:
    """Static description of one diagnostic rule."""

    rule_id: str
    code: str
    kind: DiagnosticKind
    severity: Severity
    title: str
    message_format: str
    description: str
    # Rules that can only be evaluated once every usage has been seen.
    end_of_pass: bool = False

    def format(self, key: str, *args: str) -> str:
        return self.message_format.format(key, *args)


RULES: dict[DiagnosticKind, Rule] = {
    DiagnosticKind.MISSING: Rule(
        rule_id=LOC_MISSING_001,
        code=MISSING_KEY,
        kind=DiagnosticKind.MISSING,
        severity=Severity.ERROR,
        title="Missing localization key",
        message_format="Localization key '{0}' is not found in any configured culture",
        description=(
            "The referenced localization key does not exist in any of the "
            "configured JSON localization files."
        ),
    ),
    DiagnosticKind.UNUSED: Rule(
        rule_id=LOC_UNUSED_001,
        code=UNUSED_KEY,
        kind=DiagnosticKind.UNUSED,
        severity=Severity.WARNING,
        title="Unused localization key",
        message_format="Localization key '{0}' is defined but never used",
        description=(
            "The localization key is defined in JSON files but is not "
            "referenced anywhere in the code."
        ),
        end_of_pass=True,
    ),
    DiagnosticKind.PARTIAL_MISSING: Rule(
        rule_id=LOC_PARTIAL_001,
        code=PARTIAL_MISSING_KEY,
        kind=DiagnosticKind.PARTIAL_MISSING,
        severity=Severity.WARNING,
        title="Localization key missing in some cultures",
        message_format="Localization key '{0}' is missing in cultures: {1}",
        description="The localization key exists in some cultures but is missing in others.",
    ),
    DiagnosticKind.DUPLICATE: Rule(
        rule_id=LOC_DUPLICATE_001,
        code=DUPLICATE_KEY,
        kind=DiagnosticKind.DUPLICATE,
        severity=Severity.ERROR,
        title="Duplicate localization key",
        message_format="Localization key '{0}' is defined multiple times in the same file",
        description="The same localization key appears multiple times within a single JSON file.",
        end_of_pass=True,
    ),
}

# ── Buckets ─────────────────────────────────────────────────────────

PUBLIC_RULE_IDS: list[str] = sorted(r.rule_id for r in RULES.values())
PUBLIC_CODES: list[str] = sorted(r.code for r in RULES.values())


def rule_for(kind: DiagnosticKind) -> Rule:
    return RULES[kind]


def _assert_rule_registry_invariants() -> None:
    """Fail fast on invariant violations.

    Called at import time so CI and local runs catch issues immediately.
    """
    import re

    rule_re = re.compile(r"^LOC[0-9]{3}$")
    code_re = re.compile(r"^[A-Z][A-Z_]*_KEY$")

    if set(RULES) != set(DiagnosticKind):
        raise AssertionError("RULES must describe every DiagnosticKind exactly once")
    if len(PUBLIC_RULE_IDS) != len(set(PUBLIC_RULE_IDS)):
        raise AssertionError("PUBLIC_RULE_IDS must contain unique IDs")
    if len(PUBLIC_CODES) != len(set(PUBLIC_CODES)):
        raise AssertionError("PUBLIC_CODES must contain unique codes")
    bad = [x for x in PUBLIC_RULE_IDS if not rule_re.match(x)]
    if bad:
        raise AssertionError(f"PUBLIC_RULE_IDS contains invalid rule IDs: {bad}")
    bad = [x for x in PUBLIC_CODES if not code_re.match(x)]
    if bad:
        raise AssertionError(f"PUBLIC_CODES contains invalid codes: {bad}")
    for kind, rule in RULES.items():
        if rule.kind is not kind:
            raise AssertionError(f"RULES[{kind.value}] describes {rule.kind.value}")


_assert_rule_registry_invariants()
