"""locale_audit — localization key consistency engine."""

__all__ = [
    "__version__",
    "check_project",
    "suggest_keys",
    "create_missing_key",
    "fill_partial_key",
    "validate_instance",
]
__version__ = "0.1.0"

# Programmatic engine entrypoints (backend use).
from locale_audit.api import (  # noqa: E402, F401
    check_project,
    create_missing_key,
    fill_partial_key,
    suggest_keys,
    validate_instance,
)
