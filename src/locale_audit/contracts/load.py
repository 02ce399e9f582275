"""Load and validate JSON instances against the bundled schemas.

Usage::

    from locale_audit.contracts.load import validate_instance, validate_file

    validate_instance(my_dict, "check_result.schema.json")
    validate_file(Path("out/check_result.json"), "check_result.schema.json")
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"

CHECK_RESULT_SCHEMA = "check_result.schema.json"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/locale_audit/data/schemas/`` (relative to this file)
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    # Works for wheel / zip installs
    with resources.as_file(resources.files("locale_audit") / SCHEMA_DIR / name) as p:
        return p


def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str = CHECK_RESULT_SCHEMA) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=instance, schema=schema)


def validate_file(instance_path: Path, schema_name: str = CHECK_RESULT_SCHEMA) -> None:
    """Load a JSON file and validate it against the named schema."""
    instance = json.loads(instance_path.read_text(encoding="utf-8"))

    # Readable error before the generic jsonschema traceback.
    if schema_name == CHECK_RESULT_SCHEMA and isinstance(instance, dict):
        sv = instance.get("schema_version")
        if sv != "check_result_v1":
            raise ValueError(
                f"{instance_path}: expected schema_version='check_result_v1', got {sv!r}"
            )

    validate_instance(instance, schema_name)
