from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION

SCHEMAS_ROOT = Path(__file__).resolve().parents[1] / "schemas"


def schema_path_for(schema_name: str) -> Path:
    path = SCHEMAS_ROOT / f"{schema_name}.schema.json"
    if not path.exists():
        raise ScriptError(f"unknown schema `{schema_name}`", ERR_VALIDATION, "schema_missing")
    return path


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    payload: dict[str, Any] = json.loads(schema_path_for(schema_name).read_text(encoding="utf-8"))
    return payload


def validate(schema_name: str, payload: Any) -> None:
    try:
        jsonschema.validate(payload, load_schema(schema_name))
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(
            f"schema validation failed for {schema_name} at {loc}: {exc.message}",
            ERR_VALIDATION,
            "schema_validation",
        ) from exc
