"""Gate configuration.

Commands and run policy come from, in order: an explicit ``--config`` file,
``.commitgate.yaml`` at the repository root, ``[tool.commitgate]`` in
``pyproject.toml``. Without any of them the gate runs the cargo toolchain.
"""

from __future__ import annotations

import shlex
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal

import yaml

from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG, ERR_VALIDATION
from .schema import validate

FailurePolicy = Literal["last", "first"]
Command = tuple[str, ...]

CONFIG_SCHEMA = "commitgate.config.v1"
YAML_CONFIG_NAME = ".commitgate.yaml"
PYPROJECT_TABLE = ("tool", "commitgate")


@dataclass(frozen=True)
class GateConfig:
    diff: Command = ("git", "diff")
    formatter: Command = ("cargo", "fmt")
    build: Command = ("cargo", "build")
    doc: Command = ("cargo", "doc")
    test: Command = ("cargo", "test")
    failure_policy: FailurePolicy = "last"
    fail_fast: bool = False
    snapshot_dir: Path | None = None
    source: str = field(default="defaults", compare=False)

    def with_overrides(self, **overrides: object) -> "GateConfig":
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self


DEFAULT_CONFIG = GateConfig()


def _as_command(key: str, value: str | list[str]) -> Command:
    command = tuple(shlex.split(value)) if isinstance(value, str) else tuple(value)
    if not command:
        raise ScriptError(
            f"schema validation failed for {CONFIG_SCHEMA} at {key}: command is empty",
            ERR_VALIDATION,
            "schema_validation",
        )
    return command


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ScriptError(f"unable to read config {path}: {exc}", ERR_CONFIG, "config_parse") from exc


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ScriptError(f"unable to read config {path}: {exc}", ERR_CONFIG, "config_parse") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ScriptError(f"config {path} must be a mapping", ERR_CONFIG, "config_parse")
    return payload


def _pyproject_table(document: dict[str, Any]) -> dict[str, Any] | None:
    node: Any = document
    for key in PYPROJECT_TABLE:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node if isinstance(node, dict) else None


def config_from_mapping(raw: dict[str, Any], repo_root: Path, source: str) -> GateConfig:
    validate(CONFIG_SCHEMA, raw)
    values: dict[str, Any] = {}
    for key in ("diff", "formatter", "build", "doc", "test"):
        if key in raw:
            values[key] = _as_command(key, raw[key])
    if "failure_policy" in raw:
        values["failure_policy"] = raw["failure_policy"]
    if "fail_fast" in raw:
        values["fail_fast"] = raw["fail_fast"]
    if raw.get("snapshot_dir") is not None:
        snapshot_dir = Path(raw["snapshot_dir"])
        values["snapshot_dir"] = snapshot_dir if snapshot_dir.is_absolute() else repo_root / snapshot_dir
    return GateConfig(source=source, **values)


def load_config(repo_root: Path, explicit: Path | None = None) -> GateConfig:
    if explicit is not None:
        path = explicit if explicit.is_absolute() else repo_root / explicit
        if not path.is_file():
            raise ScriptError(f"config file not found: {path}", ERR_CONFIG, "config_missing")
        if path.suffix == ".toml":
            document = _read_toml(path)
            table = _pyproject_table(document)
            raw = table if table is not None else document
        else:
            raw = _read_yaml(path)
        return config_from_mapping(raw, repo_root, str(path))

    yaml_path = repo_root / YAML_CONFIG_NAME
    if yaml_path.is_file():
        return config_from_mapping(_read_yaml(yaml_path), repo_root, str(yaml_path))

    pyproject = repo_root / "pyproject.toml"
    if pyproject.is_file():
        table = _pyproject_table(_read_toml(pyproject))
        if table is not None:
            return config_from_mapping(table, repo_root, f"{pyproject}:[tool.commitgate]")

    return DEFAULT_CONFIG
