"""
naming.config
-------------

Settings for the CLI and resolver front ends. The codec itself takes no
configuration: record layouts are fixed by the protocol.

Precedence (highest first):
  1) explicit overrides passed to `load_config()`
  2) environment variables (NAMING_*)
  3) config file (JSON, or YAML) named by `path` or NAMING_CONFIG
  4) defaults

Environment variables
~~~~~~~~~~~~~~~~~~~~~
NAMING_LOG_LEVEL=INFO            DEBUG|INFO|WARNING|ERROR|CRITICAL
NAMING_LOG_JSON=false            structured JSON log lines
NAMING_JSON=false                JSON command output
NAMING_DOMAIN_SUFFIX=.sol        suffix appended/stripped on domain names
NAMING_CONFIG=/path/to/naming.yaml
"""

from __future__ import annotations

import dataclasses
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from naming.errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _parse_bool(name: str, v: Any) -> bool:
    if isinstance(v, bool):
        return v
    vv = str(v).strip().lower()
    if vv in _TRUE:
        return True
    if vv in _FALSE:
        return False
    raise ConfigError(f"{name}: expected a boolean, got {v!r}", field=name)


def _load_file_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file: {e}", path=str(path)) from e
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot parse config file: {e}", path=str(path)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config file must contain a mapping", path=str(path))
    return data


@dataclass(frozen=True)
class NamingConfig:
    log_level: str = "INFO"
    log_json: bool = False
    json_output: bool = False
    domain_suffix: str = ".sol"

    def validate(self) -> "NamingConfig":
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}", got=self.log_level
            )
        if not self.domain_suffix.startswith(".") or len(self.domain_suffix) < 2:
            raise ConfigError("domain_suffix must look like '.sol'", got=self.domain_suffix)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


_ENV_KEYS = {
    "log_level": "NAMING_LOG_LEVEL",
    "log_json": "NAMING_LOG_JSON",
    "json_output": "NAMING_JSON",
    "domain_suffix": "NAMING_DOMAIN_SUFFIX",
}


def load_config(
    overrides: Optional[Mapping[str, Any]] = None,
    path: Optional[Union[str, Path]] = None,
) -> NamingConfig:
    """
    Build a validated NamingConfig. Unknown keys in files or overrides are
    rejected; None values in `overrides` are ignored.
    """
    fields = {f.name for f in dataclasses.fields(NamingConfig)}
    merged: Dict[str, Any] = {}

    file_path = path or _env("NAMING_CONFIG")
    if file_path:
        merged.update(_load_file_config(Path(file_path).expanduser()))

    for key, env_name in _ENV_KEYS.items():
        v = _env(env_name)
        if v is not None:
            merged[key] = v

    for key, v in (overrides or {}).items():
        if v is not None:
            merged[key] = v

    unknown = sorted(set(merged) - fields)
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(unknown)}", keys=unknown)

    return NamingConfig(
        log_level=str(merged.get("log_level", "INFO")).upper(),
        log_json=_parse_bool("log_json", merged.get("log_json", False)),
        json_output=_parse_bool("json_output", merged.get("json_output", False)),
        domain_suffix=str(merged.get("domain_suffix", ".sol")),
    ).validate()


__all__ = ["NamingConfig", "load_config", "LOG_LEVELS"]
