"""
naming.logging
--------------

Process-wide logging setup for the CLI and resolver.

- JSON or concise text formats
- Safe JSON serialization (bytes → hex, errors → their `to_dict()`)
- Extra fields passed via `extra={...}` are carried into JSON lines

Usage
-----
    from naming import logging as nlog

    nlog.configure(level="DEBUG", json=True)   # once at process start
    log = nlog.get_logger(__name__)
    log.info("decoded", extra={"record": "SOL"})

Library modules only call `logging.getLogger(__name__)`; the codec does not
log at all.
"""

from __future__ import annotations

import datetime as _dt
import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

ROOT_LOGGER = "naming"

# LogRecord attributes that are not user-supplied extras.
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


def _coerce_value(v: Any) -> Any:
    if isinstance(v, (bytes, bytearray, memoryview)):
        return bytes(v).hex()
    if hasattr(v, "to_dict"):
        try:
            return v.to_dict()
        except Exception:
            return str(v)
    if isinstance(v, (str, int, float, bool)) or v is None:
        return v
    if isinstance(v, (list, tuple)):
        return [_coerce_value(x) for x in v]
    if isinstance(v, dict):
        return {str(k): _coerce_value(x) for k, x in v.items()}
    return str(v)


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: _coerce_value(v)
        for k, v in record.__dict__.items()
        if k not in _RESERVED and not k.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        out: Dict[str, Any] = {
            "ts": _dt.datetime.fromtimestamp(record.created, _dt.timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        out.update(_extras(record))
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, ensure_ascii=False, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname[0]} {record.name}: {record.getMessage()}"
        extras = _extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure(
    level: str = "INFO",
    *,
    json: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Install a single stream handler on the package logger. Safe to call more
    than once; the previous handler is replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for h in list(logger.handlers):
        if getattr(h, "_naming_handler", False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if json else TextFormatter())
    handler._naming_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


__all__ = ["configure", "get_logger", "JsonFormatter", "TextFormatter", "ROOT_LOGGER"]
