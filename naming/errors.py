"""
naming.errors
-------------

Exception hierarchy for the naming record codec.

Every failure produced by the codec (decode/encode), the signature verifier
and the resolver is one of the classes below. Library code raises them and
never logs or swallows them; presentation belongs to the caller (the CLI
catches `RecordError` at its boundary).

Design goals
~~~~~~~~~~~~
- Stable codes: upper-snake ASCII identifiers suitable for JSON output.
- Deterministic payloads: `details` only carries the inputs that explain the
  failure (kind tag, lengths, short previews), never secrets.
- Distinct channels: malformed inputs, decode failures, reverse-validation
  failures and data-invalid rejections are separate classes.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


def _truncate(data: Any, max_len: int = 96) -> Any:
    """
    Truncate large strings/bytes for safe inclusion in diagnostics.
    Bytes are rendered as hex.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        raw = bytes(data)
        if len(raw) <= max_len:
            return raw.hex()
        return raw[:max_len].hex() + "..."
    if isinstance(data, str):
        if len(data) <= max_len:
            return data
        return data[:max_len] + "..."
    if isinstance(data, (list, tuple)):
        return [_truncate(x, max_len) for x in data[:16]]
    if isinstance(data, dict):
        return {str(k): _truncate(v, max_len) for k, v in list(data.items())[:16]}
    return data


class RecordError(Exception):
    """
    Base class for record codec errors.

    Attributes
    ----------
    code : str
        Stable, upper-snake ASCII identifier (e.g., 'INVALID_REVERSE').
    message : str
        Human-friendly explanation (single line preferred).
    details : dict
        Optional structured data safe to print or serialize.
    """

    code: str = "RECORD_ERROR"

    def __init__(
        self,
        message: str = "record error",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = _truncate(dict(details)) if details else {}

    def __str__(self) -> str:
        if self.details:
            preview = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.code}: {self.message} [{preview}]"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe shape for CLI output and log records."""
        return {"code": self.code, "message": self.message, "details": dict(self.details)}


class MalformedInput(RecordError, ValueError):
    """
    Input bytes are structurally invalid: a buffer too short for its layout,
    or key/signature bytes of the wrong size for the signature scheme.
    """

    code = "MALFORMED_INPUT"

    def __init__(self, message: str = "malformed input", **details: Any) -> None:
        super().__init__(message, details=details)


class RecordDecodeError(RecordError):
    """Bytes are not valid UTF-8 where text was expected."""

    code = "DECODE_FAILED"

    def __init__(self, message: str = "record is not valid UTF-8", **details: Any) -> None:
        super().__init__(message, details=details)


class ReverseValidationError(RecordError):
    """
    A legacy (text-encoded) record does not parse as the address or IP
    format of its kind.
    """

    code = "INVALID_REVERSE"

    def __init__(self, message: str = "reverse validation failed", **details: Any) -> None:
        super().__init__(message, details=details)


class InvalidRecordData(RecordError):
    """
    The record cannot be trusted or produced: signature rejected, unexpected
    kind on the native path, or unparsable text handed to `encode`.
    """

    code = "INVALID_RECORD_DATA"

    def __init__(self, message: str = "invalid record data", **details: Any) -> None:
        super().__init__(message, details=details)


class UnknownRecordType(RecordError, ValueError):
    code = "UNKNOWN_RECORD_TYPE"

    def __init__(self, tag: str) -> None:
        super().__init__(f"unknown record type: {tag!r}", details={"tag": tag})


class RecordNotFound(RecordError):
    code = "RECORD_NOT_FOUND"

    def __init__(self, domain: str, kind: str, **details: Any) -> None:
        super().__init__(
            f"no {kind} record for {domain}",
            details={"domain": domain, "record": kind, **details},
        )


class ConfigError(RecordError):
    code = "CONFIG"

    def __init__(self, message: str = "invalid configuration", **details: Any) -> None:
        super().__init__(message, details=details)


__all__ = [
    "RecordError",
    "MalformedInput",
    "RecordDecodeError",
    "ReverseValidationError",
    "InvalidRecordData",
    "UnknownRecordType",
    "RecordNotFound",
    "ConfigError",
]
