from __future__ import annotations

"""
address.py: per-kind text codecs for fixed-layout records

Each fixed-size, externally governed kind has three routines:

- `format_*(raw)`      native bytes → canonical text
- `validate_*(text)`   legacy text check, True/False
- `parse_*(text)`      text → native bytes, raises InvalidRecordData

Formats
-------
ETH / BSC   "0x" + 40 hex digits                      20 bytes
INJ         bech32 (BIP-0173), HRP "inj"              20 bytes
A           dotted-decimal IPv4                        4 bytes
AAAA        colon-hex IPv6 (RFC 5952 text)            16 bytes

Text kinds are UTF-8 with trailing NUL padding stripped.

>>> format_hex_address(bytes(20))
'0x0000000000000000000000000000000000000000'
>>> format_ipv4(bytes([127, 0, 0, 1]))
'127.0.0.1'
"""

import ipaddress
import re
from typing import Callable, Dict, Tuple

from naming.crypto import bech32 as _b32
from naming.errors import InvalidRecordData, MalformedInput, RecordDecodeError

from .types import RecordType

INJ_HRP = "inj"
ADDRESS_LEN = 20

_HEX_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")


def _require_len(raw: bytes, size: int, what: str) -> bytes:
    if len(raw) != size:
        raise MalformedInput(f"{what} must be {size} bytes", expected=size, got=len(raw))
    return raw


# ---------------------------------------------------------------------------
# Hex addresses (ETH, BSC)
# ---------------------------------------------------------------------------


def format_hex_address(raw: bytes) -> str:
    return "0x" + _require_len(bytes(raw), ADDRESS_LEN, "hex address").hex()


def validate_hex_address(text: str) -> bool:
    return _HEX_ADDRESS_RE.fullmatch(text) is not None


def parse_hex_address(text: str) -> bytes:
    if not validate_hex_address(text):
        raise InvalidRecordData("expected 0x followed by 40 hex digits", value=text)
    return bytes.fromhex(text[2:])


# ---------------------------------------------------------------------------
# Bech32 addresses (INJ)
# ---------------------------------------------------------------------------


def format_bech32_address(raw: bytes, hrp: str = INJ_HRP) -> str:
    raw = _require_len(bytes(raw), ADDRESS_LEN, "bech32 address")
    return _b32.encode_payload(hrp, raw, _b32.BECH32)


def _decode_bech32_address(text: str, hrp: str) -> bytes:
    try:
        got_hrp, payload, _spec = _b32.decode_payload(text)
    except _b32.Bech32Error as e:
        raise InvalidRecordData(f"bech32 decode failed: {e}", value=text) from e
    if got_hrp != hrp:
        raise InvalidRecordData(
            f"HRP mismatch: expected {hrp!r}, got {got_hrp!r}", value=text
        )
    if len(payload) != ADDRESS_LEN:
        raise InvalidRecordData(
            "bech32 payload must be 20 bytes", value=text, got=len(payload)
        )
    return payload


def validate_bech32_address(text: str, hrp: str = INJ_HRP) -> bool:
    try:
        _decode_bech32_address(text, hrp)
    except InvalidRecordData:
        return False
    return True


def parse_bech32_address(text: str, hrp: str = INJ_HRP) -> bytes:
    return _decode_bech32_address(text, hrp)


# ---------------------------------------------------------------------------
# IP addresses (A, AAAA)
# ---------------------------------------------------------------------------


def format_ipv4(raw: bytes) -> str:
    return str(ipaddress.IPv4Address(_require_len(bytes(raw), 4, "IPv4 address")))


def format_ipv6(raw: bytes) -> str:
    addr = ipaddress.IPv6Address(_require_len(bytes(raw), 16, "IPv6 address"))
    # IPv4-mapped addresses keep the dotted tail on every interpreter version.
    if addr.ipv4_mapped is not None:
        return f"::ffff:{addr.ipv4_mapped}"
    return str(addr)


def parse_ipv4(text: str) -> bytes:
    try:
        return ipaddress.IPv4Address(text).packed
    except ValueError as e:
        raise InvalidRecordData(f"invalid IPv4 address: {e}", value=text) from e


def parse_ipv6(text: str) -> bytes:
    # Zone ids ("fe80::1%eth0") are not part of a stored address.
    if "%" in text:
        raise InvalidRecordData("IPv6 zone ids are not allowed", value=text)
    try:
        return ipaddress.IPv6Address(text).packed
    except ValueError as e:
        raise InvalidRecordData(f"invalid IPv6 address: {e}", value=text) from e


def validate_ipv4(text: str) -> bool:
    try:
        parse_ipv4(text)
    except InvalidRecordData:
        return False
    return True


def validate_ipv6(text: str) -> bool:
    try:
        parse_ipv6(text)
    except InvalidRecordData:
        return False
    return True


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def decode_text(raw: bytes) -> str:
    """UTF-8 decode with trailing NUL padding removed."""
    try:
        return bytes(raw).rstrip(b"\x00").decode("utf-8")
    except UnicodeDecodeError as e:
        raise RecordDecodeError(f"record is not valid UTF-8: {e.reason}", position=e.start) from e


# ---------------------------------------------------------------------------
# Per-kind table
# ---------------------------------------------------------------------------

Formatter = Callable[[bytes], str]
Validator = Callable[[str], bool]
Parser = Callable[[str], bytes]

ADDRESS_CODECS: Dict[RecordType, Tuple[Formatter, Validator, Parser]] = {
    RecordType.ETH: (format_hex_address, validate_hex_address, parse_hex_address),
    RecordType.BSC: (format_hex_address, validate_hex_address, parse_hex_address),
    RecordType.INJ: (format_bech32_address, validate_bech32_address, parse_bech32_address),
    RecordType.A: (format_ipv4, validate_ipv4, parse_ipv4),
    RecordType.AAAA: (format_ipv6, validate_ipv6, parse_ipv6),
}


__all__ = [
    "INJ_HRP",
    "ADDRESS_LEN",
    "ADDRESS_CODECS",
    "format_hex_address",
    "validate_hex_address",
    "parse_hex_address",
    "format_bech32_address",
    "validate_bech32_address",
    "parse_bech32_address",
    "format_ipv4",
    "format_ipv6",
    "parse_ipv4",
    "parse_ipv6",
    "validate_ipv4",
    "validate_ipv6",
    "decode_text",
]
