"""
naming.records.codec
--------------------

Decode and encode record payloads.

Two on-chain encodings coexist for fixed-size kinds:

- *native*: the fixed binary layout (20-byte addresses, 4/16-byte IPs,
  32-byte key + 64-byte signature for SOL);
- *legacy*: the record's text form written as UTF-8, shorter than the
  native layout and zero padded.

`decode` tells them apart from the bytes alone: the payload is native iff its
length up to the last non-zero byte equals the kind's expected size. A native
record whose last byte happens to be zero is therefore read as legacy and
rejected; this matches what deployed readers do and must not be tightened
without a format version.

SOL records certify themselves: bytes [0:32] are the destination key and
bytes [32:96] its Ed25519 signature over ``dst || record_key``, so the value
is bound to the account it is stored in.

All functions are pure: no logging, no I/O, no retained state.
"""

from __future__ import annotations

from typing import Optional, Union

from naming.crypto import ed25519
from naming.errors import (
    InvalidRecordData,
    MalformedInput,
    RecordDecodeError,
    ReverseValidationError,
)

from . import address as _addr
from .interfaces import RecordKey, SignatureVerifier, Signer
from .types import (
    SOL_DST_LEN,
    SOL_SIGNATURE_LEN,
    RecordType,
    as_record_type,
    expected_size,
)

BytesLike = Union[bytes, bytearray, memoryview]

# Every fixed-size kind other than SOL needs an address codec.
_missing = [
    rt for rt in RecordType
    if expected_size(rt) is not None and rt is not RecordType.SOL and rt not in _addr.ADDRESS_CODECS
]
if _missing:  # pragma: no cover - registry/codec mismatch
    raise RuntimeError(f"fixed-size record kinds without a codec: {_missing}")


def record_key_bytes(key: RecordKey) -> bytes:
    """Normalize a storage key given as 32 raw bytes or base58 text."""
    if isinstance(key, str):
        return ed25519.decode_pubkey(key)
    raw = bytes(key)
    if len(raw) != ed25519.PUBLIC_KEY_LEN:
        raise MalformedInput("record key must be 32 bytes", got=len(raw))
    return raw


def significant_length(data: BytesLike) -> int:
    """Index one past the last non-zero byte (0 for empty/all-zero)."""
    return len(bytes(data).rstrip(b"\x00"))


def is_legacy(data: BytesLike, kind: RecordType) -> bool:
    """True when a fixed-size record is stored in the legacy text encoding."""
    size = expected_size(kind)
    return size is not None and significant_length(data) != size


# ---------------------------------------------------------------------------
# Identity (SOL) records
# ---------------------------------------------------------------------------


def sol_message(dst: BytesLike, record_key: RecordKey) -> bytes:
    """Message signed by a SOL record: ``dst || record_key``."""
    return bytes(dst) + record_key_bytes(record_key)


def verify_sol_record(
    dst: BytesLike,
    signature: BytesLike,
    record_key: RecordKey,
    *,
    verifier: SignatureVerifier = ed25519.verify,
) -> bool:
    """
    Check that `signature` was made by `dst` over ``dst || record_key``.

    Returns False for a wrong signature; raises MalformedInput when `dst` or
    `signature` are not well-formed for the scheme.
    """
    dst = bytes(dst)
    if len(dst) != SOL_DST_LEN:
        raise MalformedInput("SOL destination must be 32 bytes", got=len(dst))
    return verifier(sol_message(dst, record_key), bytes(signature), dst)


def build_sol_payload(dst: BytesLike, record_key: RecordKey, signer: Signer) -> bytes:
    """Native 96-byte SOL payload, signed by `signer` (which must own `dst`)."""
    dst = bytes(dst)
    if len(dst) != SOL_DST_LEN:
        raise InvalidRecordData("SOL destination must be 32 bytes", got=len(dst))
    if bytes(signer.public_key) != dst:
        raise InvalidRecordData(
            "signer does not own the destination key",
            dst=dst,
            signer=bytes(signer.public_key),
        )
    signature = bytes(signer.sign(sol_message(dst, record_key)))
    if len(signature) != SOL_SIGNATURE_LEN:
        raise InvalidRecordData("signer returned a malformed signature", got=len(signature))
    if not verify_sol_record(dst, signature, record_key):
        raise InvalidRecordData("signer produced a signature that does not verify")
    return dst + signature


def _decode_sol(data: bytes, record_key: RecordKey, verifier: SignatureVerifier) -> str:
    key = record_key_bytes(record_key)
    dst = data[:SOL_DST_LEN]
    signature = data[SOL_DST_LEN:]
    try:
        valid = verify_sol_record(dst, signature, key, verifier=verifier)
    except MalformedInput as e:
        raise InvalidRecordData("SOL record signature is malformed", reason=e.message) from e
    if not valid:
        raise InvalidRecordData("SOL record signature does not verify")
    return ed25519.encode_pubkey(dst)


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def _decode_legacy(data: bytes, kind: RecordType) -> str:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise RecordDecodeError(
            f"legacy {kind.tag} record is not valid UTF-8: {e.reason}",
            record=kind.tag,
            position=e.start,
        ) from e

    codec = _addr.ADDRESS_CODECS.get(kind)
    if codec is not None:
        _fmt, validate, _parse = codec
        if validate(text):
            return text
    raise ReverseValidationError(
        f"legacy {kind.tag} record does not parse as its address format",
        record=kind.tag,
        value=text,
    )


def decode(
    data: BytesLike,
    kind: RecordType,
    record_key: RecordKey,
    *,
    verifier: SignatureVerifier = ed25519.verify,
) -> str:
    """
    Decode the payload stored for a record into its human-readable value.

    Args:
      data: raw account payload (after the name registry header).
      kind: record kind the payload was stored under.
      record_key: storage key of the record (32 bytes or base58); bound into
        SOL signatures.
      verifier: signature capability; Ed25519 by default.

    Raises:
      RecordDecodeError: text where UTF-8 was expected is not UTF-8.
      ReverseValidationError: a legacy record is not a valid value of its kind.
      InvalidRecordData: a SOL signature is malformed or does not verify.
      MalformedInput: `record_key` is not a 32-byte key (SOL only).
    """
    kind = as_record_type(kind)
    data = bytes(data)
    size = expected_size(kind)

    if size is None:
        return _addr.decode_text(data)

    end = significant_length(data)
    if end != size:
        return _decode_legacy(data[:end], kind)

    data = data[:size]
    if kind is RecordType.SOL:
        return _decode_sol(data, record_key, verifier)
    if kind is RecordType.ETH or kind is RecordType.BSC:
        return _addr.format_hex_address(data)
    if kind is RecordType.INJ:
        return _addr.format_bech32_address(data)
    if kind is RecordType.A:
        return _addr.format_ipv4(data)
    if kind is RecordType.AAAA:
        return _addr.format_ipv6(data)
    raise InvalidRecordData(f"no native layout for {kind.tag}", record=kind.tag)


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def encode(
    text: str,
    kind: RecordType,
    *,
    record_key: Optional[RecordKey] = None,
    signer: Optional[Signer] = None,
) -> bytes:
    """
    Serialize a human-readable value into its native payload.

    Fixed-size kinds produce exactly `expected_size(kind)` bytes; text kinds
    produce the UTF-8 bytes of `text`. SOL records need the `record_key` they
    will be stored at and a `signer` holding the private key of `text`.
    """
    kind = as_record_type(kind)
    size = expected_size(kind)

    if size is None:
        return text.encode("utf-8")

    if kind is RecordType.SOL:
        if record_key is None or signer is None:
            raise InvalidRecordData("SOL records need a record key and a signer")
        try:
            dst = ed25519.decode_pubkey(text)
        except MalformedInput as e:
            raise InvalidRecordData(f"invalid SOL destination: {e.message}", value=text) from e
        payload = build_sol_payload(dst, record_key, signer)
    else:
        codec = _addr.ADDRESS_CODECS.get(kind)
        if codec is None:
            raise InvalidRecordData(f"no native layout for {kind.tag}", record=kind.tag)
        _fmt, _validate, parse = codec
        payload = parse(text.strip())

    if len(payload) != size:  # pragma: no cover - guarded by parsers
        raise InvalidRecordData("encoded payload has the wrong size", expected=size, got=len(payload))
    return payload


__all__ = [
    "decode",
    "encode",
    "is_legacy",
    "significant_length",
    "record_key_bytes",
    "sol_message",
    "verify_sol_record",
    "build_sol_payload",
]
