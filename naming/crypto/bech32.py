from __future__ import annotations

"""
Bech32 / Bech32m primitives
===========================

BIP-0173 (bech32, constant 1) and BIP-0350 (bech32m, constant 0x2bc830a3)
encoding of a human-readable prefix (HRP) plus 5-bit data words.

Address records of bech32 kinds store the raw payload bytes; the text form is
produced here without a witness-version byte:

    text = bech32(hrp, convertbits(payload, 8 -> 5, pad=True))

Usage
-----
    text = encode_payload("inj", payload20)            # "inj1..."
    hrp, payload, spec = decode_payload(text)           # ("inj", b"...", "bech32")
    hrp, data5, spec = bech32_decode(text)              # low-level

References
----------
BIP-0173: https://github.com/bitcoin/bips/blob/master/bip-0173.mediawiki
BIP-0350: https://github.com/bitcoin/bips/blob/master/bip-0350.mediawiki
"""

from typing import Iterable, List, Sequence, Tuple

# 32-character alphabet per BIP-0173.
CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
CHARSET_REV = {c: i for i, c in enumerate(CHARSET)}

_BECH32_CONST = 1
_BECH32M_CONST = 0x2BC830A3
_MAX_LEN = 90

BECH32 = "bech32"
BECH32M = "bech32m"


class Bech32Error(ValueError):
    pass


# ---------------------------------------------------------------------------
# Checksum
# ---------------------------------------------------------------------------


def _polymod(values: Sequence[int]) -> int:
    GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
    chk = 1
    for v in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ v
        for i in range(5):
            if (top >> i) & 1:
                chk ^= GENERATORS[i]
    return chk


def _hrp_expand(hrp: str) -> List[int]:
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def _create_checksum(hrp: str, data: Sequence[int], spec: str) -> List[int]:
    const = _BECH32M_CONST if spec == BECH32M else _BECH32_CONST
    polymod = _polymod(_hrp_expand(hrp) + list(data) + [0] * 6) ^ const
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def _verify_checksum(hrp: str, data: Sequence[int]) -> str:
    """Return the detected spec, or "" when the checksum does not match."""
    pm = _polymod(_hrp_expand(hrp) + list(data))
    if pm == _BECH32_CONST:
        return BECH32
    if pm == _BECH32M_CONST:
        return BECH32M
    return ""


# ---------------------------------------------------------------------------
# Encode / decode
# ---------------------------------------------------------------------------


def bech32_encode(hrp: str, data: Sequence[int], spec: str = BECH32) -> str:
    """
    Encode HRP + 5-bit data words into a bech32 string.
    `spec` must be "bech32" or "bech32m".
    """
    if not hrp or any((ord(c) < 33 or ord(c) > 126) for c in hrp):
        raise Bech32Error("invalid HRP characters")
    if any(d < 0 or d > 31 for d in data):
        raise Bech32Error("data values must be 5-bit (0..31)")
    if spec not in (BECH32, BECH32M):
        raise Bech32Error("spec must be 'bech32' or 'bech32m'")

    hrp = hrp.lower()
    combined = list(data) + _create_checksum(hrp, data, spec)
    out = hrp + "1" + "".join(CHARSET[d] for d in combined)
    if len(out) > _MAX_LEN:
        raise Bech32Error("encoded string exceeds 90 characters")
    return out


def bech32_decode(bech: str) -> Tuple[str, List[int], str]:
    """
    Decode a bech32/bech32m string into (hrp, data words, spec).
    Raises Bech32Error on failure.
    """
    if not isinstance(bech, str):
        raise Bech32Error("bech32 input must be a string")
    if len(bech) < 8 or len(bech) > _MAX_LEN:
        raise Bech32Error("invalid bech32 string length")
    if any(ord(c) < 33 or ord(c) > 126 for c in bech):
        raise Bech32Error("invalid character in bech32 string")
    if bech.lower() != bech and bech.upper() != bech:
        raise Bech32Error("mixed-case bech32 is invalid")
    bech = bech.lower()

    pos = bech.rfind("1")
    if pos < 1 or pos + 7 > len(bech):
        raise Bech32Error("invalid position of separator '1'")

    hrp = bech[:pos]
    try:
        data = [CHARSET_REV[c] for c in bech[pos + 1 :]]
    except KeyError:
        raise Bech32Error("invalid data character in bech32 string") from None

    spec = _verify_checksum(hrp, data)
    if not spec:
        raise Bech32Error("checksum mismatch")
    return hrp, data[:-6], spec


# ---------------------------------------------------------------------------
# 8 <-> 5 bit conversion (BIP-0173 "convertbits")
# ---------------------------------------------------------------------------


def convertbits(
    data: Iterable[int], from_bits: int, to_bits: int, pad: bool = True
) -> List[int]:
    """
    General power-of-2 base conversion.

    If pad=False, leftover bits must be zero (strict mode).
    """
    acc = 0
    bits = 0
    ret: List[int] = []
    maxv = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1

    for value in data:
        if value < 0 or (value >> from_bits):
            raise Bech32Error("invalid value for convertbits")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            ret.append((acc >> bits) & maxv)

    if pad:
        if bits:
            ret.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits:
        raise Bech32Error("illegal zero-padding")
    elif (acc << (to_bits - bits)) & maxv:
        raise Bech32Error("non-zero padding")

    return ret


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def encode_payload(hrp: str, payload: bytes, spec: str = BECH32) -> str:
    """Encode raw payload bytes under `hrp` (no witness version byte)."""
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise Bech32Error("payload must be bytes-like")
    return bech32_encode(hrp, convertbits(bytes(payload), 8, 5, True), spec)


def decode_payload(text: str) -> Tuple[str, bytes, str]:
    """Inverse of `encode_payload`: returns (hrp, payload bytes, spec)."""
    hrp, data5, spec = bech32_decode(text)
    return hrp, bytes(convertbits(data5, 5, 8, False)), spec


__all__ = [
    "BECH32",
    "BECH32M",
    "Bech32Error",
    "bech32_encode",
    "bech32_decode",
    "convertbits",
    "encode_payload",
    "decode_payload",
]
