"""
naming.crypto.ed25519
---------------------

Ed25519 signature capability used by self-certifying identity records.

- `verify(message, signature, public_key)` returns True/False for well-formed
  inputs and raises `MalformedInput` when the key or signature bytes cannot be
  used with the scheme: wrong length, or a public key that is off the curve,
  non-canonical or of small order.
- `Ed25519Signer` wraps a private key; it is the signing capability handed to
  the record encoder.
- `encode_pubkey` / `decode_pubkey` convert 32-byte keys to and from their
  base58 text form.

Backend is `cryptography` (OpenSSL), which rejects non-canonical signature
scalars. Public keys are screened with libsodium (PyNaCl) first, since
OpenSSL accepts small-order keys such as the identity point, for which any
(R = s*B, s) pair verifies every message.
"""

from __future__ import annotations

from typing import Union

import base58
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from nacl.bindings import crypto_core_ed25519_is_valid_point

from naming.errors import MalformedInput

PUBLIC_KEY_LEN = 32
SIGNATURE_LEN = 64
SEED_LEN = 32

BytesLike = Union[bytes, bytearray, memoryview]


def _load_public_key(public_key: BytesLike) -> Ed25519PublicKey:
    raw = bytes(public_key)
    if len(raw) != PUBLIC_KEY_LEN:
        raise MalformedInput(
            "ed25519 public key must be 32 bytes", expected=PUBLIC_KEY_LEN, got=len(raw)
        )
    # OpenSSL loads any 32 bytes; small-order, off-curve and non-canonical
    # points must not reach verification.
    if not crypto_core_ed25519_is_valid_point(raw):
        raise MalformedInput(
            "ed25519 public key is not a canonical prime-order curve point", key=raw
        )
    try:
        return Ed25519PublicKey.from_public_bytes(raw)
    except ValueError as e:
        raise MalformedInput(f"invalid ed25519 public key: {e}") from e


def verify(message: BytesLike, signature: BytesLike, public_key: BytesLike) -> bool:
    """
    Verify an Ed25519 `signature` over `message` by `public_key`.

    Returns False for a well-formed but wrong signature. Raises MalformedInput
    when `signature` or `public_key` have the wrong size, or when `public_key`
    is not a canonical point of the prime-order subgroup.
    """
    sig = bytes(signature)
    if len(sig) != SIGNATURE_LEN:
        raise MalformedInput(
            "ed25519 signature must be 64 bytes", expected=SIGNATURE_LEN, got=len(sig)
        )
    key = _load_public_key(public_key)
    try:
        key.verify(sig, bytes(message))
    except InvalidSignature:
        return False
    return True


class Ed25519Signer:
    """Signing capability over a raw 32-byte Ed25519 seed."""

    def __init__(self, private_key: Ed25519PrivateKey) -> None:
        self._sk = private_key
        self._pk = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    @classmethod
    def generate(cls) -> "Ed25519Signer":
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_seed(cls, seed: BytesLike) -> "Ed25519Signer":
        raw = bytes(seed)
        if len(raw) != SEED_LEN:
            raise MalformedInput("ed25519 seed must be 32 bytes", expected=SEED_LEN, got=len(raw))
        return cls(Ed25519PrivateKey.from_private_bytes(raw))

    @property
    def public_key(self) -> bytes:
        return self._pk

    def sign(self, message: BytesLike) -> bytes:
        return self._sk.sign(bytes(message))


def encode_pubkey(public_key: BytesLike) -> str:
    """Base58 text form of a 32-byte key."""
    raw = bytes(public_key)
    if len(raw) != PUBLIC_KEY_LEN:
        raise MalformedInput("public key must be 32 bytes", got=len(raw))
    return base58.b58encode(raw).decode("ascii")


def decode_pubkey(text: str) -> bytes:
    """Parse a base58 key back to 32 bytes. Raises MalformedInput."""
    try:
        raw = base58.b58decode(text.strip())
    except ValueError as e:
        raise MalformedInput(f"invalid base58 key: {e}", value=text) from e
    if len(raw) != PUBLIC_KEY_LEN:
        raise MalformedInput("public key must be 32 bytes", value=text, got=len(raw))
    return raw


__all__ = [
    "PUBLIC_KEY_LEN",
    "SIGNATURE_LEN",
    "SEED_LEN",
    "verify",
    "Ed25519Signer",
    "encode_pubkey",
    "decode_pubkey",
]
