"""
Record codec ⇄ collaborator interfaces
======================================

Narrow protocols for the pieces the codec depends on but does not implement:

  • RecordSource        : reads the raw bytes stored at a record key (ledger RPC)
  • RecordKeyDeriver    : maps (domain, record kind) to the 32-byte record key
  • Signer              : signing capability used when encoding identity records
  • SignatureVerifier   : (message, signature, public key) → bool, raising on
                          malformed inputs; `naming.crypto.ed25519.verify` by default

None of these are called by `decode` except the verifier, which is passed in
explicitly so the signature scheme can be swapped without touching the
decode algorithm.
"""

from __future__ import annotations

from typing import Optional, Protocol, Union, runtime_checkable

from .types import RecordType

RecordKey = Union[bytes, str]  # 32 raw bytes or base58 text


@runtime_checkable
class RecordSource(Protocol):
    def fetch(self, key: bytes) -> Optional[bytes]:
        """
        Return the record payload stored at `key` (without any account
        header), or None when no account exists there.
        """
        ...


@runtime_checkable
class RecordKeyDeriver(Protocol):
    def record_key(self, domain: str, kind: RecordType) -> bytes:
        """Return the 32-byte storage key of `kind` under `domain`."""
        ...


@runtime_checkable
class Signer(Protocol):
    @property
    def public_key(self) -> bytes: ...

    def sign(self, message: bytes) -> bytes: ...


class SignatureVerifier(Protocol):
    def __call__(self, message: bytes, signature: bytes, public_key: bytes) -> bool: ...


__all__ = [
    "RecordKey",
    "RecordSource",
    "RecordKeyDeriver",
    "Signer",
    "SignatureVerifier",
]
