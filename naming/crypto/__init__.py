"""Signature and text-encoding primitives used by the record codec."""

from __future__ import annotations

from . import bech32, ed25519

__all__ = ["bech32", "ed25519"]
