from __future__ import annotations

import hashlib
import logging

import pytest

from naming.crypto.ed25519 import Ed25519Signer
from naming.records.codec import build_sol_payload
from naming.records.types import RecordType

RECORD_KEY = hashlib.sha256(b"SOL.bonfida").digest()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "NAMING_CONFIG",
        "NAMING_LOG_LEVEL",
        "NAMING_LOG_JSON",
        "NAMING_JSON",
        "NAMING_DOMAIN_SUFFIX",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    root = logging.getLogger("naming")
    for h in list(root.handlers):
        root.removeHandler(h)
    root.propagate = True
    root.setLevel(logging.NOTSET)


def signed_sol(record_key: bytes) -> tuple[bytes, Ed25519Signer, bytes]:
    """
    Deterministic (seed, signer, native SOL payload) for `record_key`.

    Payloads whose final signature byte is zero would be read as legacy, so
    seeds are tried until one yields a non-zero final byte.
    """
    for i in range(1, 256):
        seed = bytes([i]) * 32
        signer = Ed25519Signer.from_seed(seed)
        payload = build_sol_payload(signer.public_key, record_key, signer)
        if payload[-1] != 0:
            return seed, signer, payload
    raise RuntimeError("no usable seed")  # pragma: no cover


class HashDeriver:
    """Stand-in key derivation: sha256 of "<tag>.<domain>"."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, RecordType]] = []

    def record_key(self, domain: str, kind: RecordType) -> bytes:
        self.calls.append((domain, kind))
        return hashlib.sha256(f"{kind.tag}.{domain}".encode()).digest()


@pytest.fixture
def record_key() -> bytes:
    return RECORD_KEY


@pytest.fixture
def sol_signer(record_key: bytes) -> Ed25519Signer:
    return signed_sol(record_key)[1]


@pytest.fixture
def sol_payload(record_key: bytes) -> bytes:
    return signed_sol(record_key)[2]


@pytest.fixture
def sol_seed(record_key: bytes) -> bytes:
    return signed_sol(record_key)[0]


@pytest.fixture
def deriver() -> HashDeriver:
    return HashDeriver()
