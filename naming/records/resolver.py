"""
naming.records.resolver
-----------------------

Fetch-and-decode front end over the record codec.

`RecordResolver` derives the record key for (domain, kind) through a
`RecordKeyDeriver`, reads the payload through a `RecordSource`, and decodes it
with `naming.records.codec.decode`. Both collaborators are injected; nothing
here talks to a ledger directly.

    resolver = RecordResolver(source, deriver)
    resolver.get_record("bonfida", RecordType.SOL)     # base58 destination
    resolver.get_records("bonfida", [RecordType.A, RecordType.TXT])

`MemoryRecordSource` is a dict-backed source for tests and offline tooling.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional

from naming.config import NamingConfig, load_config
from naming.errors import RecordError, RecordNotFound

from . import codec
from .interfaces import RecordKeyDeriver, RecordSource, SignatureVerifier
from .types import RecordType, as_record_type

log = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".sol"


def format_domain(domain: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """Append `suffix` unless the domain already carries it."""
    domain = domain.strip()
    if domain.endswith(suffix):
        return domain
    return f"{domain}{suffix}"


def strip_suffix(domain: str, suffix: str = DEFAULT_SUFFIX) -> str:
    domain = domain.strip()
    if domain.endswith(suffix):
        return domain[: -len(suffix)]
    return domain


class MemoryRecordSource:
    """In-memory `RecordSource` keyed by 32-byte record keys."""

    def __init__(self, accounts: Optional[Mapping[bytes, bytes]] = None) -> None:
        self._accounts: Dict[bytes, bytes] = {
            bytes(k): bytes(v) for k, v in (accounts or {}).items()
        }

    def put(self, key: bytes, data: bytes) -> None:
        self._accounts[bytes(key)] = bytes(data)

    def fetch(self, key: bytes) -> Optional[bytes]:
        return self._accounts.get(bytes(key))

    def __len__(self) -> int:
        return len(self._accounts)


class RecordResolver:
    """
    Resolve records of a domain through injected collaborators.

    Args:
      source: reads record payloads by key.
      deriver: maps (domain, kind) to the record key.
      suffix: top-level suffix stripped from domains before derivation.
      verifier: optional signature capability passed to `decode`.
    """

    def __init__(
        self,
        source: RecordSource,
        deriver: RecordKeyDeriver,
        *,
        suffix: str = DEFAULT_SUFFIX,
        verifier: Optional[SignatureVerifier] = None,
    ) -> None:
        self.source = source
        self.deriver = deriver
        self.suffix = suffix
        self._verifier = verifier

    @classmethod
    def from_config(
        cls,
        source: RecordSource,
        deriver: RecordKeyDeriver,
        config: Optional[NamingConfig] = None,
        *,
        verifier: Optional[SignatureVerifier] = None,
    ) -> "RecordResolver":
        """Build a resolver using the configured domain suffix (NAMING_DOMAIN_SUFFIX)."""
        cfg = config or load_config()
        return cls(source, deriver, suffix=cfg.domain_suffix, verifier=verifier)

    def record_key(self, domain: str, kind: RecordType) -> bytes:
        kind = as_record_type(kind)
        return codec.record_key_bytes(
            self.deriver.record_key(strip_suffix(domain, self.suffix), kind)
        )

    def _decode(self, data: bytes, kind: RecordType, key: bytes) -> str:
        if self._verifier is None:
            return codec.decode(data, kind, key)
        return codec.decode(data, kind, key, verifier=self._verifier)

    def get_record(self, domain: str, kind: RecordType) -> str:
        """
        Decode the `kind` record of `domain`.

        Raises RecordNotFound when the source has no account at the record key;
        codec errors propagate unchanged.
        """
        kind = as_record_type(kind)
        key = self.record_key(domain, kind)
        data = self.source.fetch(key)
        if data is None:
            raise RecordNotFound(format_domain(domain, self.suffix), kind.tag, key=key)
        log.debug(
            "decoding record domain=%s record=%s bytes=%d legacy=%s",
            domain,
            kind.tag,
            len(data),
            codec.is_legacy(data, kind),
        )
        return self._decode(data, kind, key)

    def get_records(
        self, domain: str, kinds: Iterable[RecordType]
    ) -> Dict[RecordType, Optional[str]]:
        """
        Batch variant of `get_record`: missing records map to None, invalid
        ones are logged and map to None as well.
        """
        out: Dict[RecordType, Optional[str]] = {}
        for kind in kinds:
            kind = as_record_type(kind)
            try:
                out[kind] = self.get_record(domain, kind)
            except RecordNotFound:
                out[kind] = None
            except RecordError as e:
                log.warning("record %s of %s rejected: %s", kind.tag, domain, e)
                out[kind] = None
        return out

    # Shorthands for the commonly queried kinds.

    def get_sol_record(self, domain: str) -> str:
        return self.get_record(domain, RecordType.SOL)

    def get_eth_record(self, domain: str) -> str:
        return self.get_record(domain, RecordType.ETH)

    def get_btc_record(self, domain: str) -> str:
        return self.get_record(domain, RecordType.BTC)

    def get_inj_record(self, domain: str) -> str:
        return self.get_record(domain, RecordType.INJ)

    def get_ipv4_record(self, domain: str) -> str:
        return self.get_record(domain, RecordType.A)

    def get_ipv6_record(self, domain: str) -> str:
        return self.get_record(domain, RecordType.AAAA)

    def get_url_record(self, domain: str) -> str:
        return self.get_record(domain, RecordType.URL)


__all__ = [
    "DEFAULT_SUFFIX",
    "format_domain",
    "strip_suffix",
    "MemoryRecordSource",
    "RecordResolver",
]
