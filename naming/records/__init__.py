"""
naming.records
--------------

Record kinds, the dual-format payload codec and the resolver front end.

    from naming.records import RecordType, decode, encode

    decode(bytes([127, 0, 0, 1]), RecordType.A, record_key)   # '127.0.0.1'
"""

from __future__ import annotations

from .codec import (
    build_sol_payload,
    decode,
    encode,
    is_legacy,
    verify_sol_record,
)
from .resolver import MemoryRecordSource, RecordResolver, format_domain
from .types import RecordType, expected_size

__all__ = [
    "RecordType",
    "expected_size",
    "decode",
    "encode",
    "is_legacy",
    "verify_sol_record",
    "build_sol_payload",
    "RecordResolver",
    "MemoryRecordSource",
    "format_domain",
]
