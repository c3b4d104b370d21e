"""
Record kinds and their fixed encoded sizes.

`RecordType` is the closed registry of record kinds a name can carry. Each
member's value is its canonical tag, the exact string used on the wire (the
record key is derived from it) and on the command line. Tags are
case-sensitive: "SOL" and "email" are both canonical, "sol" is not.

`expected_size` is the size policy: kinds with a strict binary layout have a
fixed length, free-text kinds return None.

    >>> RecordType.from_tag("AAAA").expected_size
    16
    >>> expected_size(RecordType.EMAIL) is None
    True
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Union

from naming.errors import UnknownRecordType


class RecordType(str, Enum):
    IPFS = "IPFS"
    ARWV = "ARWV"
    SOL = "SOL"
    ETH = "ETH"
    BTC = "BTC"
    LTC = "LTC"
    DOGE = "DOGE"
    EMAIL = "email"
    URL = "url"
    DISCORD = "discord"
    GITHUB = "github"
    REDDIT = "reddit"
    TWITTER = "twitter"
    TELEGRAM = "telegram"
    PIC = "pic"
    SHDW = "SHDW"
    POINT = "POINT"
    BSC = "BSC"
    INJ = "INJ"
    BACKPACK = "backpack"
    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    TXT = "TXT"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def expected_size(self) -> Optional[int]:
        return expected_size(self)

    @classmethod
    def from_tag(cls, tag: str) -> "RecordType":
        """Exact-match lookup of a canonical tag. Raises UnknownRecordType."""
        try:
            return _BY_TAG[tag]
        except (KeyError, TypeError):
            raise UnknownRecordType(str(tag)) from None

    def __str__(self) -> str:
        return self.value


_BY_TAG: Dict[str, RecordType] = {rt.value: rt for rt in RecordType}

# Identity record: 32-byte destination key + 64-byte ed25519 signature.
SOL_DST_LEN = 32
SOL_SIGNATURE_LEN = 64

_FIXED_SIZES: Dict[RecordType, int] = {
    RecordType.SOL: SOL_DST_LEN + SOL_SIGNATURE_LEN,
    RecordType.ETH: 20,
    RecordType.BSC: 20,
    RecordType.INJ: 20,
    RecordType.A: 4,
    RecordType.AAAA: 16,
}


def as_record_type(kind: Union[RecordType, str]) -> RecordType:
    if isinstance(kind, RecordType):
        return kind
    return RecordType.from_tag(kind)


def expected_size(kind: RecordType) -> Optional[int]:
    """Fixed encoded length of `kind`, or None for variable-length text."""
    return _FIXED_SIZES.get(as_record_type(kind))


def is_text_kind(kind: RecordType) -> bool:
    return expected_size(kind) is None


__all__ = [
    "RecordType",
    "SOL_DST_LEN",
    "SOL_SIGNATURE_LEN",
    "as_record_type",
    "expected_size",
    "is_text_kind",
]
