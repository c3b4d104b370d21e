import pytest

from naming.crypto import bech32 as b32


@pytest.mark.parametrize(
    "text, spec",
    [
        ("A12UEL5L", "bech32"),
        ("a12uel5l", "bech32"),
        ("abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw", "bech32"),
        ("A1LQFN3A", "bech32m"),
        ("a1lqfn3a", "bech32m"),
    ],
)
def test_reference_vectors(text: str, spec: str):
    hrp, _data, got = b32.bech32_decode(text)
    assert got == spec
    assert hrp == text[: text.lower().rfind("1")].lower()


@pytest.mark.parametrize(
    "text",
    [
        "A12uEL5L",     # mixed case
        "a12uel5m",     # checksum
        "1qzzfhee",     # empty hrp
        "a1",           # too short
        "abc1b",        # invalid data char / too short
        "x" * 91,       # too long
    ],
)
def test_invalid_strings(text: str):
    with pytest.raises(b32.Bech32Error):
        b32.bech32_decode(text)


def test_payload_round_trip():
    payload = bytes(range(1, 21))
    text = b32.encode_payload("inj", payload)
    assert text.startswith("inj1")
    hrp, back, spec = b32.decode_payload(text)
    assert (hrp, back, spec) == ("inj", payload, "bech32")


def test_bech32m_payload_is_detected():
    text = b32.encode_payload("inj", bytes(20), b32.BECH32M)
    assert b32.decode_payload(text)[2] == "bech32m"


def test_encode_rejects_bad_input():
    with pytest.raises(b32.Bech32Error):
        b32.bech32_encode("", [0])
    with pytest.raises(b32.Bech32Error):
        b32.bech32_encode("inj", [32])
    with pytest.raises(b32.Bech32Error):
        b32.bech32_encode("inj", [0], spec="bech33")
    with pytest.raises(b32.Bech32Error):
        b32.encode_payload("inj", "not bytes")  # type: ignore[arg-type]


def test_convertbits_strict_padding():
    with pytest.raises(b32.Bech32Error):
        b32.convertbits([31], 5, 8, pad=False)
    assert b32.convertbits([0xFF], 8, 5, pad=True) == [31, 28]
