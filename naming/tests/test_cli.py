import json

import pytest
from typer.testing import CliRunner

from naming.cli import app
from naming.crypto import ed25519

runner = CliRunner()


@pytest.fixture
def b58_key(record_key: bytes) -> str:
    return ed25519.encode_pubkey(record_key)


def test_types_table():
    result = runner.invoke(app, ["types"])
    assert result.exit_code == 0, result.output
    assert "SOL" in result.output
    assert "96" in result.output
    assert "email" in result.output


def test_types_json():
    result = runner.invoke(app, ["--json", "types"])
    assert result.exit_code == 0, result.output
    rows = json.loads(result.stdout)
    assert len(rows) == 24
    assert rows[0] == {"tag": "IPFS", "size": None}
    assert {"tag": "AAAA", "size": 16} in rows


def test_decode_ipv4():
    result = runner.invoke(app, ["decode", "--type", "A", "--data", "7f000001"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "127.0.0.1"


def test_decode_json_reports_legacy():
    result = runner.invoke(app, ["--json", "decode", "-t", "A", "-d", b"10.0.0.1".hex()])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"record": "A", "value": "10.0.0.1", "legacy": True}

    result = runner.invoke(app, ["--json", "decode", "-t", "A", "-d", "0x0a000001"])
    assert json.loads(result.stdout) == {"record": "A", "value": "10.0.0.1", "legacy": False}


def test_decode_invalid_legacy_record():
    result = runner.invoke(app, ["decode", "-t", "A", "-d", b"hello".hex()])
    assert result.exit_code == 1
    assert "INVALID_REVERSE" in result.output


def test_decode_json_error():
    result = runner.invoke(app, ["--json", "decode", "-t", "ETH", "-d", b"0x12".hex()])
    assert result.exit_code == 1
    assert json.loads(result.output)["error"]["code"] == "INVALID_REVERSE"


@pytest.mark.parametrize(
    "args, needle",
    [
        (["decode", "-t", "sol", "-d", "00"], "UNKNOWN_RECORD_TYPE"),
        (["decode", "-t", "A", "-d", "zz"], "MALFORMED_INPUT"),
        (["decode", "-t", "SOL", "-d", "00"], "need --key"),
        (["decode", "-t", "TXT", "-d", "c328"], "DECODE_FAILED"),
    ],
)
def test_decode_errors(args, needle: str):
    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert needle in result.output


def test_decode_text_record():
    result = runner.invoke(app, ["decode", "-t", "email", "-d", (b"me@sns.id" + bytes(4)).hex()])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "me@sns.id"


def test_encode_ipv6():
    result = runner.invoke(app, ["encode", "-t", "AAAA", "-v", "2001:db8::1"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "20010db8000000000000000000000001"


def test_encode_json():
    result = runner.invoke(app, ["--json", "encode", "-t", "A", "-v", "1.2.3.4"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"record": "A", "data": "01020304", "size": 4}


def test_encode_bad_value():
    result = runner.invoke(app, ["encode", "-t", "A", "-v", "1.2.3"])
    assert result.exit_code == 1
    assert "INVALID_RECORD_DATA" in result.output


def test_sol_encode_decode_verify(sol_seed: bytes, sol_signer, sol_payload: bytes, b58_key: str):
    dst = ed25519.encode_pubkey(sol_signer.public_key)

    result = runner.invoke(
        app, ["encode", "-t", "SOL", "-v", dst, "-k", b58_key, "--seed-hex", sol_seed.hex()]
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == sol_payload.hex()

    result = runner.invoke(app, ["decode", "-t", "SOL", "-d", sol_payload.hex(), "-k", b58_key])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == dst

    result = runner.invoke(app, ["verify", "-d", sol_payload.hex(), "-k", b58_key])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == f"{dst} valid"


def test_sol_encode_wrong_seed(sol_signer, b58_key: str):
    dst = ed25519.encode_pubkey(sol_signer.public_key)
    result = runner.invoke(
        app, ["encode", "-t", "SOL", "-v", dst, "-k", b58_key, "--seed-hex", "ab" * 32]
    )
    assert result.exit_code == 1
    assert "does not own" in result.output


def test_verify_tampered(sol_payload: bytes, b58_key: str):
    tampered = bytearray(sol_payload)
    tampered[40] ^= 0x01
    result = runner.invoke(app, ["--json", "verify", "-d", bytes(tampered).hex(), "-k", b58_key])
    assert result.exit_code == 1
    out = json.loads(result.stdout)
    assert out["valid"] is False
    assert out["destination"] == ed25519.encode_pubkey(sol_payload[:32])


def test_verify_wrong_size(b58_key: str):
    result = runner.invoke(app, ["verify", "-d", "00" * 95, "-k", b58_key])
    assert result.exit_code == 1
    assert "96 bytes" in result.output


def test_bad_config_exits_2():
    result = runner.invoke(app, ["types"], env={"NAMING_LOG_LEVEL": "LOUD"})
    assert result.exit_code == 2
    assert "log_level" in result.output


def test_config_file_enables_json(tmp_path):
    path = tmp_path / "naming.yaml"
    path.write_text("json_output: true\n")
    result = runner.invoke(app, ["--config", str(path), "encode", "-t", "A", "-v", "8.8.8.8"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["data"] == "08080808"
