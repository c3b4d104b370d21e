"""
naming: offline command line for record payloads.

Commands:
  naming types                                   List record kinds and sizes
  naming decode --type SOL --data HEX --key KEY  Decode a stored payload
  naming encode --type A --value 1.2.3.4         Encode a value for writing
  naming verify --data HEX --key KEY             Check a SOL payload signature

Record keys are given in base58. Payloads are hex (an optional 0x prefix is
accepted).

Global options:
  --config PATH      Config file (JSON/YAML), also NAMING_CONFIG
  --log-level TEXT   DEBUG|INFO|WARNING|ERROR|CRITICAL
  --log-json         JSON log lines on stderr
  --json             JSON command output

Examples:
  naming decode --type A --data 7f000001
  naming encode --type SOL --value <base58> --key <record key> --seed-hex <32-byte seed>
"""

from __future__ import annotations

import json
from typing import Any, Dict, NoReturn, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from naming import logging as nlog
from naming.config import NamingConfig, load_config
from naming.crypto import ed25519
from naming.errors import MalformedInput, RecordError
from naming.records import codec
from naming.records.types import RecordType, expected_size

app = typer.Typer(
    name="naming",
    help="Decode, encode and verify naming-service record payloads",
    no_args_is_help=True,
    add_completion=False,
)

log = nlog.get_logger(__name__)

# Record key used for kinds whose decoding does not depend on it.
_NULL_KEY = bytes(32)


def _cfg(ctx: typer.Context) -> NamingConfig:
    cfg = ctx.obj
    if isinstance(cfg, NamingConfig):
        return cfg
    return load_config()


def _emit(ctx: typer.Context, payload: Dict[str, Any], human: str) -> None:
    if _cfg(ctx).json_output:
        typer.echo(json.dumps(payload, ensure_ascii=False))
    else:
        typer.echo(human)


def _fail(ctx: typer.Context, err: RecordError) -> NoReturn:
    log.debug("command failed", extra={"error": err})
    if _cfg(ctx).json_output:
        typer.echo(json.dumps({"error": err.to_dict()}), err=True)
    else:
        typer.echo(f"Error: {err}", err=True)
    raise typer.Exit(1)


def _parse_hex(value: str, what: str) -> bytes:
    v = value.strip()
    if v[:2].lower() == "0x":
        v = v[2:]
    try:
        return bytes.fromhex(v)
    except ValueError as e:
        raise MalformedInput(f"{what} is not valid hex: {e}") from e


def _parse_kind(tag: str) -> RecordType:
    return RecordType.from_tag(tag)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to config file", envvar="NAMING_CONFIG"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level"),
    log_json: Optional[bool] = typer.Option(
        None, "--log-json/--no-log-json", help="Emit JSON log lines"
    ),
    json_output: Optional[bool] = typer.Option(
        None, "--json/--no-json", help="Output JSON instead of text"
    ),
) -> None:
    """
    Offline tooling for naming-service record payloads.

    Settings resolve from flags, then NAMING_* environment variables, then the
    config file, then defaults.
    """
    try:
        cfg = load_config(
            {"log_level": log_level, "log_json": log_json, "json_output": json_output},
            path=config,
        )
    except RecordError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    nlog.configure(cfg.log_level, json=cfg.log_json)
    ctx.obj = cfg


@app.command("types")
def list_types(ctx: typer.Context) -> None:
    """List the supported record kinds and their native sizes."""
    rows = [
        {"tag": rt.tag, "size": expected_size(rt)}
        for rt in RecordType
    ]
    if _cfg(ctx).json_output:
        typer.echo(json.dumps(rows))
        return
    t = Table(title="Record kinds", box=box.SIMPLE)
    t.add_column("Tag")
    t.add_column("Native size", justify="right")
    for row in rows:
        t.add_row(row["tag"], "text" if row["size"] is None else str(row["size"]))
    Console().print(t)


@app.command("decode")
def decode_cmd(
    ctx: typer.Context,
    record: str = typer.Option(..., "--type", "-t", help="Record tag, e.g. SOL, A, email"),
    data: str = typer.Option(..., "--data", "-d", help="Stored payload as hex"),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", help="Record key (base58); required for SOL"
    ),
) -> None:
    """Decode a stored record payload into its value."""
    try:
        kind = _parse_kind(record)
        raw = _parse_hex(data, "--data")
        if key is None and kind is RecordType.SOL:
            raise MalformedInput("SOL records need --key")
        record_key = codec.record_key_bytes(key) if key else _NULL_KEY
        value = codec.decode(raw, kind, record_key)
    except RecordError as e:
        _fail(ctx, e)
    legacy = codec.is_legacy(raw, kind)
    log.debug("decoded", extra={"record": kind.tag, "legacy": legacy})
    _emit(ctx, {"record": kind.tag, "value": value, "legacy": legacy}, value)


@app.command("encode")
def encode_cmd(
    ctx: typer.Context,
    record: str = typer.Option(..., "--type", "-t", help="Record tag"),
    value: str = typer.Option(..., "--value", "-v", help="Human-readable value"),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", help="Record key (base58); required for SOL"
    ),
    seed_hex: Optional[str] = typer.Option(
        None,
        "--seed-hex",
        help="Ed25519 seed (32 bytes hex) of the SOL destination; required for SOL",
    ),
) -> None:
    """Encode a value into the payload to store for a record."""
    try:
        kind = _parse_kind(record)
        signer = None
        if seed_hex is not None:
            signer = ed25519.Ed25519Signer.from_seed(_parse_hex(seed_hex, "--seed-hex"))
        payload = codec.encode(value, kind, record_key=key, signer=signer)
    except RecordError as e:
        _fail(ctx, e)
    _emit(
        ctx,
        {"record": kind.tag, "data": payload.hex(), "size": len(payload)},
        payload.hex(),
    )


@app.command("verify")
def verify_cmd(
    ctx: typer.Context,
    data: str = typer.Option(..., "--data", "-d", help="SOL payload as hex (96 bytes)"),
    key: str = typer.Option(..., "--key", "-k", help="Record key (base58)"),
) -> None:
    """Verify the signature of a SOL record payload. Exit code 1 when invalid."""
    try:
        raw = _parse_hex(data, "--data")
        if len(raw) != expected_size(RecordType.SOL):
            raise MalformedInput("SOL payload must be 96 bytes", got=len(raw))
        valid = codec.verify_sol_record(raw[:32], raw[32:], key)
    except RecordError as e:
        _fail(ctx, e)
    dst = ed25519.encode_pubkey(raw[:32])
    _emit(ctx, {"destination": dst, "valid": valid}, f"{dst} {'valid' if valid else 'INVALID'}")
    if not valid:
        raise typer.Exit(1)


def main() -> None:
    """Entry point for the naming CLI."""
    app()


if __name__ == "__main__":
    main()
