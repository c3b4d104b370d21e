"""
naming.cli
----------

Typer application for offline work with record payloads. See `naming.cli.main`.
"""

from __future__ import annotations

from .main import app, main

__all__ = ["app", "main"]
