# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .cache import cache_app
from .run import run_command

app = typer.Typer(help="CI lint orchestrator for PHP, JavaScript and stylesheet tooling.", no_args_is_help=True)
app.command("run")(run_command)
app.add_typer(cache_app, name="cache")

__all__ = ["app"]
