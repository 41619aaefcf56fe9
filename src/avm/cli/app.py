# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from ..constants import PROG_NAME, SUPPORTED_AGENTS
from ..settings import load_settings
from .commands import register_commands
from .shared import CLIContext
from .typer_ext import create_typer

HELP_TEXT = (
    "A minimal version manager for AI coding agents (npm based).\n\n"
    f"Supported agents: {', '.join(SUPPORTED_AGENTS)}.\n\n"
    "Agent spec: <name> or <name>@<version>, e.g. codex, codex@latest, codex@0.60.1."
)

EPILOG = (
    "Examples: avm install codex@0.60.1 | avm global claude@latest | "
    "avm local gemini@latest | avm codex@latest -- --help"
)

app = create_typer(name=PROG_NAME, help=HELP_TEXT, epilog=EPILOG, add_completion=False)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def root(
    ctx: typer.Context,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output.")] = True,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            "-V",
            help="Show the avm version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Store the shared command context for subcommands."""

    ctx.obj = CLIContext(settings=load_settings(), use_emoji=emoji)


register_commands(app)

__all__ = ["app"]
