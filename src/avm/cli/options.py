# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reusable Typer argument and option declarations."""

from __future__ import annotations

from typing import Annotated

import typer

from ..constants import CONFIG_FILENAME

AGENT_ARGUMENT = Annotated[
    str,
    typer.Argument(help="Agent spec, e.g. codex or codex@0.45.1.", show_default=False),
]
OPTIONAL_AGENT_ARGUMENT = Annotated[
    str | None,
    typer.Argument(help=f"Agent to run (defaults to the {CONFIG_FILENAME} default or current).", show_default=False),
]
AGENT_ARGS_ARGUMENT = Annotated[
    list[str] | None,
    typer.Argument(help="Arguments forwarded to the agent.", show_default=False),
]
PACKAGE_OPTION = Annotated[
    str | None,
    typer.Option("--package", "-p", help="Override the npm package name.", show_default=False),
]
REGISTRY_OPTION = Annotated[
    str | None,
    typer.Option("--registry", "-r", help="Custom npm registry URL.", show_default=False),
]
GLOBAL_ARGS_OPTION = Annotated[
    str | None,
    typer.Option(
        "--args",
        "-a",
        help=f"Default args for this agent when no {CONFIG_FILENAME} args are set.",
        show_default=False,
    ),
]
LOCAL_ARGS_OPTION = Annotated[
    str | None,
    typer.Option("--args", "-a", help=f"Default args for this agent in {CONFIG_FILENAME}.", show_default=False),
]
REMOTE_OPTION = Annotated[
    bool,
    typer.Option("--remote", help="List supported remote agents (including not installed)."),
]
TARGET_VERSION_OPTION = Annotated[
    str | None,
    typer.Option("--to", help="Target version (default: latest).", show_default=False),
]

__all__ = [
    "AGENT_ARGS_ARGUMENT",
    "AGENT_ARGUMENT",
    "GLOBAL_ARGS_OPTION",
    "LOCAL_ARGS_OPTION",
    "OPTIONAL_AGENT_ARGUMENT",
    "PACKAGE_OPTION",
    "REGISTRY_OPTION",
    "REMOTE_OPTION",
    "TARGET_VERSION_OPTION",
]
