# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

import typer

from . import defaults, install, listing, run, self_update

__all__ = ["COMMAND_NAMES", "register_commands"]

COMMAND_NAMES: frozenset[str] = frozenset(
    {"install", "global", "local", "list", "ls", "current", "run", "self-update"},
)


def register_commands(app: typer.Typer) -> None:
    """Register every built-in command on ``app``."""

    install.register(app)
    defaults.register(app)
    listing.register(app)
    self_update.register(app)
    run.register(app)
