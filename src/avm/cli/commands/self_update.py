# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of ``avm self-update``."""

from __future__ import annotations

import typer

from ...constants import DIST_NAME
from ...logging import info, ok
from ...self_update import run_self_update
from ..options import TARGET_VERSION_OPTION
from ..shared import command_guard, get_cli_context


def self_update_cli(ctx: typer.Context, to: TARGET_VERSION_OPTION = None) -> None:
    """Update avm itself with pip."""

    cli = get_cli_context(ctx)
    with command_guard(cli, check_updates=False):
        target = to or "latest"
        info(f"> Updating {DIST_NAME} to {target} via pip", use_emoji=cli.use_emoji)
        run_self_update(to)
        ok(f"{DIST_NAME} updated.", use_emoji=cli.use_emoji)


def register(app: typer.Typer) -> None:
    app.command("self-update", help="Update avm itself via pip.")(self_update_cli)


__all__ = ["register", "self_update_cli"]
