# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``avm install`` command."""

from __future__ import annotations

import typer

from ...config import load_project_config
from ...logging import ok
from ...resolution import ResolutionOverrides, resolve_target
from ..options import AGENT_ARGUMENT, PACKAGE_OPTION, REGISTRY_OPTION
from ..shared import command_guard, describe_record, get_cli_context


def install_command(
    ctx: typer.Context,
    agent: AGENT_ARGUMENT,
    package: PACKAGE_OPTION = None,
    registry: REGISTRY_OPTION = None,
) -> None:
    """Install an agent version into the avm home directory."""

    cli = get_cli_context(ctx)
    with command_guard(cli):
        target = resolve_target(
            agent,
            load_project_config(),
            cli.state_store.read(),
            ResolutionOverrides(package=package),
        )
        result = cli.install_store.ensure(target, registry=registry, on_install=cli.announce_install())
        ok(f"Installed {describe_record(result.record)}", use_emoji=cli.use_emoji)


def register(app: typer.Typer) -> None:
    app.command("install", help="Install an agent version into ~/.avm.")(install_command)


__all__ = ["install_command", "register"]
