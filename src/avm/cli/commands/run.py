# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of ``avm run`` (also reached as ``avm <agent> [args...]``)."""

from __future__ import annotations

import typer

from ...agents import format_args
from ...binaries import find_agent_binary
from ...config import load_project_config
from ...errors import BinaryNotFound
from ...launcher import launch
from ...logging import info
from ...resolution import ResolutionOverrides, resolve_target
from ..options import AGENT_ARGS_ARGUMENT, OPTIONAL_AGENT_ARGUMENT, PACKAGE_OPTION, REGISTRY_OPTION
from ..shared import command_guard, get_cli_context

RUN_CONTEXT_SETTINGS = {"ignore_unknown_options": True}


def run_command(
    ctx: typer.Context,
    agent: OPTIONAL_AGENT_ARGUMENT = None,
    agent_args: AGENT_ARGS_ARGUMENT = None,
    package: PACKAGE_OPTION = None,
    registry: REGISTRY_OPTION = None,
) -> None:
    """Install if needed, record as current, then run the agent.

    The process exits with the agent's own exit code.
    """

    cli = get_cli_context(ctx)
    with command_guard(cli):
        target = resolve_target(
            agent,
            load_project_config(),
            cli.state_store.read(),
            ResolutionOverrides(package=package),
        )
        result = cli.install_store.ensure(target, registry=registry, on_install=cli.announce_install())
        record = result.record
        cli.state_store.set_current(record)

        binary = find_agent_binary(result.install_path, record.package)
        if binary is None:
            raise BinaryNotFound(record.package, result.install_path)

        combined = [*record.args, *(agent_args or [])]
        suffix = f" with args: {format_args(combined)}" if combined else ""
        info(
            f"> Running {record.name}@{record.version} ({record.package}) from {result.install_path}{suffix}",
            use_emoji=cli.use_emoji,
        )
        exit_code = launch(binary, combined)
    raise typer.Exit(code=exit_code)


def register(app: typer.Typer) -> None:
    app.command("run", help="Run an agent, installing it first when needed.", context_settings=RUN_CONTEXT_SETTINGS)(
        run_command,
    )


__all__ = ["register", "run_command"]
