# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Commands setting the global (``avm global``) and project (``avm local``) defaults."""

from __future__ import annotations

from pathlib import Path

import typer

from ...agents import parse_agent_spec
from ...config import apply_local_default, load_project_config, write_project_config
from ...constants import CONFIG_FILENAME
from ...errors import AvmError
from ...logging import ok
from ...resolution import ResolutionOverrides, resolve_target
from ..options import AGENT_ARGUMENT, GLOBAL_ARGS_OPTION, LOCAL_ARGS_OPTION, PACKAGE_OPTION, REGISTRY_OPTION
from ..shared import command_guard, describe_record, get_cli_context


def global_command(
    ctx: typer.Context,
    agent: AGENT_ARGUMENT,
    package: PACKAGE_OPTION = None,
    registry: REGISTRY_OPTION = None,
    args: GLOBAL_ARGS_OPTION = None,
) -> None:
    """Set the global default agent, installing it when missing."""

    cli = get_cli_context(ctx)
    with command_guard(cli):
        target = resolve_target(
            agent,
            load_project_config(),
            cli.state_store.read(),
            ResolutionOverrides(package=package, args=args),
        )
        result = cli.install_store.ensure(target, registry=registry, on_install=cli.announce_install())
        cli.state_store.set_current(result.record)
        ok(f"Set global default to {describe_record(result.record)}", use_emoji=cli.use_emoji)


def local_command(
    ctx: typer.Context,
    agent: AGENT_ARGUMENT,
    args: LOCAL_ARGS_OPTION = None,
) -> None:
    """Set the project default agent by rewriting the nearest config file."""

    cli = get_cli_context(ctx)
    with command_guard(cli):
        spec = parse_agent_spec(agent)
        if spec is None:
            raise AvmError("Agent spec required. Example: codex or codex@0.45.1")
        config = load_project_config()
        updated = apply_local_default(config, spec, args=args)
        target_path = config.path or Path.cwd() / CONFIG_FILENAME
        write_project_config(updated, target_path)

        version_part = f"@{spec.version}" if spec.version else ""
        stored_args = updated.override_for(spec.name).args
        args_part = f' with args="{stored_args}"' if stored_args else ""
        ok(f"Set local default to {spec.name}{version_part} in {target_path}{args_part}", use_emoji=cli.use_emoji)


def register(app: typer.Typer) -> None:
    app.command("global", help="Set global default agent (installs if missing).")(global_command)
    app.command("local", help=f"Set local project default agent (writes {CONFIG_FILENAME}).")(local_command)


__all__ = ["global_command", "local_command", "register"]
