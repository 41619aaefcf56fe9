# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of ``avm list`` and ``avm current``."""

from __future__ import annotations

import typer

from ...agents import format_args, is_supported_agent, normalize_agent_name, resolve_package_name
from ...config import load_project_config
from ...constants import SUPPORTED_AGENTS
from ...logging import info, plain, warn
from ...models import GlobalState, InstalledAgent, ProjectConfig
from ..options import REMOTE_OPTION
from ..shared import command_guard, describe_record, get_cli_context


def _render_remote(config: ProjectConfig, installed: list[InstalledAgent]) -> list[str]:
    installed_names = {normalize_agent_name(agent.name) for agent in installed}
    lines: list[str] = []
    for name in sorted(SUPPORTED_AGENTS):
        package = resolve_package_name(name, config_package=config.override_for(name).package)
        is_installed = name in installed_names
        marker = "*" if is_installed else " "
        lines.append(f"{marker} {name} ({package})" + (" [installed]" if is_installed else ""))
    return lines


def _render_installed(state: GlobalState, installed: list[InstalledAgent]) -> list[str]:
    current = state.current
    current_name = normalize_agent_name(current.name) if current else None
    lines: list[str] = []
    for agent in installed:
        name = normalize_agent_name(agent.name)
        is_current = current is not None and current_name == name and current.version == agent.version
        marker = "*" if is_current else " "
        line = f"{marker} {name}@{agent.version} ({agent.package})"
        if agent.args:
            line += f' args="{format_args(agent.args)}"'
        lines.append(line)
    return lines


def list_command(ctx: typer.Context, remote: REMOTE_OPTION = False) -> None:
    """List installed agents, marking the current one with ``*``."""

    cli = get_cli_context(ctx)
    with command_guard(cli):
        config = load_project_config()
        installed = cli.install_store.list_installed()
        if remote:
            for line in _render_remote(config, installed):
                plain(line)
            return

        supported = [agent for agent in installed if is_supported_agent(normalize_agent_name(agent.name))]
        if not supported:
            supported_text = ", ".join(SUPPORTED_AGENTS)
            info(
                f"No supported agents installed yet ({supported_text}). Try `avm install codex`.",
                use_emoji=cli.use_emoji,
            )
            return
        for line in _render_installed(cli.state_store.read(), supported):
            plain(line)
        if config.default_name:
            location = f" ({config.path})" if config.path else ""
            plain(f"Project default: {config.default_name}{location}")


def current_command(ctx: typer.Context) -> None:
    """Show the active agent."""

    cli = get_cli_context(ctx)
    with command_guard(cli):
        current = cli.state_store.read().current
        if current is None:
            info("No active agent. Run `avm <agent>` or `avm global <agent>`.", use_emoji=cli.use_emoji)
            return
        name = normalize_agent_name(current.name)
        if not is_supported_agent(name):
            warn(
                f'Current agent "{current.name}" is not supported. Use one of: {", ".join(SUPPORTED_AGENTS)}.',
                use_emoji=cli.use_emoji,
            )
            return
        plain(describe_record(current.model_copy(update={"name": name}), args_label="args"))


def register(app: typer.Typer) -> None:
    app.command("list", help="List installed agents (use --remote for supported packages).")(list_command)
    app.command("ls", hidden=True)(list_command)
    app.command("current", help="Show the active agent.")(current_command)


__all__ = ["current_command", "list_command", "register"]
