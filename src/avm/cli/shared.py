# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared command context, error handling and output formatting."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

import typer

from ..agents import format_args
from ..errors import AvmError
from ..logging import configure_debug_logging, fail, info
from ..models import InstallRecord
from ..process_utils import SubprocessExecutionError
from ..self_update import maybe_notify_self_update
from ..settings import AvmSettings, load_settings
from ..state import StateStore
from ..store import InstallCallback, InstallStore

LOGGER = logging.getLogger(__name__)


@dataclass
class CLIContext:
    """Per-invocation services shared by every command."""

    settings: AvmSettings = field(default_factory=load_settings)
    use_emoji: bool = True

    @cached_property
    def state_store(self) -> StateStore:
        return StateStore(self.settings.layout.state_file)

    @cached_property
    def install_store(self) -> InstallStore:
        return InstallStore(self.settings.layout)

    def announce_install(self) -> InstallCallback:
        """Return an ``on_install`` callback that reports installs to the user."""

        def _announce(package_spec: str, install_path: Path) -> None:
            info(f"> Installing {package_spec} into {install_path}", use_emoji=self.use_emoji)

        return _announce


def get_cli_context(ctx: typer.Context) -> CLIContext:
    """Return the :class:`CLIContext` stored by the root callback."""

    found = ctx.find_object(CLIContext)
    if found is None:
        found = CLIContext()
        ctx.obj = found
    return found


@contextmanager
def command_guard(cli: CLIContext, *, check_updates: bool = True) -> Iterator[None]:
    """Run a command body, converting avm failures into exit status 1.

    Args:
        cli: Shared command context.
        check_updates: Whether to run the daily self-update notification first.

    Raises:
        typer.Exit: When the body raises an :class:`AvmError` or an OS-level failure.
    """

    configure_debug_logging(cli.settings.debug)
    if check_updates and cli.settings.update_check:
        maybe_notify_self_update(cli.state_store, use_emoji=cli.use_emoji)
    try:
        yield
    except (AvmError, SubprocessExecutionError, OSError) as exc:
        LOGGER.debug("Command failed", exc_info=exc)
        fail(f"Error: {exc}", use_emoji=cli.use_emoji)
        raise typer.Exit(code=1) from exc


def describe_record(record: InstallRecord, *, args_label: str = "with args") -> str:
    """Return ``name@version (package)`` plus the stored args, if any."""

    text = f"{record.name}@{record.version} ({record.package})"
    if record.args:
        text += f' {args_label}="{format_args(record.args)}"'
    return text


__all__ = ["CLIContext", "command_guard", "describe_record", "get_cli_context"]
