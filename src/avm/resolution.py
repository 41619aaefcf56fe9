# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve a concrete :class:`~avm.models.Target` from layered sources.

Each field follows its own first-match-wins chain:

* name: CLI spec, project default, global state;
* package: explicit override, project section, global state, built-in table;
* version: CLI spec, project section, global state, ``latest``;
* args: explicit override, project section, global state, empty.

Global state only contributes when its last-used agent is the resolved one.
"""

from __future__ import annotations

from dataclasses import dataclass

from .agents import (
    assert_supported_agent,
    normalize_agent_name,
    parse_agent_spec,
    parse_args_string,
    resolve_package_name,
)
from .constants import LATEST_VERSION
from .errors import NoAgentSpecified
from .layout import check_version_segment
from .models import GlobalState, ProjectConfig, Target


@dataclass(frozen=True, slots=True)
class ResolutionOverrides:
    """Call-site overrides supplied by command flags."""

    package: str | None = None
    args: str | None = None


def resolve_target(
    cli_spec: str | None,
    config: ProjectConfig,
    state: GlobalState,
    overrides: ResolutionOverrides | None = None,
) -> Target:
    """Return the target described by the CLI spec and the loaded snapshots.

    Args:
        cli_spec: ``name`` or ``name@version`` from the command line, if any.
        config: Project configuration discovered for the working directory.
        state: Snapshot of the persisted global state.
        overrides: Explicit package and args overrides.

    Returns:
        Target: Freshly constructed, fully specified target.

    Raises:
        NoAgentSpecified: If no source names an agent.
        UnsupportedAgent: If the resolved name is not supported.
        NoPackageConfigured: If no package can be determined.
        InvalidAgentVersion: If the resolved version is not a plain path segment.
    """

    overrides = overrides or ResolutionOverrides()
    parsed = parse_agent_spec(cli_spec)

    current_name = state.current.name if state.current is not None else None
    raw_name = (parsed.name if parsed else None) or config.default_name or current_name
    name = normalize_agent_name(raw_name)
    if not name:
        raise NoAgentSpecified()
    assert_supported_agent(name)

    section = config.override_for(name)
    last_used = state.current_for(name)

    package = resolve_package_name(
        name,
        package_override=overrides.package,
        config_package=section.package,
        state_package=last_used.package if last_used else None,
    )
    version = (
        (parsed.version if parsed else None)
        or section.version
        or (last_used.version if last_used else None)
        or LATEST_VERSION
    )
    check_version_segment(name, version)
    args = _resolve_args(overrides.args, section.args, last_used.args if last_used else ())
    return Target(name=name, package=package, version=version, args=args)


def _resolve_args(
    override: str | None,
    configured: str | None,
    last_used: tuple[str, ...],
) -> tuple[str, ...]:
    for candidate in (override, configured):
        if candidate:
            return parse_args_string(candidate)
    return last_used


__all__ = ["ResolutionOverrides", "resolve_target"]
