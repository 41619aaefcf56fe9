# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Agent naming, spec parsing and built-in package lookup."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from .constants import DEFAULT_PACKAGES, SUPPORTED_AGENTS
from .errors import NoPackageConfigured, UnsupportedAgent


class AgentSpec(NamedTuple):
    """Name and optional version parsed from ``name`` or ``name@version``."""

    name: str
    version: str | None = None


def normalize_agent_name(name: str | None) -> str:
    """Return ``name`` trimmed and lower-cased (empty for ``None``)."""

    return (name or "").strip().lower()


def is_supported_agent(name: str) -> bool:
    """Return whether ``name`` is one of the supported agents.

    Args:
        name: Agent name, already normalised.

    Returns:
        bool: ``True`` for ``codex``, ``claude`` or ``gemini``.
    """

    return name in SUPPORTED_AGENTS


def assert_supported_agent(name: str) -> None:
    """Raise :class:`UnsupportedAgent` unless ``name`` is a supported agent."""

    if not is_supported_agent(name):
        raise UnsupportedAgent(name)


def parse_agent_spec(text: str | None) -> AgentSpec | None:
    """Split ``text`` into an :class:`AgentSpec`.

    The version is the text after the last ``@`` provided that ``@`` is not
    the first character, so registry-scoped names such as ``@scope/tool``
    remain intact.

    Args:
        text: Raw spec supplied on the command line.

    Returns:
        AgentSpec | None: Parsed spec, or ``None`` when no name is present.
    """

    if not text:
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    at_index = trimmed.rfind("@")
    if at_index > 0:
        name = normalize_agent_name(trimmed[:at_index])
        version = trimmed[at_index + 1 :]
        if not name:
            return None
        return AgentSpec(name=name, version=version or None)
    name = normalize_agent_name(trimmed)
    if not name:
        return None
    return AgentSpec(name=name)


def parse_args_string(value: str | None) -> tuple[str, ...]:
    """Tokenize default arguments by splitting on single spaces.

    Quoting is not interpreted; empty tokens produced by repeated spaces are
    dropped.
    """

    if not value or not isinstance(value, str):
        return ()
    return tuple(part.strip() for part in value.split(" ") if part.strip())


def format_args(tokens: Iterable[str]) -> str:
    """Join argument tokens back into the persisted string form."""

    return " ".join(tokens)


def resolve_package_name(
    name: str,
    *,
    package_override: str | None = None,
    config_package: str | None = None,
    state_package: str | None = None,
) -> str:
    """Return the npm package for ``name`` using first-match-wins precedence.

    Raises:
        NoPackageConfigured: If no source provides a package for ``name``.
    """

    for candidate in (package_override, config_package, state_package, DEFAULT_PACKAGES.get(name)):
        if candidate:
            return candidate
    raise NoPackageConfigured(name)


__all__ = [
    "AgentSpec",
    "assert_supported_agent",
    "format_args",
    "is_supported_agent",
    "normalize_agent_name",
    "parse_agent_spec",
    "parse_args_string",
    "resolve_package_name",
]
