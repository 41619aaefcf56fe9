# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy surfaced to the command layer."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .constants import CONFIG_FILENAME, SUPPORTED_AGENTS


class AvmError(Exception):
    """Base class for failures reported to the user as a single line."""


class NoAgentSpecified(AvmError):
    """Raised when neither the CLI, the project file nor global state name an agent."""

    def __init__(self) -> None:
        super().__init__(
            f"No agent specified. Use avm <agent>, avm global <agent>, or configure {CONFIG_FILENAME}.",
        )


class UnsupportedAgent(AvmError):
    """Raised when a requested agent is outside the supported set."""

    def __init__(self, name: str) -> None:
        supported = ", ".join(SUPPORTED_AGENTS)
        super().__init__(f'Unsupported agent "{name}". Supported agents: {supported}.')
        self.name = name


class InvalidAgentVersion(AvmError):
    """Raised when a version cannot name a single installation directory."""

    def __init__(self, name: str, version: str) -> None:
        super().__init__(
            f'Invalid version "{version}" for agent "{name}". '
            'Versions may not be empty, "." or "..", or contain path separators.',
        )
        self.name = name
        self.version = version


class NoPackageConfigured(AvmError):
    """Raised when no npm package can be determined for an agent."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f'No npm package configured for agent "{name}". '
            f"Specify with --package or configure it in {CONFIG_FILENAME}.",
        )
        self.name = name


class ConfigParseError(AvmError):
    """Raised when the project configuration file cannot be interpreted."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


class InstallFailure(AvmError):
    """Raised when the external package installer does not succeed."""

    def __init__(self, command: Sequence[str], exit_code: int | None, reason: str | None = None) -> None:
        rendered = " ".join(command)
        if exit_code is None:
            message = f"{rendered} could not be started: {reason or 'unknown error'}"
        else:
            message = f"{rendered} exited with code {exit_code}"
        super().__init__(message)
        self.command = tuple(command)
        self.exit_code = exit_code


class BinaryNotFound(AvmError):
    """Raised when an installation exists but exposes no executable."""

    def __init__(self, package: str, install_path: Path) -> None:
        super().__init__(
            f"Unable to find executable for {package}. "
            f'Is the package\'s "bin" field set? Install path: {install_path}',
        )
        self.package = package
        self.install_path = install_path


__all__ = [
    "AvmError",
    "BinaryNotFound",
    "ConfigParseError",
    "InstallFailure",
    "InvalidAgentVersion",
    "NoAgentSpecified",
    "NoPackageConfigured",
    "UnsupportedAgent",
]
