# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem layout of the avm home directory."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .constants import AGENTS_SUBDIR, META_FILENAME, STATE_FILENAME
from .errors import InvalidAgentVersion

_SEPARATOR_PATTERN = re.compile(r"[\\/]")
_SANITIZED_SEPARATOR = "__"


def sanitize_name(name: str) -> str:
    """Return ``name`` with path separators replaced so it fits one directory."""

    return _SEPARATOR_PATTERN.sub(_SANITIZED_SEPARATOR, name)


def unsanitize_name(name: str) -> str:
    """Reverse :func:`sanitize_name` for directory listings."""

    return name.replace(_SANITIZED_SEPARATOR, "/")


def check_version_segment(name: str, version: str) -> None:
    """Raise :class:`InvalidAgentVersion` unless ``version`` is one plain path segment."""

    if version in {"", ".", ".."} or _SEPARATOR_PATTERN.search(version):
        raise InvalidAgentVersion(name, version)


@dataclass(frozen=True, slots=True)
class AvmLayout:
    """Locations of installations and persisted state below ``home``."""

    home: Path

    @property
    def agents_dir(self) -> Path:
        """Return the directory holding one subdirectory per agent."""

        return self.home / AGENTS_SUBDIR

    @property
    def state_file(self) -> Path:
        """Return the global state file path."""

        return self.home / STATE_FILENAME

    def agent_dir(self, name: str) -> Path:
        """Return the directory holding every installed version of ``name``.

        Args:
            name: Agent name; path separators are sanitised.

        Returns:
            Path: ``<home>/agents/<sanitised name>``.
        """

        return self.agents_dir / sanitize_name(name)

    def install_dir(self, name: str, version: str) -> Path:
        """Return the installation directory keyed by ``(name, version)`` only.

        Raises:
            InvalidAgentVersion: If ``version`` would escape the agent directory.
        """

        check_version_segment(name, version)
        return self.agent_dir(name) / version

    @staticmethod
    def meta_file(install_path: Path) -> Path:
        """Return the metadata file path for an installation directory.

        Args:
            install_path: Directory returned by :meth:`install_dir`.

        Returns:
            Path: ``<install_path>/.meta.json``.
        """

        return install_path / META_FILENAME


__all__ = ["AvmLayout", "check_version_segment", "sanitize_name", "unsanitize_name"]
