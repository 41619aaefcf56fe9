# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for agent resolution, installation and state files."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from types import MappingProxyType
from typing import Final

DIST_NAME: Final[str] = "avm-cli"
PROG_NAME: Final[str] = "avm"

SUPPORTED_AGENTS: Final[tuple[str, ...]] = ("codex", "claude", "gemini")

DEFAULT_PACKAGES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "codex": "@openai/codex",
        "claude": "@anthropic-ai/claude-code",
        "gemini": "@google/gemini-cli",
    },
)

LATEST_VERSION: Final[str] = "latest"

CONFIG_FILENAME: Final[str] = "avm.config.json"
STATE_FILENAME: Final[str] = "state.json"
META_FILENAME: Final[str] = ".meta.json"
AGENTS_SUBDIR: Final[str] = "agents"
DEFAULT_HOME_DIRNAME: Final[str] = ".avm"

HOME_ENV: Final[str] = "AVM_HOME"
DEBUG_ENV: Final[str] = "AVM_DEBUG"
NO_UPDATE_CHECK_ENV: Final[str] = "AVM_NO_UPDATE_CHECK"

UPDATE_CHECK_INTERVAL: Final[timedelta] = timedelta(days=1)
UPDATE_CHECK_TIMEOUT_SECONDS: Final[float] = 3.0
PYPI_JSON_URL: Final[str] = f"https://pypi.org/pypi/{DIST_NAME}/json"

__all__ = [
    "AGENTS_SUBDIR",
    "CONFIG_FILENAME",
    "DEBUG_ENV",
    "DEFAULT_HOME_DIRNAME",
    "DEFAULT_PACKAGES",
    "DIST_NAME",
    "HOME_ENV",
    "LATEST_VERSION",
    "META_FILENAME",
    "NO_UPDATE_CHECK_ENV",
    "PROG_NAME",
    "PYPI_JSON_URL",
    "STATE_FILENAME",
    "SUPPORTED_AGENTS",
    "UPDATE_CHECK_INTERVAL",
    "UPDATE_CHECK_TIMEOUT_SECONDS",
]
