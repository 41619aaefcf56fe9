# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core package metadata for the agent version manager."""

from __future__ import annotations

from importlib import metadata

from .constants import DIST_NAME

__all__ = ["__version__"]

try:
    __version__ = metadata.version(DIST_NAME)
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
