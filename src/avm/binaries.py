# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the executable exposed by an installed npm package."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

LOGGER = logging.getLogger(__name__)

NODE_MODULES_DIR = "node_modules"
SHARED_BIN_DIR = ".bin"
PACKAGE_DESCRIPTOR = "package.json"


def _declared_bin(descriptor: Path) -> str | None:
    try:
        payload = json.loads(descriptor.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        LOGGER.warning("Unable to read %s: %s", descriptor, exc)
        return None
    if not isinstance(payload, Mapping):
        return None
    entry = payload.get("bin")
    if isinstance(entry, str):
        return entry or None
    if isinstance(entry, Mapping):
        for value in entry.values():
            return str(value) if value else None
    return None


def find_agent_binary(install_path: Path, package: str) -> Path | None:
    """Return the executable for ``package`` inside ``install_path``.

    The package's own ``bin`` declaration wins (a string, or the first value
    of a mapping, resolved against the package directory). Otherwise the
    shared ``node_modules/.bin`` entry named after the last segment of the
    package is used.

    Args:
        install_path: Installation prefix used for ``npm install``.
        package: npm package identifier, possibly registry-scoped.

    Returns:
        Path | None: Existing executable path, or ``None`` when none resolves.
    """

    modules_dir = install_path / NODE_MODULES_DIR
    package_dir = modules_dir / package
    declared = _declared_bin(package_dir / PACKAGE_DESCRIPTOR)
    if declared:
        candidate = package_dir / declared
        if candidate.exists():
            return candidate

    fallback = modules_dir / SHARED_BIN_DIR / package.split("/")[-1]
    if fallback.exists():
        return fallback
    return None


__all__ = ["find_agent_binary"]
