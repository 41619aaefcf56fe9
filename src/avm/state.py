# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persistence of the global state file via read-merge-write."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .models import GlobalState, InstallRecord
from .serialization import read_json, utc_timestamp, write_json

LOGGER = logging.getLogger(__name__)


class StateStore:
    """Read and merge-update the global state document at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_raw(self) -> dict[str, Any]:
        """Return the raw state mapping; missing or corrupt files read as empty."""

        try:
            data = read_json(self.path, {})
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            LOGGER.debug("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}
        return dict(data) if isinstance(data, Mapping) else {}

    def read(self) -> GlobalState:
        return GlobalState.from_mapping(self.read_raw())

    def write(self, patch: Mapping[str, Any]) -> dict[str, Any]:
        """Shallow-merge ``patch`` over the stored document and rewrite it whole.

        Returns:
            dict[str, Any]: The document that was written, including ``updatedAt``.
        """

        merged = {**self.read_raw(), **patch, "updatedAt": utc_timestamp()}
        write_json(self.path, merged)
        return merged

    def set_current(self, record: InstallRecord) -> None:
        """Persist ``record`` as the last-used agent."""

        self.write({"current": record.to_json()})


__all__ = ["StateStore"]
