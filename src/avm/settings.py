# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Environment-driven settings for the agent version manager."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .constants import DEBUG_ENV, DEFAULT_HOME_DIRNAME, HOME_ENV, NO_UPDATE_CHECK_ENV
from .layout import AvmLayout


class AvmSettings(BaseModel):
    """Process-level settings resolved from environment variables."""

    model_config = ConfigDict(frozen=True)

    home: Path
    debug: bool = False
    update_check: bool = True

    @property
    def layout(self) -> AvmLayout:
        """Return the on-disk layout rooted at :attr:`home`."""

        return AvmLayout(home=self.home)


def load_settings(environ: Mapping[str, str] | None = None) -> AvmSettings:
    """Build :class:`AvmSettings` from ``environ`` (defaults to ``os.environ``).

    Args:
        environ: Environment mapping consulted for ``AVM_*`` variables.

    Returns:
        AvmSettings: Settings describing the avm home directory and toggles.
    """

    env = os.environ if environ is None else environ
    raw_home = env.get(HOME_ENV)
    home = Path(raw_home).expanduser() if raw_home else Path.home() / DEFAULT_HOME_DIRNAME
    return AvmSettings(
        home=home,
        debug=bool(env.get(DEBUG_ENV)),
        update_check=not env.get(NO_UPDATE_CHECK_ENV),
    )


__all__ = ["AvmSettings", "load_settings"]
