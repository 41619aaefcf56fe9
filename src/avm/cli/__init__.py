# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""avm CLI package exports."""

from __future__ import annotations

from .app import app
from .main import main, normalize_argv

__all__ = ["app", "main", "normalize_argv"]
