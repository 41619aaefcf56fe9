# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Launch a resolved agent executable with inherited standard streams."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .process_utils import run_command


def launch(binary: Path, args: Sequence[str]) -> int:
    """Run ``binary`` with ``args`` and return its exit code."""

    completed = run_command([str(binary), *args], check=False)
    return completed.returncode


__all__ = ["launch"]
