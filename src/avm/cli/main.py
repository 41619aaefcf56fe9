# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console-script entry point supporting the implicit ``run`` command."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Final

from ..constants import PROG_NAME
from .app import app
from .commands import COMMAND_NAMES

ROOT_FLAGS: Final[frozenset[str]] = frozenset({"--emoji", "--no-emoji"})
PASSTHROUGH_FLAGS: Final[frozenset[str]] = frozenset({"-h", "--help", "-v", "-V", "--version"})


def normalize_argv(argv: Sequence[str]) -> list[str]:
    """Insert ``run`` when no command name follows the root flags.

    ``avm codex@latest -- --help`` therefore behaves like
    ``avm run codex@latest -- --help`` and a bare ``avm`` runs the default agent.
    """

    args = list(argv)
    index = 0
    while index < len(args) and args[index] in ROOT_FLAGS:
        index += 1
    if index < len(args) and (args[index] in COMMAND_NAMES or args[index] in PASSTHROUGH_FLAGS):
        return args
    return [*args[:index], "run", *args[index:]]


def main(argv: Sequence[str] | None = None) -> None:
    """Run the avm CLI."""

    raw = sys.argv[1:] if argv is None else argv
    app(args=normalize_argv(raw), prog_name=PROG_NAME)


if __name__ == "__main__":  # pragma: no cover
    main()
