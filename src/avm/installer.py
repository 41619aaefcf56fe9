# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""External package installer invoked on cache misses."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .errors import InstallFailure
from .process_utils import SubprocessExecutionError, run_command

LOGGER = logging.getLogger(__name__)


class Installer(Protocol):
    """Install ``package_spec`` into ``install_path``."""

    def install(self, install_path: Path, package_spec: str, *, registry: str | None = None) -> None: ...


class NpmInstaller:
    """Install npm packages into a private ``--prefix`` directory."""

    executable = "npm"

    def build_command(self, install_path: Path, package_spec: str, *, registry: str | None = None) -> list[str]:
        command = [
            self.executable,
            "install",
            "--prefix",
            str(install_path),
            "--no-package-lock",
            "--no-progress",
            "--no-fund",
            package_spec,
        ]
        if registry:
            command.extend(["--registry", registry])
        return command

    def install(self, install_path: Path, package_spec: str, *, registry: str | None = None) -> None:
        """Run ``npm install`` with inherited stdio and wait for it to finish.

        Raises:
            InstallFailure: If npm cannot be started or exits non-zero.
        """

        install_path.mkdir(parents=True, exist_ok=True)
        command = self.build_command(install_path, package_spec, registry=registry)
        LOGGER.debug("Running %s", " ".join(command))
        try:
            run_command(command)
        except SubprocessExecutionError as exc:
            raise InstallFailure(command, exc.returncode) from exc
        except OSError as exc:
            raise InstallFailure(command, None, str(exc)) from exc


__all__ = ["Installer", "NpmInstaller"]
