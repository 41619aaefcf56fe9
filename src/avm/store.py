# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Install store guaranteeing an on-disk installation for a resolved target."""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from .installer import Installer, NpmInstaller
from .layout import AvmLayout, unsanitize_name
from .models import InstallRecord, InstalledAgent, Target
from .serialization import read_json, utc_timestamp, write_json

LOGGER = logging.getLogger(__name__)

InstallCallback = Callable[[str, Path], None]


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Outcome of :meth:`InstallStore.ensure`."""

    install_path: Path
    record: InstallRecord
    installed: bool


class InstallStore:
    """Cache of agent installations keyed by ``(name, version)``.

    The package is not part of the directory key, so a record whose package
    differs from the requested one is treated as a miss and the directory is
    replaced.
    """

    def __init__(
        self,
        layout: AvmLayout,
        installer: Installer | None = None,
        *,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self.layout = layout
        self._installer = installer or NpmInstaller()
        self._clock = clock

    def read_record(self, install_path: Path) -> InstallRecord | None:
        """Return the metadata stored at ``install_path``.

        Unparseable or structurally invalid metadata reads as ``None``; other
        filesystem errors propagate.
        """

        meta_path = self.layout.meta_file(install_path)
        try:
            data = read_json(meta_path, None)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            LOGGER.warning("Ignoring corrupt metadata at %s: %s", meta_path, exc)
            return None
        if not isinstance(data, dict):
            return None
        try:
            return InstallRecord.model_validate(data)
        except ValidationError as exc:
            LOGGER.warning("Ignoring invalid metadata at %s: %s", meta_path, exc)
            return None

    def ensure(
        self,
        target: Target,
        *,
        registry: str | None = None,
        on_install: InstallCallback | None = None,
    ) -> InstallResult:
        """Make sure an installation matching ``target`` exists.

        Args:
            target: Resolved agent to install.
            registry: Optional alternate npm registry URL.
            on_install: Callback invoked with ``(package_spec, path)`` right
                before the installer runs.

        Returns:
            InstallResult: Install path and the record now stored on disk.

        Raises:
            InstallFailure: If the installer fails.
        """

        install_path = self.layout.install_dir(target.name, target.version)
        existing = self.read_record(install_path)

        if existing is None or not existing.matches(target):
            record = self._reinstall(target, install_path, registry=registry, on_install=on_install)
            return InstallResult(install_path=install_path, record=record, installed=True)

        merged = existing.merged_with(target)
        if not merged.same_content(existing):
            LOGGER.debug("Updating metadata for %s at %s", target.package_spec, install_path)
            write_json(self.layout.meta_file(install_path), merged.to_json())
        return InstallResult(install_path=install_path, record=merged, installed=False)

    def _reinstall(
        self,
        target: Target,
        install_path: Path,
        *,
        registry: str | None,
        on_install: InstallCallback | None,
    ) -> InstallRecord:
        if install_path.exists():
            LOGGER.debug("Removing stale installation at %s", install_path)
            shutil.rmtree(install_path)
        if on_install is not None:
            on_install(target.package_spec, install_path)
        self._installer.install(install_path, target.package_spec, registry=registry)
        record = InstallRecord.from_target(target, installed_at=self._clock())
        write_json(self.layout.meta_file(install_path), record.to_json())
        return record

    def list_installed(self) -> list[InstalledAgent]:
        """Return every installation directory below the agents root."""

        agents_dir = self.layout.agents_dir
        if not agents_dir.is_dir():
            return []
        results: list[InstalledAgent] = []
        for agent_dir in sorted(path for path in agents_dir.iterdir() if path.is_dir()):
            fallback_name = unsanitize_name(agent_dir.name)
            for version_dir in sorted(path for path in agent_dir.iterdir() if path.is_dir()):
                record = self.read_record(version_dir)
                results.append(
                    InstalledAgent(
                        name=record.name if record else fallback_name,
                        package=record.package if record else fallback_name,
                        version=version_dir.name,
                        args=record.args if record else (),
                        path=version_dir,
                        installed_at=record.installed_at if record else None,
                    ),
                )
        return results


__all__ = ["InstallCallback", "InstallResult", "InstallStore"]
