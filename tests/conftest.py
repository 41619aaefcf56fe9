# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from avm.layout import AvmLayout
from avm.store import InstallStore


class FakeInstaller:
    """Installer double that lays out a minimal npm prefix and records calls."""

    def __init__(self, *, bin_entry: object = "bin/cli.js") -> None:
        self.bin_entry = bin_entry
        self.calls: list[tuple[Path, str, str | None]] = []

    def install(self, install_path: Path, package_spec: str, *, registry: str | None = None) -> None:
        self.calls.append((install_path, package_spec, registry))
        package, _, _ = package_spec.rpartition("@")
        write_package(install_path, package, bin_entry=self.bin_entry)


def write_package(install_path: Path, package: str, *, bin_entry: object = "bin/cli.js") -> Path:
    """Create ``node_modules/<package>`` with a descriptor and executable under ``install_path``."""

    package_dir = install_path / "node_modules" / package
    (package_dir / "bin").mkdir(parents=True, exist_ok=True)
    descriptor = {"name": package, "version": "0.0.0"}
    if bin_entry is not None:
        descriptor["bin"] = bin_entry
    (package_dir / "package.json").write_text(json.dumps(descriptor), encoding="utf-8")
    executable = package_dir / "bin" / "cli.js"
    executable.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    executable.chmod(0o755)
    return executable


@pytest.fixture(autouse=True)
def avm_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``AVM_HOME`` at a temporary directory and disable update checks."""

    home = tmp_path / "avm-home"
    monkeypatch.setenv("AVM_HOME", str(home))
    monkeypatch.setenv("AVM_NO_UPDATE_CHECK", "1")
    monkeypatch.delenv("AVM_DEBUG", raising=False)
    return home


@pytest.fixture
def layout(avm_home: Path) -> AvmLayout:
    return AvmLayout(home=avm_home)


@pytest.fixture
def fake_installer() -> FakeInstaller:
    return FakeInstaller()


@pytest.fixture
def store(layout: AvmLayout, fake_installer: FakeInstaller) -> InstallStore:
    return InstallStore(layout, fake_installer, clock=lambda: "2025-01-01T00:00:00.000Z")


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a working directory with no project configuration and chdir into it."""

    directory = tmp_path / "project"
    directory.mkdir()
    monkeypatch.chdir(directory)
    return directory


@pytest.fixture
def package_writer():
    """Return :func:`write_package` for tests that lay out installs by hand."""

    return write_package
