# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for environment-driven settings and the home directory layout."""

from __future__ import annotations

from pathlib import Path

from avm.layout import AvmLayout, sanitize_name, unsanitize_name
from avm.settings import load_settings


def test_settings_read_environment(tmp_path: Path) -> None:
    settings = load_settings({"AVM_HOME": str(tmp_path), "AVM_DEBUG": "1", "AVM_NO_UPDATE_CHECK": "1"})

    assert settings.home == tmp_path
    assert settings.debug is True
    assert settings.update_check is False
    assert settings.layout.state_file == tmp_path / "state.json"


def test_settings_default_home() -> None:
    settings = load_settings({})

    assert settings.home == Path.home() / ".avm"
    assert settings.debug is False
    assert settings.update_check is True


def test_layout_paths(tmp_path: Path) -> None:
    layout = AvmLayout(home=tmp_path)

    assert layout.install_dir("codex", "0.1.0") == tmp_path / "agents" / "codex" / "0.1.0"
    assert layout.install_dir("@scope/tool", "1.0.0") == tmp_path / "agents" / "@scope__tool" / "1.0.0"
    assert AvmLayout.meta_file(tmp_path) == tmp_path / ".meta.json"


def test_name_sanitization_round_trip() -> None:
    assert sanitize_name("a/b\\c") == "a__b__c"
    assert unsanitize_name("a__b") == "a/b"
