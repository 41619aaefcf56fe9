# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery, parsing and rewriting of ``avm.config.json`` project files."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .agents import AgentSpec, assert_supported_agent, normalize_agent_name
from .constants import CONFIG_FILENAME
from .errors import AvmError, ConfigParseError
from .layout import check_version_segment
from .models import AgentOverride, ProjectConfig

DEFAULT_SECTION = "default"


def _iter_candidates(start: Path) -> Iterable[Path]:
    current = start
    while True:
        yield current
        if current.parent == current:
            break
        current = current.parent


def find_config_file(start: Path | None = None) -> Path | None:
    """Return the nearest ``avm.config.json`` at or above ``start``.

    Args:
        start: Directory to begin the upward search from (defaults to cwd).

    Returns:
        Path | None: Path of the closest configuration file, if any.
    """

    origin = (start or Path.cwd()).resolve()
    for directory in _iter_candidates(origin):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_project_config(start: Path | None = None) -> ProjectConfig:
    """Load the nearest project configuration.

    A missing file yields an empty configuration. Any problem with a file
    that does exist is fatal because the user authored it.

    Raises:
        ConfigParseError: If the file is not valid JSON, cannot be read,
            or names an unsupported agent.
    """

    path = find_config_file(start)
    if path is None:
        return ProjectConfig()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return _parse_payload(payload, path)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigParseError(path, str(exc)) from exc
    except ConfigParseError:
        raise
    except AvmError as exc:
        raise ConfigParseError(path, str(exc)) from exc


def _parse_payload(payload: Any, path: Path) -> ProjectConfig:
    if not isinstance(payload, Mapping):
        raise ConfigParseError(path, "top-level value must be a JSON object")

    config = ProjectConfig(path=path)
    default = payload.get(DEFAULT_SECTION)
    if isinstance(default, Mapping) and default.get("name"):
        default_name = normalize_agent_name(str(default["name"]))
        assert_supported_agent(default_name)
        config.default_name = default_name

    agents: dict[str, AgentOverride] = {}
    for key, value in payload.items():
        if key == DEFAULT_SECTION or not isinstance(value, Mapping):
            continue
        name = normalize_agent_name(key)
        if not name:
            continue
        assert_supported_agent(name)
        agents[name] = AgentOverride(
            package=_optional_str(value.get("package") or value.get("pkg")),
            version=_optional_str(value.get("version")),
            args=_optional_str(value.get("args")),
        )
    config.agents = agents
    return config


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def render_project_config(config: ProjectConfig) -> dict[str, Any]:
    """Return the JSON document representing ``config``; unset fields are omitted."""

    data: dict[str, Any] = {}
    if config.default_name:
        data[DEFAULT_SECTION] = {"name": config.default_name}
    for name, section in config.agents.items():
        data[name] = section.to_json()
    return data


def write_project_config(config: ProjectConfig, target: Path) -> None:
    """Rewrite ``target`` wholesale with the contents of ``config``."""

    content = json.dumps(render_project_config(config), indent=2) + "\n"
    target.write_text(content, encoding="utf-8")


def apply_local_default(
    config: ProjectConfig,
    spec: AgentSpec,
    *,
    args: str | None = None,
) -> ProjectConfig:
    """Return a copy of ``config`` with ``spec`` set as the project default.

    The version is recorded only when ``spec`` carries one; ``args`` replaces
    the stored args when given (an empty string clears them).
    """

    assert_supported_agent(spec.name)
    if spec.version:
        check_version_segment(spec.name, spec.version)
    agents = {name: section.model_copy() for name, section in config.agents.items()}
    section = agents.setdefault(spec.name, AgentOverride())
    if spec.version:
        section.version = spec.version
    if args is not None:
        section.args = args or None
    return config.model_copy(update={"default_name": spec.name, "agents": agents})


__all__ = [
    "apply_local_default",
    "find_config_file",
    "load_project_config",
    "render_project_config",
    "write_project_config",
]
