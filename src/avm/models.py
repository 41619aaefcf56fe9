# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models for resolved targets, project configuration and persisted state."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from .agents import format_args, normalize_agent_name, parse_args_string
from .constants import LATEST_VERSION


def _coerce_args(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return parse_args_string(value)
    if isinstance(value, Sequence):
        return tuple(str(entry).strip() for entry in value if str(entry).strip())
    raise ValueError("args must be a string or a sequence of strings")


class Target(BaseModel):
    """Fully resolved agent request."""

    model_config = ConfigDict(frozen=True)

    name: str
    package: str
    version: str = LATEST_VERSION
    args: tuple[str, ...] = ()

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, value: object) -> tuple[str, ...]:
        return _coerce_args(value)

    @property
    def package_spec(self) -> str:
        """Return the ``package@version`` specifier handed to the installer."""

        return f"{self.package}@{self.version}"


class InstallRecord(BaseModel):
    """Metadata stored alongside each ``(name, version)`` installation.

    ``args`` is persisted as a single space-joined string. Keys this model
    does not know about are kept so rewriting a record never drops them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    package: str
    version: str
    args: tuple[str, ...] = ()
    installed_at: str | None = Field(default=None, alias="installedAt")

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, value: object) -> tuple[str, ...]:
        return _coerce_args(value)

    @field_serializer("args")
    def _serialize_args(self, value: tuple[str, ...]) -> str:
        return format_args(value)

    @classmethod
    def from_target(cls, target: Target, *, installed_at: str) -> InstallRecord:
        """Build the record written after installing ``target``.

        Args:
            target: Target that was just installed.
            installed_at: ISO-8601 timestamp of the installation.

        Returns:
            InstallRecord: Record carrying the target's identity and args.
        """

        return cls(
            name=target.name,
            package=target.package,
            version=target.version,
            args=target.args,
            installed_at=installed_at,
        )

    def matches(self, target: Target) -> bool:
        """Return ``True`` when this installation satisfies ``target``'s package and version."""

        return self.package == target.package and self.version == target.version

    def merged_with(self, target: Target) -> InstallRecord:
        """Return a copy carrying ``target``'s identity and, when non-empty, its args."""

        return self.model_copy(
            update={
                "name": target.name,
                "package": target.package,
                "version": target.version,
                "args": target.args or self.args,
            },
        )

    def same_content(self, other: InstallRecord) -> bool:
        """Return ``True`` when ``other`` stores the same name, package, version and args."""

        return (
            self.name == other.name
            and self.package == other.package
            and self.version == other.version
            and self.args == other.args
        )

    def to_target(self) -> Target:
        """Return the :class:`Target` this record satisfies."""

        return Target(name=self.name, package=self.package, version=self.version, args=self.args)

    def to_json(self) -> dict[str, Any]:
        """Return the on-disk representation.

        Returns:
            dict[str, Any]: camelCase keys with args joined into one string; ``None``
            fields are omitted and unknown keys are kept.
        """

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class InstalledAgent(BaseModel):
    """Listing entry describing one installation directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    package: str
    version: str
    args: tuple[str, ...] = ()
    path: Path
    installed_at: str | None = None


class AgentOverride(BaseModel):
    """Per-agent section of the project configuration file."""

    model_config = ConfigDict(validate_assignment=True)

    package: str | None = None
    version: str | None = None
    args: str | None = None

    def to_json(self) -> dict[str, str]:
        section: dict[str, str] = {}
        if self.package:
            section["package"] = self.package
        if self.version:
            section["version"] = self.version
        if self.args:
            section["args"] = self.args
        return section


class ProjectConfig(BaseModel):
    """Project-level defaults loaded from the nearest configuration file."""

    model_config = ConfigDict(validate_assignment=True)

    default_name: str | None = None
    agents: dict[str, AgentOverride] = Field(default_factory=dict)
    path: Path | None = None

    def override_for(self, name: str) -> AgentOverride:
        return self.agents.get(name) or AgentOverride()


class SelfUpdateState(BaseModel):
    """Bookkeeping for the periodic self-update notification."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    last_update_check: str | None = Field(default=None, alias="lastUpdateCheck")
    latest_version: str | None = Field(default=None, alias="latestVersion")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GlobalState(BaseModel):
    """Read-only snapshot of the persisted global state file."""

    model_config = ConfigDict(frozen=True)

    current: InstallRecord | None = None
    self_update: SelfUpdateState = Field(default_factory=SelfUpdateState)
    updated_at: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GlobalState:
        """Build a snapshot from raw JSON, treating malformed sections as absent."""

        current = None
        raw_current = data.get("current")
        if isinstance(raw_current, Mapping):
            try:
                current = InstallRecord.model_validate(raw_current)
            except ValidationError:
                current = None
        self_update = SelfUpdateState()
        raw_self = data.get("self")
        if isinstance(raw_self, Mapping):
            try:
                self_update = SelfUpdateState.model_validate(raw_self)
            except ValidationError:
                self_update = SelfUpdateState()
        updated_at = data.get("updatedAt")
        return cls(
            current=current,
            self_update=self_update,
            updated_at=updated_at if isinstance(updated_at, str) else None,
        )

    def current_for(self, name: str) -> InstallRecord | None:
        """Return the last-used record only when it belongs to agent ``name``."""

        if self.current is None:
            return None
        if normalize_agent_name(self.current.name) != name:
            return None
        return self.current


__all__ = [
    "AgentOverride",
    "GlobalState",
    "InstallRecord",
    "InstalledAgent",
    "ProjectConfig",
    "SelfUpdateState",
    "Target",
]
