# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""JSON file helpers and timestamp formatting shared by persistence modules."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TypeAlias

JsonPrimitive: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]


def read_json(path: Path, fallback: Any = None) -> Any:
    """Return the decoded JSON document at ``path``.

    Args:
        path: File to read.
        fallback: Value returned when the file does not exist.

    Returns:
        Any: Decoded document, or ``fallback`` when ``path`` is missing.

    Raises:
        json.JSONDecodeError: If the file exists but is not valid JSON.
        OSError: For filesystem failures other than a missing file.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return fallback
    return json.loads(raw)


def write_json(path: Path, data: Any) -> None:
    """Write ``data`` to ``path`` as indented JSON, creating parent directories."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def isoformat_utc(moment: datetime) -> str:
    """Render ``moment`` as an ISO-8601 UTC timestamp with millisecond precision."""

    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_timestamp() -> str:
    """Return the current time as an ISO-8601 UTC timestamp.

    Returns:
        str: Timestamp such as ``2025-01-01T00:00:00.000Z``.
    """

    return isoformat_utc(datetime.now(tz=UTC))


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning ``None`` for missing or invalid input."""

    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


__all__ = [
    "JsonPrimitive",
    "JsonValue",
    "isoformat_utc",
    "parse_timestamp",
    "read_json",
    "utc_timestamp",
    "write_json",
]
