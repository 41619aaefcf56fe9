# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Daily notification about newer avm releases and the self-update action."""

from __future__ import annotations

import json
import logging
import ssl
import sys
import urllib.request
from collections.abc import Callable
from datetime import UTC, datetime
from http.client import HTTPException
from typing import Final

from packaging.version import InvalidVersion, Version

from . import __version__
from .constants import DIST_NAME, PYPI_JSON_URL, UPDATE_CHECK_INTERVAL, UPDATE_CHECK_TIMEOUT_SECONDS
from .logging import info
from .process_utils import run_command
from .serialization import isoformat_utc, parse_timestamp
from .state import StateStore

LOGGER = logging.getLogger(__name__)

_USER_AGENT: Final[str] = f"{DIST_NAME}/{__version__}"

VersionFetcher = Callable[[], str | None]


def is_newer_version(remote: str | None, local: str | None) -> bool:
    """Return ``True`` when ``remote`` is a newer release than ``local``.

    Versions that cannot be parsed are considered newer whenever they differ.
    """

    if not remote or not local:
        return False
    try:
        return Version(remote) > Version(local)
    except InvalidVersion:
        return remote != local


def fetch_latest_version(timeout: float = UPDATE_CHECK_TIMEOUT_SECONDS) -> str | None:
    """Return the newest published avm version from the PyPI JSON API."""

    request = urllib.request.Request(
        PYPI_JSON_URL,
        headers={"Accept": "application/json", "User-Agent": _USER_AGENT},
    )
    opener = urllib.request.build_opener(urllib.request.HTTPSHandler(context=ssl.create_default_context()))
    with opener.open(request, timeout=timeout) as response:
        payload = json.loads(response.read().decode("utf-8"))
    version = payload.get("info", {}).get("version") if isinstance(payload, dict) else None
    return str(version) if version else None


def check_for_update(
    store: StateStore,
    *,
    current_version: str = __version__,
    fetch: VersionFetcher = fetch_latest_version,
    now: datetime | None = None,
) -> str | None:
    """Record an update check and return the newer version, if any.

    The registry is contacted at most once per interval. Network and state
    write failures are logged at debug level and otherwise ignored.

    Returns:
        str | None: Newer published version, or ``None``.
    """

    moment = now or datetime.now(tz=UTC)
    self_state = store.read().self_update
    last_check = parse_timestamp(self_state.last_update_check)
    if last_check is not None and moment - last_check < UPDATE_CHECK_INTERVAL:
        return None

    latest: str | None = None
    try:
        latest = fetch()
    except (OSError, ValueError, HTTPException) as exc:
        LOGGER.debug("Failed to check for avm updates: %s", exc)

    next_state = self_state.to_json()
    next_state["lastUpdateCheck"] = isoformat_utc(moment)
    if latest:
        next_state["latestVersion"] = latest
    try:
        store.write({"self": next_state})
    except OSError as exc:
        LOGGER.debug("Failed to write avm state: %s", exc)

    if latest and is_newer_version(latest, current_version):
        return latest
    return None


def maybe_notify_self_update(store: StateStore, *, use_emoji: bool) -> None:
    """Print an upgrade hint when a newer avm release is available."""

    try:
        latest = check_for_update(store)
    except (OSError, ValueError) as exc:
        LOGGER.debug("Self-update check failed: %s", exc)
        return
    if latest is None:
        return
    info(f"A new version of avm is available: {__version__} → {latest}.", use_emoji=use_emoji)
    info(
        f"Update with: pip install --upgrade {DIST_NAME}    # or: avm self-update",
        use_emoji=use_emoji,
    )


def self_update_command(target_version: str | None = None) -> list[str]:
    """Return the pip command upgrading avm to ``target_version`` (latest by default)."""

    spec = f"{DIST_NAME}=={target_version}" if target_version and target_version != "latest" else DIST_NAME
    return [sys.executable, "-m", "pip", "install", "--upgrade", spec]


def run_self_update(target_version: str | None = None) -> None:
    """Upgrade avm in the running interpreter's environment.

    Raises:
        SubprocessExecutionError: If pip exits non-zero.
    """

    run_command(self_update_command(target_version))


__all__ = [
    "check_for_update",
    "fetch_latest_version",
    "is_newer_version",
    "maybe_notify_self_update",
    "run_self_update",
    "self_update_command",
]
