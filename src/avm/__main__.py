# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m avm``."""

from __future__ import annotations

from .cli.main import main

main()
