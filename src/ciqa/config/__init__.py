# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings models, layered loading and per-tool config resolution."""

from __future__ import annotations

from .loader import load_settings
from .models import ActionSettings, CacheSettings, ConfigError
from .resolver import ConfigResolver

__all__ = [
    "ActionSettings",
    "CacheSettings",
    "ConfigError",
    "ConfigResolver",
    "load_settings",
]
