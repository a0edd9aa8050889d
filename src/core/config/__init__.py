# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the attendance server.

Settings are Pydantic models loaded from environment variables.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.provisioning.grade_names)
    ['Primero', 'Segundo', 'Tercero']
"""

from src.core.config.settings import (
    APISettings,
    CORSSettings,
    DatabaseSettings,
    ProvisioningSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "ProvisioningSettings",
    "CORSSettings",
    "APISettings",
]
