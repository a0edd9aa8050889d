# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Roster domain: grade and student lookups."""

from src.domains.roster.service import RosterError, RosterService

__all__ = ["RosterService", "RosterError"]
