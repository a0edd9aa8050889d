# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance domain: recording attendance marks."""

from src.domains.attendance.service import TIMESTAMP_FORMAT, AttendanceError, AttendanceService

__all__ = ["AttendanceService", "AttendanceError", "TIMESTAMP_FORMAT"]
