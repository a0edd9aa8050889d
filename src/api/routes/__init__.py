# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API Routes package.

Routes are mounted at the root path, matching the paths existing
attendance clients call.

Modules:
    health: Liveness and readiness checks.
    provisioning: Initial grade and student provisioning.
    professors: Registration and login.
    roster: Grade and student listings.
    attendance: Attendance records.
"""

from fastapi import APIRouter

from src.api.routes import attendance, health, professors, provisioning, roster

router = APIRouter()

router.include_router(health.router, tags=["Health"])
router.include_router(professors.router, tags=["Professors"])
router.include_router(provisioning.router, tags=["Provisioning"])
router.include_router(roster.router, tags=["Roster"])
router.include_router(attendance.router, tags=["Attendance"])

__all__ = ["router"]
