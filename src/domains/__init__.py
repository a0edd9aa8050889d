# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for the attendance server.

This package contains domain services that encapsulate business logic.
Each domain module provides a service that talks to the data store.

Domains:
    provisioning: Atomic creation of a professor's initial grades and students.
    professor: Professor registration and login.
    roster: Grade and student lookups.
    attendance: Attendance record insertion.
"""
