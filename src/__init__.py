"""Attendance Server Backend.

Attendance tracking backend for professors, grades and students, with
atomic provisioning of a professor's initial grade and student hierarchy.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
