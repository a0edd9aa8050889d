# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Provisioning domain for a professor's initial grades and students.

This package provides the ProvisioningService that creates a fixed set of
grades for a professor and a fixed set of students per grade in a single
atomic operation.
"""

from src.domains.provisioning.service import (
    CommitError,
    GradeProvisioningError,
    ProvisioningError,
    ProvisioningService,
    ProvisioningTimeoutError,
    RollbackError,
    StudentProvisioningError,
    TransactionStartError,
)

__all__ = [
    "ProvisioningService",
    "ProvisioningError",
    "TransactionStartError",
    "ProvisioningTimeoutError",
    "GradeProvisioningError",
    "StudentProvisioningError",
    "CommitError",
    "RollbackError",
]
