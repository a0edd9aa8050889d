# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models for service parameters and HTTP payloads."""

from src.models.attendance import AttendanceCreateRequest, AttendanceResponse
from src.models.common import ErrorResponse
from src.models.professor import (
    LoginRequest,
    LoginResponse,
    ProfessorProfile,
    RegisterRequest,
    RegisterResponse,
)
from src.models.provisioning import (
    ProvisionGradesRequest,
    ProvisionGradesResponse,
    ProvisioningConfig,
    ProvisioningResult,
)
from src.models.roster import GradeRecord, StudentRecord

__all__ = [
    "AttendanceCreateRequest",
    "AttendanceResponse",
    "ErrorResponse",
    "GradeRecord",
    "LoginRequest",
    "LoginResponse",
    "ProfessorProfile",
    "ProvisionGradesRequest",
    "ProvisionGradesResponse",
    "ProvisioningConfig",
    "ProvisioningResult",
    "RegisterRequest",
    "RegisterResponse",
    "StudentRecord",
]
