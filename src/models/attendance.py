# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Models for attendance records."""

from pydantic import BaseModel, Field


class AttendanceCreateRequest(BaseModel):
    """Body of POST /asistencia."""

    id_estudiante: int = Field(gt=0)
    id_profesor: int = Field(gt=0)
    id_grado: int = Field(gt=0)
    presente: bool


class AttendanceResponse(BaseModel):
    """Response of a stored attendance mark."""

    message: str
    fecha: str = Field(description="Server timestamp, 'YYYY-MM-DD HH:MM:SS' in UTC")
    presente: bool
