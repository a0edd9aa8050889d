# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance endpoint.

- POST /asistencia - Record whether a student attended
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_attendance_service
from src.domains.attendance import TIMESTAMP_FORMAT, AttendanceError, AttendanceService
from src.models.attendance import AttendanceCreateRequest, AttendanceResponse
from src.models.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/asistencia",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record attendance",
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)
async def record_attendance(
    request: AttendanceCreateRequest,
    service: AttendanceService = Depends(get_attendance_service),
) -> AttendanceResponse:
    """Record the attendance of a student."""
    try:
        stamp = await service.record(
            student_id=request.id_estudiante,
            professor_id=request.id_profesor,
            grade_id=request.id_grado,
            present=request.presente,
        )
    except AttendanceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error en el servidor",
        )

    return AttendanceResponse(
        message="Asistencia registrada correctamente",
        fecha=stamp.strftime(TIMESTAMP_FORMAT),
        presente=request.presente,
    )
