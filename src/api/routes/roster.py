# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade and student listing endpoints.

- GET /grados/{id_profesor} - Grades of a professor
- GET /estudiantes/{id_grado} - Students of a grade
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_roster_service
from src.domains.roster import RosterError, RosterService
from src.models.common import ErrorResponse
from src.models.roster import GradeRecord, StudentRecord

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/grados/{id_profesor}",
    response_model=list[GradeRecord],
    summary="List grades of a professor",
    responses={500: {"description": "Server error", "model": ErrorResponse}},
)
async def list_grades(
    id_profesor: int,
    service: RosterService = Depends(get_roster_service),
) -> list[GradeRecord]:
    """Get the grades assigned to a professor."""
    try:
        return await service.list_grades(id_profesor)
    except RosterError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error en el servidor",
        )


@router.get(
    "/estudiantes/{id_grado}",
    response_model=list[StudentRecord],
    summary="List students of a grade",
    responses={500: {"description": "Server error", "model": ErrorResponse}},
)
async def list_students(
    id_grado: int,
    service: RosterService = Depends(get_roster_service),
) -> list[StudentRecord]:
    """Get the students of a grade."""
    try:
        return await service.list_students(id_grado)
    except RosterError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error en el servidor",
        )
