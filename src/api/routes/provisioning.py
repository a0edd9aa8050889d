# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial grade provisioning endpoint.

This module provides:
- POST /asignar-grados-iniciales - Atomic creation of a professor's
  initial grades and the students of each grade

Every failure is reported as a 500 with a generic message; nothing is
persisted in that case. A failed rollback is additionally logged at
CRITICAL because the database state is then unknown.

Example:
    POST /asignar-grados-iniciales
    Body:
        {"id_profesor": 1}
    Response:
        {"success": true, "grados_creados": 3, "alumnos_creados": 9}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_provisioning_service
from src.domains.provisioning import (
    CommitError,
    ProvisioningError,
    ProvisioningService,
    RollbackError,
    TransactionStartError,
)
from src.models.common import ErrorResponse
from src.models.provisioning import ProvisionGradesRequest, ProvisionGradesResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/asignar-grados-iniciales",
    response_model=ProvisionGradesResponse,
    status_code=status.HTTP_200_OK,
    summary="Assign initial grades",
    description="""
    Creates the initial grades of a professor and the students of each grade.

    The operation is atomic: either every grade and student is created or
    nothing is. Repeated calls create additional, independent sets.
    """,
    responses={
        200: {"description": "Grades and students created", "model": ProvisionGradesResponse},
        400: {"description": "Invalid request data", "model": ErrorResponse},
        500: {"description": "Provisioning failed, nothing persisted", "model": ErrorResponse},
    },
)
async def assign_initial_grades(
    request: ProvisionGradesRequest,
    service: ProvisioningService = Depends(get_provisioning_service),
) -> ProvisionGradesResponse:
    """Provision the initial grades and students of a professor.

    Args:
        request: Body with the professor id.
        service: Provisioning service.

    Returns:
        ProvisionGradesResponse with the created counts.

    Raises:
        HTTPException: 500 if provisioning failed.
    """
    logger.info("Initial grades requested: professor_id=%s", request.id_profesor)

    try:
        result = await service.provision(request.id_profesor)

    except RollbackError as e:
        logger.critical(
            "Data integrity alert: provisioning rollback failed for professor_id=%s: %s",
            request.id_profesor,
            str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al asignar grados iniciales",
        )

    except TransactionStartError as e:
        logger.error("Provisioning transaction not started: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error iniciando transacción",
        )

    except CommitError as e:
        logger.error("Provisioning commit failed: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al confirmar transacción",
        )

    except ProvisioningError as e:
        logger.error("Provisioning failed: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al asignar grados iniciales",
        )

    return ProvisionGradesResponse.from_result(result)
