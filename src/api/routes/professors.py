# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Professor registration and login endpoints.

- POST /registro - Register a professor
- POST /login - Check a professor's credentials
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_professor_service
from src.domains.professor import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    ProfessorError,
    ProfessorService,
)
from src.models.common import ErrorResponse
from src.models.professor import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/registro",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register professor",
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        500: {"description": "Registration failed", "model": ErrorResponse},
    },
)
async def register(
    request: RegisterRequest,
    service: ProfessorService = Depends(get_professor_service),
) -> RegisterResponse:
    """Register a new professor."""
    try:
        professor_id = await service.register(request.nombre, request.email, request.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except EmailAlreadyRegisteredError as e:
        logger.info("Registration rejected: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="El email ya está registrado",
        )
    except ProfessorError as e:
        logger.error("Error registering professor: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al registrar el profesor",
        )

    return RegisterResponse(message="Profesor registrado con éxito", id_profesor=professor_id)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Professor login",
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)
async def login(
    request: LoginRequest,
    service: ProfessorService = Depends(get_professor_service),
) -> LoginResponse:
    """Authenticate a professor by email and password."""
    try:
        profile = await service.authenticate(request.email, request.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales incorrectas",
        )
    except ProfessorError as e:
        logger.error("Error during login: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error en el servidor",
        )

    return LoginResponse(message="Login exitoso", profesor=profile)
