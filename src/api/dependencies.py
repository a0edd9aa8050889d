# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get the transactional data store
- Get domain service instances bound to that store

Example:
    @router.get("/grados/{id_profesor}")
    async def list_grades(
        id_profesor: int,
        service: RosterService = Depends(get_roster_service),
    ):
        ...
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status

from src.core.config import get_settings
from src.domains.attendance import AttendanceService
from src.domains.professor import ProfessorService
from src.domains.provisioning import ProvisioningService
from src.domains.roster import RosterService
from src.infrastructure.database import (
    SQLAlchemyStore,
    TransactionalStore,
    close_database,
    create_schema,
    init_database,
)

logger = logging.getLogger(__name__)

# Store singleton, bound to the engine created at startup
_store: TransactionalStore | None = None


async def init_db() -> None:
    """Initialize the database engine, the schema and the store."""
    global _store
    settings = get_settings()

    engine = await init_database(settings)
    if settings.db.auto_create_schema:
        await create_schema(engine)

    _store = SQLAlchemyStore(engine)


async def close_db() -> None:
    """Drop the store and close the database engine."""
    global _store

    _store = None
    await close_database()


def get_store_if_ready() -> TransactionalStore | None:
    """Get the store created at startup, or None if the database never came up."""
    return _store


def get_store(
    store: Annotated[TransactionalStore | None, Depends(get_store_if_ready)],
) -> TransactionalStore:
    """Get the data store.

    Returns:
        The store created at startup.

    Raises:
        HTTPException: 503 if the database is not initialized.
    """
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Base de datos no disponible",
        )
    return store


StoreDep = Annotated[TransactionalStore, Depends(get_store)]


# =========================================================================
# Service Dependencies
# =========================================================================


def get_provisioning_service(
    store: Annotated[TransactionalStore | None, Depends(get_store_if_ready)],
) -> ProvisioningService:
    """Get a provisioning service configured from settings.

    Without a store no transaction can start, which is reported like any
    other transaction start failure.

    Raises:
        HTTPException: 500 if the database is not initialized.
    """
    if store is None:
        logger.error("Provisioning requested but the database is not initialized")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error iniciando transacción",
        )
    return ProvisioningService(store, get_settings().provisioning.to_config())


def get_professor_service(store: StoreDep) -> ProfessorService:
    """Get a professor service."""
    return ProfessorService(store)


def get_roster_service(store: StoreDep) -> RosterService:
    """Get a roster service."""
    return RosterService(store)


def get_attendance_service(store: StoreDep) -> AttendanceService:
    """Get an attendance service."""
    return AttendanceService(store)
