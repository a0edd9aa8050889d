# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for the attendance server.

This package provides:
- connection: Engine lifecycle, schema creation and connectivity checks
- models: SQLAlchemy models for professors, grades, students, attendance
- store: Transactional data store used by the domain services

Example:
    from src.infrastructure.database import (
        SQLAlchemyStore,
        get_engine,
        init_database,
    )

    await init_database(settings)
    store = SQLAlchemyStore(get_engine())
"""

from src.infrastructure.database.connection import (
    DatabaseError,
    build_engine,
    check_database_connection,
    close_database,
    create_schema,
    get_engine,
    init_database,
)
from src.infrastructure.database.store import (
    SQLAlchemyStore,
    SQLAlchemyTransaction,
    StatementResult,
    TransactionalStore,
    TransactionHandle,
)

__all__ = [
    # Connection
    "DatabaseError",
    "build_engine",
    "check_database_connection",
    "close_database",
    "create_schema",
    "get_engine",
    "init_database",
    # Store
    "SQLAlchemyStore",
    "SQLAlchemyTransaction",
    "StatementResult",
    "TransactionalStore",
    "TransactionHandle",
]
