# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for database integration tests.

Tests run against TEST_DATABASE_URL when it is set (for example a
PostgreSQL instance with the asyncpg driver) and against a throwaway
SQLite file otherwise.
"""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from src.infrastructure.database.connection import build_engine, create_schema
from src.infrastructure.database.models import (
    Base,
    grades_table,
    professors_table,
    students_table,
)
from src.infrastructure.database.store import SQLAlchemyStore


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """Get database URL for tests."""
    return os.environ.get(
        "TEST_DATABASE_URL",
        f"sqlite+aiosqlite:///{tmp_path / 'asistencia_test.db'}",
    )


@pytest_asyncio.fixture(scope="function")
async def db_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine with a fresh schema."""
    engine = build_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await create_schema(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def store(db_engine: AsyncEngine) -> SQLAlchemyStore:
    """Create a store on the test engine."""
    return SQLAlchemyStore(db_engine)


@pytest.fixture
def create_professor(db_engine: AsyncEngine) -> Callable[..., Awaitable[int]]:
    """Return a helper inserting a professor and returning its id."""

    async def _create(email: str = "profesor@example.com", name: str = "Profesor Uno") -> int:
        async with db_engine.begin() as conn:
            result = await conn.execute(
                insert(professors_table),
                {"nombre": name, "email": email, "password": "not-a-real-hash"},
            )
            return result.inserted_primary_key[0]

    return _create


@pytest.fixture
def count_rows(db_engine: AsyncEngine) -> Callable[[], Awaitable[tuple[int, int]]]:
    """Return a helper counting persisted grades and students."""

    async def _count() -> tuple[int, int]:
        async with db_engine.connect() as conn:
            grades = await conn.scalar(select(func.count()).select_from(grades_table))
            students = await conn.scalar(select(func.count()).select_from(students_table))
        return grades, students

    return _count
