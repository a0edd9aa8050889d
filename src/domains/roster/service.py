# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Read access to grades and students."""

import logging

from sqlalchemy import select

from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import grades_table, students_table
from src.infrastructure.database.store import TransactionalStore
from src.models.roster import GradeRecord, StudentRecord

logger = logging.getLogger(__name__)


class RosterError(Exception):
    """Raised when grades or students could not be read."""

    pass


class RosterService:
    """Lists grades by professor and students by grade.

    Attributes:
        _store: Data store.
    """

    def __init__(self, store: TransactionalStore) -> None:
        self._store = store

    async def list_grades(self, professor_id: int) -> list[GradeRecord]:
        """List the grades owned by a professor, oldest first.

        Raises:
            RosterError: If the store failed.
        """
        statement = (
            select(grades_table)
            .where(grades_table.c.id_profesor == professor_id)
            .order_by(grades_table.c.id_grado)
        )
        try:
            rows = await self._store.query(statement)
        except DatabaseError as e:
            logger.error("Error fetching grades: professor_id=%s, error=%s", professor_id, str(e))
            raise RosterError("Could not fetch grades") from e
        return [GradeRecord(**row) for row in rows]

    async def list_students(self, grade_id: int) -> list[StudentRecord]:
        """List the students of a grade, oldest first.

        Raises:
            RosterError: If the store failed.
        """
        statement = (
            select(students_table)
            .where(students_table.c.id_grado == grade_id)
            .order_by(students_table.c.id_estudiante)
        )
        try:
            rows = await self._store.query(statement)
        except DatabaseError as e:
            logger.error("Error fetching students: grade_id=%s, error=%s", grade_id, str(e))
            raise RosterError("Could not fetch students") from e
        return [StudentRecord(**row) for row in rows]
