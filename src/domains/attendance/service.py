# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance record insertion.

The record timestamp is taken on the server in UTC, truncated to seconds.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import insert

from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import attendance_table
from src.infrastructure.database.store import TransactionalStore

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class AttendanceError(Exception):
    """Raised when an attendance record could not be stored."""

    pass


class AttendanceService:
    """Stores attendance marks.

    Attributes:
        _store: Data store.
    """

    def __init__(self, store: TransactionalStore) -> None:
        self._store = store

    async def record(
        self,
        student_id: int,
        professor_id: int,
        grade_id: int,
        present: bool,
        at: datetime | None = None,
    ) -> datetime:
        """Store one attendance mark.

        Args:
            student_id: Student being marked.
            professor_id: Professor taking attendance.
            grade_id: Grade of the student.
            present: Whether the student attended.
            at: Timestamp of the mark. Naive values are taken as UTC.
                Defaults to now.

        Returns:
            The stored timestamp (naive UTC, second precision).

        Raises:
            AttendanceError: If the store rejected the record.
        """
        stamp = at or datetime.now(timezone.utc)
        if stamp.tzinfo is None:
            stamp = stamp.replace(tzinfo=timezone.utc)
        stamp = stamp.astimezone(timezone.utc)
        stamp = stamp.replace(tzinfo=None, microsecond=0)

        try:
            await self._store.write(
                insert(attendance_table),
                {
                    "fecha": stamp,
                    "id_profesor": professor_id,
                    "id_estudiante": student_id,
                    "id_grado": grade_id,
                    "presente": present,
                },
            )
        except DatabaseError as e:
            logger.error(
                "Error saving attendance: student_id=%s, grade_id=%s, error=%s",
                student_id,
                grade_id,
                str(e),
            )
            raise AttendanceError("Could not save attendance") from e

        logger.info(
            "Attendance recorded: student_id=%s, grade_id=%s, present=%s",
            student_id,
            grade_id,
            present,
        )
        return stamp
