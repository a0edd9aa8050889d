# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Provisioning service for a professor's initial grades and students.

Given a professor, the service creates a fixed set of grades and, for each
grade, a fixed set of students, inside one transaction. Either the whole
hierarchy is persisted or none of it is.

The provisioning flow:
1. Begin a transaction on the data store
2. Grade phase: insert every grade concurrently, join all of them
3. Student phase: insert every student of every grade concurrently,
   referencing the ids generated in phase 2, join all of them
4. Commit

Any failure after step 1 rolls the whole transaction back through a
single abort path. A failed rollback is reported as RollbackError, which
means the database state is unknown.

Example:
    >>> service = ProvisioningService(store)
    >>> result = await service.provision(professor_id=1)
    >>> result.grades_created, result.students_created
    (3, 9)
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import insert
from sqlalchemy.sql import Executable

from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import grades_table, students_table
from src.infrastructure.database.store import (
    StatementResult,
    TransactionalStore,
    TransactionHandle,
)
from src.models.provisioning import ProvisioningConfig, ProvisioningResult

logger = logging.getLogger(__name__)


class ProvisioningError(Exception):
    """Base exception for provisioning errors.

    Attributes:
        message: Human-readable error description.
        professor_id: Professor the failed call was provisioning.
        original_error: The underlying store error, if any.
        fatal: True when the store state may be inconsistent.
    """

    fatal = False

    def __init__(
        self,
        message: str,
        professor_id: int | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.professor_id = professor_id
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class TransactionStartError(ProvisioningError):
    """Raised when the transaction could not be started.

    Nothing was written; the whole call may be retried.
    """

    pass


class ProvisioningTimeoutError(TransactionStartError):
    """Raised when provisioning did not finish before its deadline."""

    pass


class GradeProvisioningError(ProvisioningError):
    """Raised when at least one grade insert failed."""

    pass


class StudentProvisioningError(ProvisioningError):
    """Raised when at least one student insert failed."""

    pass


class CommitError(ProvisioningError):
    """Raised when the final commit failed and the transaction was rolled back."""

    pass


class RollbackError(ProvisioningError):
    """Raised when rolling back a failed provisioning call also failed.

    The database state is indeterminate and needs operator attention.

    Attributes:
        cause: The error that triggered the rollback.
    """

    fatal = True

    def __init__(
        self,
        message: str,
        professor_id: int | None = None,
        original_error: BaseException | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, professor_id, original_error)
        self.cause = cause


class ProvisioningService:
    """Creates a professor's initial grades and students atomically.

    The service owns no connection state. Each provision() call acquires
    its own transaction handle from the store and always ends it with
    either a commit or a rollback.

    Attributes:
        _store: Transactional data store.
        _config: Default provisioning shape used when a call passes none.
    """

    def __init__(
        self,
        store: TransactionalStore,
        config: ProvisioningConfig | None = None,
    ) -> None:
        """Initialize the provisioning service.

        Args:
            store: Transactional data store.
            config: Default provisioning shape.
        """
        self._store = store
        self._config = config or ProvisioningConfig()

    @property
    def config(self) -> ProvisioningConfig:
        """Default provisioning shape."""
        return self._config

    async def provision(
        self,
        professor_id: int,
        config: ProvisioningConfig | None = None,
    ) -> ProvisioningResult:
        """Create the initial grades and students of a professor.

        This method is atomic - if any step fails, all changes are rolled back.
        Repeated calls for the same professor create independent sets.

        Args:
            professor_id: Existing professor identifier. Not verified here; a
                dangling id fails the grade phase on a store with foreign keys.
            config: Shape of the hierarchy. Defaults to the service config.

        Returns:
            ProvisioningResult with the number of grades and students created.

        Raises:
            TransactionStartError: If the transaction could not be started.
            ProvisioningTimeoutError: If the deadline elapsed.
            GradeProvisioningError: If a grade insert failed.
            StudentProvisioningError: If a student insert failed.
            CommitError: If the commit failed.
            RollbackError: If an abort could not be rolled back.
        """
        config = config or self._config
        logger.info(
            "Provisioning initial grades: professor_id=%s, grades=%d, students_per_grade=%d",
            professor_id,
            len(config.grade_names),
            config.students_per_grade,
        )

        try:
            async with asyncio.timeout(config.timeout_seconds):
                result = await self._provision(professor_id, config)
        except TimeoutError as e:
            logger.error(
                "Provisioning timed out after %.1fs: professor_id=%s",
                config.timeout_seconds,
                professor_id,
            )
            raise ProvisioningTimeoutError(
                f"Provisioning did not finish within {config.timeout_seconds}s",
                professor_id,
                e,
            ) from e

        logger.info(
            "Provisioning completed: professor_id=%s, grades_created=%d, students_created=%d",
            professor_id,
            result.grades_created,
            result.students_created,
        )
        return result

    async def _provision(
        self,
        professor_id: int,
        config: ProvisioningConfig,
    ) -> ProvisioningResult:
        handle = await self._begin(professor_id)
        limiter = asyncio.Semaphore(config.max_concurrent_statements)

        try:
            grade_ids = await self._create_grades(handle, professor_id, config, limiter)
            students_created = await self._create_students(
                handle, professor_id, grade_ids, config, limiter
            )
            await self._commit(handle, professor_id)
        except BaseException as exc:
            await self._abort(handle, professor_id, exc)
            raise

        return ProvisioningResult(
            grades_created=len(grade_ids),
            students_created=students_created,
        )

    # =========================================================================
    # Transaction Boundaries
    # =========================================================================

    async def _begin(self, professor_id: int) -> TransactionHandle:
        try:
            handle = await self._store.begin()
        except DatabaseError as e:
            logger.error("Could not start transaction: professor_id=%s, error=%s", professor_id, str(e))
            raise TransactionStartError(
                "Could not start provisioning transaction", professor_id, e
            ) from e
        logger.debug("Transaction %s opened for professor_id=%s", handle.id, professor_id)
        return handle

    async def _commit(self, handle: TransactionHandle, professor_id: int) -> None:
        try:
            await self._store.commit(handle)
        except DatabaseError as e:
            logger.error("Commit failed: transaction=%s, error=%s", handle.id, str(e))
            raise CommitError("Could not commit provisioning transaction", professor_id, e) from e

    async def _abort(
        self,
        handle: TransactionHandle,
        professor_id: int,
        cause: BaseException,
    ) -> None:
        """Roll back after any failure. The only rollback call site."""
        try:
            await self._store.rollback(handle)
        except DatabaseError as e:
            logger.critical(
                "Rollback failed, database state is indeterminate: "
                "transaction=%s, professor_id=%s, cause=%s, error=%s",
                handle.id,
                professor_id,
                type(cause).__name__,
                str(e),
            )
            raise RollbackError(
                "Could not roll back provisioning transaction",
                professor_id,
                e,
                cause=cause,
            ) from e

        logger.warning(
            "Transaction %s rolled back: professor_id=%s, cause=%s",
            handle.id,
            professor_id,
            type(cause).__name__,
        )

    # =========================================================================
    # Phases
    # =========================================================================

    async def _create_grades(
        self,
        handle: TransactionHandle,
        professor_id: int,
        config: ProvisioningConfig,
        limiter: asyncio.Semaphore,
    ) -> list[int]:
        """Insert all grades and return their ids in input order."""
        rows = [
            {"nombre": name, "id_profesor": professor_id}
            for name in config.grade_names
        ]
        outcomes = await self._fan_out(handle, insert(grades_table), rows, limiter)

        failure = self._first_failure(outcomes)
        if failure is not None:
            logger.error(
                "Grade insert failed: professor_id=%s, failed=%d/%d, error=%s",
                professor_id,
                self._count_failures(outcomes),
                len(outcomes),
                str(failure),
            )
            raise GradeProvisioningError("Could not create grades", professor_id, failure) from failure

        grade_ids = [outcome.generated_id for outcome in outcomes]  # type: ignore[union-attr]
        if any(grade_id is None for grade_id in grade_ids):
            raise GradeProvisioningError("Store returned no id for a created grade", professor_id)

        logger.info("Grades created: professor_id=%s, grade_ids=%s", professor_id, grade_ids)
        return grade_ids  # type: ignore[return-value]

    async def _create_students(
        self,
        handle: TransactionHandle,
        professor_id: int,
        grade_ids: Sequence[int],
        config: ProvisioningConfig,
        limiter: asyncio.Semaphore,
    ) -> int:
        """Insert every student of every grade and return how many were created."""
        rows = [
            {"nombre": config.student_name(student, grade), "id_grado": grade_id}
            for grade, grade_id in enumerate(grade_ids, start=1)
            for student in range(1, config.students_per_grade + 1)
        ]
        outcomes = await self._fan_out(handle, insert(students_table), rows, limiter)

        failure = self._first_failure(outcomes)
        if failure is not None:
            logger.error(
                "Student insert failed: professor_id=%s, failed=%d/%d, error=%s",
                professor_id,
                self._count_failures(outcomes),
                len(outcomes),
                str(failure),
            )
            raise StudentProvisioningError(
                "Could not create students", professor_id, failure
            ) from failure

        logger.info("Students created: professor_id=%s, count=%d", professor_id, len(outcomes))
        return len(outcomes)

    # =========================================================================
    # Fan-out / fan-in
    # =========================================================================

    async def _fan_out(
        self,
        handle: TransactionHandle,
        statement: Executable,
        rows: Sequence[Mapping[str, Any]],
        limiter: asyncio.Semaphore,
    ) -> list[StatementResult | BaseException]:
        """Run one statement per row concurrently and wait for every one.

        Outcomes are returned in the order of ``rows`` regardless of the
        order in which the statements complete. Failures are returned in
        place instead of raised so no statement is still running when the
        caller decides to roll back.
        """

        async def run(params: Mapping[str, Any]) -> StatementResult:
            async with limiter:
                return await self._store.execute(handle, statement, params)

        return await asyncio.gather(*(run(params) for params in rows), return_exceptions=True)

    @staticmethod
    def _first_failure(outcomes: Sequence[StatementResult | BaseException]) -> BaseException | None:
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                return outcome
        return None

    @staticmethod
    def _count_failures(outcomes: Sequence[StatementResult | BaseException]) -> int:
        return sum(1 for outcome in outcomes if isinstance(outcome, BaseException))
