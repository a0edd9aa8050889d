# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transactional data store over SQLAlchemy async connections.

The store is the only component that talks to the database. It offers two
kinds of access:

1. Explicit transactions: begin() hands out a TransactionHandle that owns a
   dedicated connection. execute() runs parameterized statements inside it
   and commit()/rollback() end it and release the connection.
2. Single statements: query() and write() run one statement on a pooled
   connection, write() autocommitting.

Every failure is raised as DatabaseError; nothing is swallowed.

Example:
    store = SQLAlchemyStore(get_engine())

    handle = await store.begin()
    try:
        result = await store.execute(
            handle,
            insert(grades_table),
            {"nombre": "Primero", "id_profesor": 1},
        )
        await store.commit(handle)
    except DatabaseError:
        await store.rollback(handle)
        raise
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import uuid4

from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncTransaction
from sqlalchemy.sql import Executable

from src.infrastructure.database.connection import DatabaseError

logger = logging.getLogger(__name__)

# Drivers raise socket errors (OSError, including connect timeouts) without
# SQLAlchemy wrapping when the server cannot be reached.
STORE_ERRORS: tuple[type[BaseException], ...] = (SQLAlchemyError, OSError)


@dataclass(frozen=True)
class StatementResult:
    """Outcome of a single write statement.

    Attributes:
        generated_id: Primary key assigned by the database for an insert,
            None for other statements.
        affected_rows: Number of rows the statement touched.
    """

    generated_id: int | None
    affected_rows: int


@dataclass(eq=False)
class TransactionHandle:
    """Reference to one open transaction.

    A handle belongs to exactly one caller and must not be shared between
    concurrent operations.

    Attributes:
        id: Short random identifier used in logs.
        finished: True once the transaction was committed or rolled back.
    """

    id: str = field(default_factory=lambda: uuid4().hex[:12])
    finished: bool = False


@dataclass(eq=False)
class SQLAlchemyTransaction(TransactionHandle):
    """Transaction handle bound to a dedicated SQLAlchemy connection.

    A DBAPI connection runs one statement at a time, so statements issued
    concurrently against the same handle are serialized by ``lock``.
    """

    connection: AsyncConnection | None = None
    transaction: AsyncTransaction | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class TransactionalStore(Protocol):
    """Data store interface consumed by the domain services."""

    async def begin(self) -> TransactionHandle:
        """Open a transaction and return its handle."""
        ...

    async def execute(
        self,
        handle: TransactionHandle,
        statement: Executable,
        params: Mapping[str, Any] | None = None,
    ) -> StatementResult:
        """Run one parameterized statement inside a transaction."""
        ...

    async def commit(self, handle: TransactionHandle) -> None:
        """Commit the transaction."""
        ...

    async def rollback(self, handle: TransactionHandle) -> None:
        """Roll the transaction back."""
        ...

    async def query(
        self,
        statement: Executable,
        params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Run one read statement and return its rows as dictionaries."""
        ...

    async def write(
        self,
        statement: Executable,
        params: Mapping[str, Any] | None = None,
    ) -> StatementResult:
        """Run one write statement in its own committed transaction."""
        ...


def _to_statement_result(result: CursorResult[Any]) -> StatementResult:
    generated_id = None
    if result.is_insert:
        primary_key = result.inserted_primary_key
        if primary_key:
            generated_id = primary_key[0]
    return StatementResult(generated_id=generated_id, affected_rows=result.rowcount)


class SQLAlchemyStore:
    """TransactionalStore implementation on a SQLAlchemy AsyncEngine.

    Attributes:
        _engine: Engine providing pooled connections.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize the store.

        Args:
            engine: Async engine for the attendance database.
        """
        self._engine = engine

    async def begin(self) -> SQLAlchemyTransaction:
        """Acquire a connection and begin a transaction on it.

        Returns:
            Handle owning the connection until commit or rollback.

        Raises:
            DatabaseError: If no connection could be acquired or BEGIN failed.
        """
        try:
            connection = await self._engine.connect()
        except STORE_ERRORS as e:
            logger.error("Could not acquire a database connection: %s", str(e))
            raise DatabaseError("Failed to begin transaction", e) from e

        try:
            transaction = await connection.begin()
        except BaseException as e:
            await connection.close()
            if isinstance(e, STORE_ERRORS):
                raise DatabaseError("Failed to begin transaction", e) from e
            raise

        handle = SQLAlchemyTransaction(connection=connection, transaction=transaction)
        logger.debug("Transaction %s started", handle.id)
        return handle

    async def execute(
        self,
        handle: TransactionHandle,
        statement: Executable,
        params: Mapping[str, Any] | None = None,
    ) -> StatementResult:
        """Run a statement inside the handle's transaction.

        Args:
            handle: Open transaction handle from begin().
            statement: SQLAlchemy statement (typically an insert).
            params: Bound parameters keyed by column name.

        Returns:
            Generated id and affected row count.

        Raises:
            DatabaseError: If the handle is closed or the statement failed.
        """
        tx = self._open(handle)
        async with tx.lock:
            try:
                result = await tx.connection.execute(statement, dict(params or {}))
            except STORE_ERRORS as e:
                raise DatabaseError("Statement failed", e) from e
        return _to_statement_result(result)

    async def commit(self, handle: TransactionHandle) -> None:
        """Commit the transaction and release its connection.

        A failed commit leaves the connection attached so that the caller
        can still roll back.

        Raises:
            DatabaseError: If the commit failed.
        """
        tx = self._open(handle)
        try:
            await tx.transaction.commit()
        except STORE_ERRORS as e:
            raise DatabaseError("Failed to commit transaction", e) from e

        tx.finished = True
        await self._release(tx)
        logger.debug("Transaction %s committed", tx.id)

    async def rollback(self, handle: TransactionHandle) -> None:
        """Roll the transaction back and release its connection.

        Raises:
            DatabaseError: If the rollback failed. The store state is then
                unknown and needs operator attention.
        """
        tx = self._open(handle)
        try:
            await tx.transaction.rollback()
        except STORE_ERRORS as e:
            raise DatabaseError("Failed to roll back transaction", e) from e
        finally:
            tx.finished = True
            await self._release(tx)
        logger.debug("Transaction %s rolled back", tx.id)

    async def query(
        self,
        statement: Executable,
        params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Run a read statement on a pooled connection.

        Returns:
            One dictionary per row, keyed by column name.

        Raises:
            DatabaseError: If the query failed.
        """
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(statement, dict(params or {}))
                return [dict(row) for row in result.mappings()]
        except STORE_ERRORS as e:
            raise DatabaseError("Query failed", e) from e

    async def write(
        self,
        statement: Executable,
        params: Mapping[str, Any] | None = None,
    ) -> StatementResult:
        """Run a write statement in its own transaction and commit it.

        Raises:
            DatabaseError: If the statement or the commit failed.
        """
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement, dict(params or {}))
                return _to_statement_result(result)
        except STORE_ERRORS as e:
            raise DatabaseError("Write failed", e) from e

    def _open(self, handle: TransactionHandle) -> SQLAlchemyTransaction:
        if not isinstance(handle, SQLAlchemyTransaction) or handle.connection is None:
            raise DatabaseError("Handle does not belong to this store")
        if handle.finished:
            raise DatabaseError(f"Transaction {handle.id} is already finished")
        return handle

    async def _release(self, tx: SQLAlchemyTransaction) -> None:
        if tx.connection is None:
            return
        try:
            await tx.connection.close()
        except STORE_ERRORS as e:
            logger.warning("Failed to release connection of transaction %s: %s", tx.id, str(e))
        finally:
            tx.connection = None
            tx.transaction = None
