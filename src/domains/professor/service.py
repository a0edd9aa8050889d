# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Professor registration and login.

Example:
    >>> service = ProfessorService(store)
    >>> professor_id = await service.register("Ana", "ana@example.com", "secret")
    >>> profile = await service.authenticate("ana@example.com", "secret")
"""

import logging

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from src.domains.professor.password import PasswordHasher
from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import professors_table
from src.infrastructure.database.store import TransactionalStore
from src.models.professor import ProfessorProfile

logger = logging.getLogger(__name__)


class ProfessorError(Exception):
    """Base exception for professor operations."""

    pass


class EmailAlreadyRegisteredError(ProfessorError):
    """Raised when the email belongs to another professor."""

    pass


class InvalidCredentialsError(ProfessorError):
    """Raised when email and password do not match a professor."""

    pass


class ProfessorService:
    """Registers professors and checks their credentials.

    Attributes:
        _store: Data store.
        _hasher: Password hasher.
    """

    def __init__(self, store: TransactionalStore, hasher: PasswordHasher | None = None) -> None:
        self._store = store
        self._hasher = hasher or PasswordHasher()

    async def register(self, name: str, email: str, password: str) -> int:
        """Register a new professor.

        Args:
            name: Full name.
            email: Login email, unique among professors.
            password: Plain text password; only its hash is stored.

        Returns:
            The generated professor id.

        Raises:
            ValueError: If the password cannot be hashed.
            EmailAlreadyRegisteredError: If the email is taken.
            ProfessorError: If the store failed.
        """
        password_hash = self._hasher.hash(password)
        try:
            result = await self._store.write(
                insert(professors_table),
                {"nombre": name, "email": email, "password": password_hash},
            )
        except DatabaseError as e:
            if isinstance(e.original_error, IntegrityError):
                raise EmailAlreadyRegisteredError(f"Email already registered: {email}") from e
            logger.error("Error registering professor: %s", str(e))
            raise ProfessorError("Could not register professor") from e

        if result.generated_id is None:
            raise ProfessorError("Store returned no id for the registered professor")

        logger.info("Professor registered: id=%s", result.generated_id)
        return result.generated_id

    async def authenticate(self, email: str, password: str) -> ProfessorProfile:
        """Check a professor's credentials.

        Returns:
            Profile of the professor, without the password.

        Raises:
            InvalidCredentialsError: If no professor matches.
            ProfessorError: If the store failed.
        """
        statement = select(
            professors_table.c.id_profesor,
            professors_table.c.nombre,
            professors_table.c.email,
            professors_table.c.password,
        ).where(professors_table.c.email == email)

        try:
            rows = await self._store.query(statement)
        except DatabaseError as e:
            logger.error("Error during login: %s", str(e))
            raise ProfessorError("Could not look up professor") from e

        if not rows or not self._hasher.verify(password, rows[0]["password"]):
            raise InvalidCredentialsError("Invalid email or password")

        row = rows[0]
        return ProfessorProfile(
            id_profesor=row["id_profesor"],
            nombre=row["nombre"],
            email=row["email"],
        )
