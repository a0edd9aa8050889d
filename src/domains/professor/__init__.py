# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Professor domain: registration, login and password hashing."""

from src.domains.professor.password import PasswordHasher
from src.domains.professor.service import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    ProfessorError,
    ProfessorService,
)

__all__ = [
    "PasswordHasher",
    "ProfessorService",
    "ProfessorError",
    "EmailAlreadyRegisteredError",
    "InvalidCredentialsError",
]
