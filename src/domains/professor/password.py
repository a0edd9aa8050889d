# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Hashing of professor passwords for /registro and /login.

The Profesores.password column holds a bcrypt hash. Registration hashes
the submitted password; login checks the submitted password against the
stored hash and never compares plain text.

Example:
    >>> hasher = PasswordHasher(rounds=4)
    >>> stored = hasher.hash("clave-segura")
    >>> hasher.verify("clave-segura", stored)
    True
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Turns professor passwords into bcrypt hashes and checks them.

    Attributes:
        _rounds: bcrypt cost factor. Tests pass a low value.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password submitted at registration.

        Passwords longer than bcrypt's input limit are rejected instead of
        silently truncated, so two different long passwords cannot share a
        hash.

        Raises:
            ValueError: If the password is empty or over 72 bytes in UTF-8.
                The registration route answers 400 with this message.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")

        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, stored_hash: str) -> bool:
        """Check a login password against the hash stored for the professor.

        Returns:
            False for a mismatch, an empty input, or a stored value that is
            not a bcrypt hash (for example a row written before hashing).
        """
        if not password or not stored_hash:
            return False

        try:
            return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning("Stored professor password is not a bcrypt hash: %s", str(e))
            return False
