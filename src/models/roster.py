# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Models for grade and student listings."""

from pydantic import BaseModel


class GradeRecord(BaseModel):
    """A grade row as returned by GET /grados/{id_profesor}."""

    id_grado: int
    nombre: str
    id_profesor: int


class StudentRecord(BaseModel):
    """A student row as returned by GET /estudiantes/{id_grado}."""

    id_estudiante: int
    nombre: str
    id_grado: int
