# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the attendance database.

Table and column names follow the original attendance schema so existing
clients and reports keep working:

- Profesores: registered professors
- Grados: grades owned by a professor
- Estudiantes: students belonging to a grade
- Asistencia: attendance records
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all attendance models."""

    pass


class Professor(Base):
    """A registered professor."""

    __tablename__ = "Profesores"

    id: Mapped[int] = mapped_column("id_profesor", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("nombre", String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)


class Grade(Base):
    """A grade (class group) owned by a professor."""

    __tablename__ = "Grados"

    id: Mapped[int] = mapped_column("id_grado", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("nombre", String(100), nullable=False)
    professor_id: Mapped[int] = mapped_column(
        "id_profesor",
        Integer,
        ForeignKey("Profesores.id_profesor"),
        nullable=False,
        index=True,
    )


class Student(Base):
    """A student enrolled in exactly one grade."""

    __tablename__ = "Estudiantes"

    id: Mapped[int] = mapped_column("id_estudiante", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("nombre", String(100), nullable=False)
    grade_id: Mapped[int] = mapped_column(
        "id_grado",
        Integer,
        ForeignKey("Grados.id_grado"),
        nullable=False,
        index=True,
    )


class Attendance(Base):
    """A single attendance mark for a student on a given date."""

    __tablename__ = "Asistencia"

    id: Mapped[int] = mapped_column("id_asistencia", Integer, primary_key=True, autoincrement=True)
    date: Mapped[datetime] = mapped_column("fecha", DateTime, nullable=False)
    professor_id: Mapped[int] = mapped_column(
        "id_profesor", Integer, ForeignKey("Profesores.id_profesor"), nullable=False
    )
    student_id: Mapped[int] = mapped_column(
        "id_estudiante", Integer, ForeignKey("Estudiantes.id_estudiante"), nullable=False
    )
    grade_id: Mapped[int] = mapped_column(
        "id_grado", Integer, ForeignKey("Grados.id_grado"), nullable=False
    )
    present: Mapped[bool] = mapped_column("presente", Boolean, nullable=False)


# Core table handles for parameterized statements issued through the store.
# Statement parameters use the database column names.
professors_table = Professor.__table__
grades_table = Grade.__table__
students_table = Student.__table__
attendance_table = Attendance.__table__
