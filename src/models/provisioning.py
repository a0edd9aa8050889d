# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Models for initial grade and student provisioning.

ProvisioningConfig and ProvisioningResult are the parameters and outcome
of ProvisioningService.provision(). The request/response models describe
the HTTP payloads of POST /asignar-grados-iniciales, whose field names are
kept for client compatibility.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProvisioningConfig(BaseModel):
    """Shape of the hierarchy created by one provisioning call."""

    model_config = ConfigDict(frozen=True)

    grade_names: list[str] = Field(
        default_factory=lambda: ["Primero", "Segundo", "Tercero"],
        description="Ordered grade names; students are numbered by position",
    )
    students_per_grade: int = Field(default=3, ge=1, description="Students created per grade")
    student_name_template: str = Field(
        default="Alumno {student} de Grado {grade}",
        description="Format string receiving 'student' and 'grade' (both 1-based)",
    )
    timeout_seconds: float = Field(default=30.0, gt=0, description="Deadline for the whole transaction")
    max_concurrent_statements: int = Field(default=10, ge=1, description="In-flight insert limit")

    @field_validator("grade_names")
    @classmethod
    def validate_grade_names(cls, value: list[str]) -> list[str]:
        """Reject blank grade names."""
        if any(not name or not name.strip() for name in value):
            raise ValueError("Grade names must not be blank")
        return value

    @field_validator("student_name_template")
    @classmethod
    def validate_template(cls, value: str) -> str:
        """Reject templates that reference unknown fields."""
        try:
            value.format(student=1, grade=1)
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid student name template: {e}") from e
        return value

    @property
    def total_students(self) -> int:
        """Number of students a successful call creates."""
        return len(self.grade_names) * self.students_per_grade

    def student_name(self, student: int, grade: int) -> str:
        """Build the name of a student from its 1-based positions."""
        return self.student_name_template.format(student=student, grade=grade)


class ProvisioningResult(BaseModel):
    """Counters returned by a successful provisioning call."""

    model_config = ConfigDict(frozen=True)

    grades_created: int
    students_created: int


class ProvisionGradesRequest(BaseModel):
    """Body of POST /asignar-grados-iniciales."""

    id_profesor: int = Field(description="Professor receiving the initial grades")


class ProvisionGradesResponse(BaseModel):
    """Successful response of POST /asignar-grados-iniciales."""

    success: bool = Field(default=True, description="Always true on success")
    grados_creados: int = Field(description="Number of grades created")
    alumnos_creados: int = Field(description="Number of students created")

    @classmethod
    def from_result(cls, result: ProvisioningResult) -> "ProvisionGradesResponse":
        """Build the HTTP response from a provisioning result."""
        return cls(
            success=True,
            grados_creados=result.grades_created,
            alumnos_creados=result.students_created,
        )
