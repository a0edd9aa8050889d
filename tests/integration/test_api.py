# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the attendance API endpoints."""

import re
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from src.api.app import create_app
from src.api.dependencies import (
    get_professor_service,
    get_provisioning_service,
    get_roster_service,
    get_store_if_ready,
)
from src.domains.professor import ProfessorService
from src.domains.professor.password import PasswordHasher
from src.domains.provisioning import (
    CommitError,
    ProvisioningService,
    RollbackError,
    TransactionStartError,
)
from src.domains.roster import RosterService
from src.infrastructure.database.store import SQLAlchemyStore


@pytest.fixture
def app(store: SQLAlchemyStore) -> FastAPI:
    """Create test FastAPI app bound to the test store."""
    app = create_app()
    app.dependency_overrides[get_store_if_ready] = lambda: store
    app.dependency_overrides[get_professor_service] = lambda: ProfessorService(
        store, PasswordHasher(rounds=4)
    )
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create an async client calling the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def failing_provisioning(error: Exception) -> MagicMock:
    service = MagicMock(spec=ProvisioningService)
    service.provision = AsyncMock(side_effect=error)
    return service


@pytest.mark.integration
class TestAssignInitialGrades:
    """Tests for POST /asignar-grados-iniciales."""

    @pytest.mark.asyncio
    async def test_success(self, client: httpx.AsyncClient, create_professor, count_rows) -> None:
        professor_id = await create_professor()

        response = await client.post("/asignar-grados-iniciales", json={"id_profesor": professor_id})

        assert response.status_code == 200
        assert response.json() == {"success": True, "grados_creados": 3, "alumnos_creados": 9}
        assert await count_rows() == (3, 9)

    @pytest.mark.asyncio
    async def test_unknown_professor_returns_500(self, client: httpx.AsyncClient, count_rows) -> None:
        response = await client.post("/asignar-grados-iniciales", json={"id_profesor": 9999})

        assert response.status_code == 500
        assert response.json() == {"error": "Error al asignar grados iniciales"}
        assert await count_rows() == (0, 0)

    @pytest.mark.asyncio
    async def test_missing_body_returns_400(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/asignar-grados-iniciales", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Todos los campos son obligatorios"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (TransactionStartError("no connection", 1), "Error iniciando transacción"),
            (CommitError("commit failed", 1), "Error al confirmar transacción"),
            (RollbackError("rollback failed", 1), "Error al asignar grados iniciales"),
        ],
    )
    async def test_failure_messages(
        self, app: FastAPI, client: httpx.AsyncClient, error: Exception, message: str
    ) -> None:
        app.dependency_overrides[get_provisioning_service] = lambda: failing_provisioning(error)

        response = await client.post("/asignar-grados-iniciales", json={"id_profesor": 1})

        assert response.status_code == 500
        assert response.json() == {"error": message}


@pytest.mark.integration
class TestProfessors:
    """Tests for POST /registro and POST /login."""

    @pytest.mark.asyncio
    async def test_register_and_login(self, client: httpx.AsyncClient, sample_professor_data) -> None:
        response = await client.post("/registro", json=sample_professor_data)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Profesor registrado con éxito"
        professor_id = body["id_profesor"]

        response = await client.post(
            "/login",
            json={"email": sample_professor_data["email"], "password": sample_professor_data["password"]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Login exitoso",
            "profesor": {
                "id_profesor": professor_id,
                "nombre": sample_professor_data["nombre"],
                "email": sample_professor_data["email"],
            },
        }

    @pytest.mark.asyncio
    async def test_duplicate_email_returns_409(self, client: httpx.AsyncClient, sample_professor_data) -> None:
        await client.post("/registro", json=sample_professor_data)

        response = await client.post("/registro", json=sample_professor_data)

        assert response.status_code == 409
        assert response.json() == {"error": "El email ya está registrado"}

    @pytest.mark.asyncio
    async def test_register_missing_field_returns_400(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/registro", json={"email": "a@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Todos los campos son obligatorios"}

    @pytest.mark.asyncio
    async def test_login_wrong_password_returns_401(self, client: httpx.AsyncClient, sample_professor_data) -> None:
        await client.post("/registro", json=sample_professor_data)

        response = await client.post(
            "/login", json={"email": sample_professor_data["email"], "password": "incorrecta"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Credenciales incorrectas"}

    @pytest.mark.asyncio
    async def test_login_unknown_email_returns_401(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/login", json={"email": "nadie@example.com", "password": "x"})

        assert response.status_code == 401


@pytest.mark.integration
class TestRosterAndAttendance:
    """Tests for listings and attendance once a professor is provisioned."""

    @pytest.mark.asyncio
    async def test_list_grades_and_students(self, client: httpx.AsyncClient, create_professor) -> None:
        professor_id = await create_professor()
        await client.post("/asignar-grados-iniciales", json={"id_profesor": professor_id})

        response = await client.get(f"/grados/{professor_id}")

        assert response.status_code == 200
        grades = response.json()
        assert len(grades) == 3
        assert all(grade["id_profesor"] == professor_id for grade in grades)

        response = await client.get(f"/estudiantes/{grades[0]['id_grado']}")

        assert response.status_code == 200
        students = response.json()
        assert len(students) == 3
        assert all(student["id_grado"] == grades[0]["id_grado"] for student in students)

    @pytest.mark.asyncio
    async def test_list_grades_of_professor_without_grades(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/grados/12345")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_invalid_path_parameter_returns_400(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/grados/abc")

        assert response.status_code == 400
        assert response.json() == {"error": "Parámetros inválidos"}

    @pytest.mark.asyncio
    async def test_record_attendance(self, client: httpx.AsyncClient, create_professor) -> None:
        professor_id = await create_professor()
        await client.post("/asignar-grados-iniciales", json={"id_profesor": professor_id})
        grade = (await client.get(f"/grados/{professor_id}")).json()[0]
        student = (await client.get(f"/estudiantes/{grade['id_grado']}")).json()[0]

        response = await client.post(
            "/asistencia",
            json={
                "id_estudiante": student["id_estudiante"],
                "id_profesor": professor_id,
                "id_grado": grade["id_grado"],
                "presente": True,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Asistencia registrada correctamente"
        assert body["presente"] is True
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", body["fecha"])

    @pytest.mark.asyncio
    async def test_attendance_for_unknown_student_returns_500(
        self, client: httpx.AsyncClient, create_professor
    ) -> None:
        professor_id = await create_professor()

        response = await client.post(
            "/asistencia",
            json={"id_estudiante": 777, "id_profesor": professor_id, "id_grado": 888, "presente": False},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Error en el servidor"}

    @pytest.mark.asyncio
    async def test_attendance_missing_field_returns_400(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/asistencia", json={"id_estudiante": 1, "presente": True})

        assert response.status_code == 400
        assert response.json() == {"error": "Todos los campos son obligatorios"}


@pytest.mark.integration
class TestWithoutDatabase:
    """Tests for behaviour when the store was never initialized."""

    @pytest.mark.asyncio
    async def test_data_endpoints_return_503(self) -> None:
        transport = httpx.ASGITransport(app=create_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/grados/1")

        assert response.status_code == 503
        assert response.json() == {"error": "Base de datos no disponible"}

    @pytest.mark.asyncio
    async def test_provisioning_reports_transaction_start_failure(self) -> None:
        transport = httpx.ASGITransport(app=create_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post("/asignar-grados-iniciales", json={"id_profesor": 1})

        assert response.status_code == 500
        assert response.json() == {"error": "Error iniciando transacción"}

    @pytest.mark.asyncio
    async def test_readiness_reports_database(self) -> None:
        transport = httpx.ASGITransport(app=create_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json()["ready"] is False
        assert response.json()["checks"]["database"]["status"] == "unhealthy"


@pytest.mark.integration
class TestRequestContext:
    """Tests for the request id header."""

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/grados/1", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/grados/1")

        assert len(response.headers["X-Request-ID"]) == 16


@pytest.mark.integration
class TestUnexpectedErrors:
    """Tests for exceptions no route handles."""

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_json_500(self, app: FastAPI) -> None:
        roster = MagicMock(spec=RosterService)
        roster.list_grades = AsyncMock(side_effect=RuntimeError("driver exploded"))
        app.dependency_overrides[get_roster_service] = lambda: roster

        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/grados/1")

        assert response.status_code == 500
        assert response.json() == {"error": "Error en el servidor"}
