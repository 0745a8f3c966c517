"""Shared test fixtures for Gremio backend tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from config.account_config import JOB_IMAGES_BUCKET
from fakes import FakeAuth, FakeStorage, InMemoryDataStore


AVATAR_URL = "https://abc.supabase.co/storage/v1/object/public/avatars/u1/avatar.png"


@pytest.fixture
def call_log():
    """Shared across the fakes so tests can check the order of backend calls."""
    return []


@pytest.fixture
def seeded_tables():
    """
    u1 owns j1 (in progress, worked by w9) and works on j2 (in progress)
    and j3 (finished) for employer e2.
    """
    return {
        "users": [
            {"id": "u1", "email": "u1@gremio.test", "role": "trabajador", "avatar_url": AVATAR_URL},
            {"id": "e2", "email": "e2@gremio.test", "role": "empleador", "avatar_url": None},
            {"id": "w9", "email": "w9@gremio.test", "role": "trabajador", "avatar_url": None},
        ],
        "jobs": [
            {"id": "j1", "user_id": "u1", "trabajador_id": "w9", "estado": "en_curso"},
            {"id": "j2", "user_id": "e2", "trabajador_id": "u1", "estado": "En_Curso"},
            {"id": "j3", "user_id": "e2", "trabajador_id": "u1", "estado": "finalizado"},
            {"id": "j4", "user_id": "e2", "trabajador_id": None, "estado": "abierto"},
        ],
        "postulaciones": [
            {"id": 1, "trabajador_id": "u1", "trabajo_id": "j4", "estado": "postulado"},
            {"id": 2, "trabajador_id": "w9", "trabajo_id": "j1", "estado": "aceptado"},
            {"id": 3, "trabajador_id": "w9", "trabajo_id": "j4", "estado": "postulado"},
        ],
        "curriculums": [
            {"id": "cv1", "user_id": "u1", "is_active": True},
            {"id": "cv9", "user_id": "w9", "is_active": True},
        ],
        "experiencia_laboral": [
            {"id": 1, "curriculum_id": "cv1", "empresa": "A"},
            {"id": 2, "curriculum_id": "cv1", "empresa": "B"},
            {"id": 3, "curriculum_id": "cv9", "empresa": "C"},
        ],
        "educacion": [
            {"id": 1, "curriculum_id": "cv1", "institucion": "UBA"},
        ],
        "enlaces_portfolio": [
            {"id": 1, "curriculum_id": "u1", "tipo": "web", "url": "https://u1.dev"},
        ],
        "testimonios": [
            {"id": 1, "curriculum_id": "u1", "autor": "e2", "mensaje": "Excelente"},
        ],
        "user_presence": [{"user_id": "u1", "online": True}],
        "user_suggestions": [{"id": 1, "user_id": "u1", "texto": "Más filtros"}],
        "password_resets": [{"id": 1, "user_id": "u1", "token": "t", "used": False}],
        "comments": [
            {"id": 1, "user_id": "u1", "job_id": "j4"},
            {"id": 2, "user_id": "e2", "job_id": "j4"},
        ],
        "job_cancellation_requests": [
            {"id": 1, "job_id": "j1", "requested_by": "w9", "requested_to": "e2"},
            {"id": 2, "job_id": "j2", "requested_by": "e2", "requested_to": "u1"},
            {"id": 3, "job_id": "j4", "requested_by": "e2", "requested_to": "w9"},
        ],
        "cv_contact_requests": [
            {"id": 1, "employer_id": "e2", "worker_id": "u1"},
            {"id": 2, "employer_id": "e2", "worker_id": "w9"},
        ],
    }


@pytest.fixture
def store(seeded_tables, call_log):
    return InMemoryDataStore(
        seeded_tables,
        unique={"postulaciones": ("trabajador_id", "trabajo_id")},
        log=call_log,
    )


@pytest.fixture
def storage(call_log):
    return FakeStorage(
        {
            "avatars": {"u1/avatar.png", "w9/avatar.png"},
            JOB_IMAGES_BUCKET: {"u1/j1/a.jpg", "u1/j1/b.jpg", "e2/j4/c.jpg"},
        },
        log=call_log,
    )


@pytest.fixture
def auth(call_log):
    return FakeAuth(
        users={"u1", "e2", "w9"},
        tokens={"token-u1": "u1", "token-e2": "e2"},
        log=call_log,
    )


@pytest.fixture
def mock_email_service():
    service = MagicMock()
    service.send_verification_code = AsyncMock(return_value={"success": True, "mode": "console"})
    service.send_password_reset = AsyncMock(return_value={"success": True, "mode": "console"})
    return service
