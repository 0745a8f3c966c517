"""Unit tests for ProfileService."""

import pytest

from common.utils.exceptions import APIException, DataStoreError
from gremio.profile.services.profile_service import ProfileService


@pytest.fixture
def service(store):
    return ProfileService(store)


class TestGetUser:
    @pytest.mark.asyncio
    async def test_existing_user(self, service):
        user = await service.get_user("e2")

        assert user["id"] == "e2"
        assert user["role"] == "empleador"

    @pytest.mark.asyncio
    async def test_missing_user(self, service):
        with pytest.raises(APIException) as exc_info:
            await service.get_user("nope")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_read_failure_looks_like_missing(self, service, store):
        store.fail("users", DataStoreError("users: timeout"))

        with pytest.raises(APIException) as exc_info:
            await service.get_user("e2")

        assert exc_info.value.status_code == 404


class TestGetFullProfile:
    @pytest.mark.asyncio
    async def test_full_profile(self, service, store):
        store.tables["curriculums"].append(
            {"id": "cv0", "user_id": "u1", "is_active": False, "actualizado_en": "2026-05-01T00:00:00Z"}
        )
        store.tables["curriculums"][0]["actualizado_en"] = "2026-01-01T00:00:00Z"
        store.tables["experiencia_laboral"] = [
            {"id": 1, "curriculum_id": "cv1", "empresa": "A", "inicio": "2019-01-01"},
            {"id": 2, "curriculum_id": "cv1", "empresa": "B", "inicio": "2022-06-01"},
            {"id": 3, "curriculum_id": "cv0", "empresa": "C", "inicio": "2023-01-01"},
        ]

        profile = await service.get_full_profile("u1")

        assert profile["user"]["id"] == "u1"
        # active resume wins over the more recently updated inactive one
        assert profile["curriculum"]["id"] == "cv1"
        assert [e["empresa"] for e in profile["experiencia"]] == ["B", "A"]
        assert len(profile["educacion"]) == 1
        assert profile["enlaces"][0]["url"] == "https://u1.dev"
        assert profile["testimonios"][0]["mensaje"] == "Excelente"

    @pytest.mark.asyncio
    async def test_user_without_resume(self, service):
        profile = await service.get_full_profile("e2")

        assert profile["curriculum"] is None
        assert profile["experiencia"] == []
        assert profile["educacion"] == []
        assert profile["enlaces"] == []
        assert profile["testimonios"] == []

    @pytest.mark.asyncio
    async def test_missing_user(self, service):
        with pytest.raises(APIException) as exc_info:
            await service.get_full_profile("nope")

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail["message"] == "User no encontrado"

    @pytest.mark.asyncio
    async def test_resume_read_failure(self, service, store):
        store.fail("curriculums", DataStoreError("curriculums: timeout"))

        with pytest.raises(APIException) as exc_info:
            await service.get_full_profile("u1")

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail["message"] == "Error leyendo currículum"

    @pytest.mark.asyncio
    async def test_section_read_failure_yields_empty_list(self, service, store):
        store.fail("testimonios", DataStoreError("testimonios: timeout"))

        profile = await service.get_full_profile("u1")

        assert profile["testimonios"] == []
        assert len(profile["experiencia"]) == 2
