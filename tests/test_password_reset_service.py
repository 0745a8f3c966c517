"""Unit tests for PasswordResetService."""

import pytest
from datetime import datetime, timedelta, timezone

from common.utils.exceptions import APIException, DataStoreError, IdentityError
from common.utils.password import verify_password
from gremio.auth.services.password_reset_service import PasswordResetService, parse_timestamp
from fakes import FakeAuth, InMemoryDataStore


NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def reset_store():
    return InMemoryDataStore({
        "users": [{"id": "u1", "email": "ana@gremio.test", "password_hash": None}],
        "password_resets": [
            {"id": 1, "user_id": "u1", "token": "valid", "used": False,
             "expires_at": (NOW + timedelta(minutes=10)).isoformat()},
            {"id": 2, "user_id": "u1", "token": "expired", "used": False,
             "expires_at": "2026-03-01T11:59:00Z"},
            {"id": 3, "user_id": "u1", "token": "used", "used": True,
             "expires_at": (NOW + timedelta(minutes=10)).isoformat()},
        ],
    })


@pytest.fixture
def reset_auth():
    return FakeAuth(users={"u1"})


@pytest.fixture
def service(reset_store, reset_auth, mock_email_service):
    return PasswordResetService(
        store=reset_store,
        auth=reset_auth,
        email_service=mock_email_service,
        frontend_url="https://gremio.app/",
        clock=lambda: NOW,
    )


# ─────────────────────────────────────────────────────────────────
# request_reset
# ─────────────────────────────────────────────────────────────────


class TestRequestReset:
    @pytest.mark.asyncio
    async def test_known_email_gets_link(self, service, reset_store, mock_email_service):
        await service.request_reset("ana@gremio.test")

        token_row = reset_store.rows("password_resets")[-1]
        assert token_row["user_id"] == "u1"
        assert len(token_row["token"]) == 64
        assert parse_timestamp(token_row["expires_at"]) == NOW + timedelta(minutes=15)

        to_email, link = mock_email_service.send_password_reset.call_args.args
        assert to_email == "ana@gremio.test"
        assert link == f"https://gremio.app/reset-password.html?token={token_row['token']}"

    @pytest.mark.asyncio
    async def test_unknown_email_is_silent(self, service, reset_store, mock_email_service):
        await service.request_reset("nadie@gremio.test")

        assert len(reset_store.rows("password_resets")) == 3
        mock_email_service.send_password_reset.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_failure_is_silent(self, service, mock_email_service):
        mock_email_service.send_password_reset.return_value = {"success": False, "error": "timeout"}

        await service.request_reset("ana@gremio.test")

    @pytest.mark.asyncio
    async def test_lookup_failure_is_silent(self, service, reset_store, mock_email_service):
        reset_store.fail("users", DataStoreError("users: timeout"))

        await service.request_reset("ana@gremio.test")

        mock_email_service.send_password_reset.assert_not_called()

    def test_default_frontend_url(self, reset_store, reset_auth, mock_email_service):
        service = PasswordResetService(reset_store, reset_auth, mock_email_service)

        assert service.build_reset_link("abc") == "https://tusitio.com/reset-password.html?token=abc"


# ─────────────────────────────────────────────────────────────────
# reset_password
# ─────────────────────────────────────────────────────────────────


class TestResetPassword:
    @pytest.mark.asyncio
    async def test_valid_token(self, service, reset_store, reset_auth):
        await service.reset_password("valid", "nueva-clave-1")

        assert reset_auth.passwords["u1"] == "nueva-clave-1"
        user = reset_store.rows("users")[0]
        assert verify_password("nueva-clave-1", user["password_hash"])
        assert user["password_hash"].startswith("$2b$10$")
        assert reset_store.rows("password_resets")[0]["used"] is True

    @pytest.mark.asyncio
    async def test_token_cannot_be_reused(self, service):
        await service.reset_password("valid", "nueva-clave-1")

        with pytest.raises(APIException) as exc_info:
            await service.reset_password("valid", "otra-clave-22")

        assert exc_info.value.detail["code"] == "INVALID_RESET_TOKEN"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["expired", "used", "unknown"])
    async def test_invalid_tokens(self, service, reset_auth, token):
        with pytest.raises(APIException) as exc_info:
            await service.reset_password(token, "nueva-clave-1")

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["code"] == "INVALID_RESET_TOKEN"
        assert reset_auth.passwords == {}

    @pytest.mark.asyncio
    async def test_short_password(self, service, reset_auth):
        with pytest.raises(APIException) as exc_info:
            await service.reset_password("valid", "corta")

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["message"] == "La contraseña debe tener al menos 8 caracteres"
        assert reset_auth.passwords == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token, password", [("", "nueva-clave-1"), ("valid", ""), (None, None)])
    async def test_missing_fields(self, service, token, password):
        with pytest.raises(APIException) as exc_info:
            await service.reset_password(token, password)

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_identity_failure(self, service, reset_store, reset_auth):
        reset_auth.update_error = IdentityError("service unavailable", status=503)

        with pytest.raises(APIException) as exc_info:
            await service.reset_password("valid", "nueva-clave-1")

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail["message"] == "No se pudo actualizar la contraseña (auth)"
        assert reset_store.rows("password_resets")[0]["used"] is False

    @pytest.mark.asyncio
    async def test_legacy_hash_failure_does_not_block(self, service, reset_store, reset_auth):
        reset_store.fail("users", DataStoreError("users: permission denied"), "update")

        await service.reset_password("valid", "nueva-clave-1")

        assert reset_auth.passwords["u1"] == "nueva-clave-1"
        assert reset_store.rows("password_resets")[0]["used"] is True


class TestParseTimestamp:
    @pytest.mark.parametrize("value, expected", [
        ("2026-03-01T12:00:00+00:00", NOW),
        ("2026-03-01T12:00:00Z", NOW),
        ("2026-03-01 12:00:00", NOW),
        ("2026-03-01T09:00:00-03:00", NOW),
        (NOW, NOW),
    ])
    def test_parses(self, value, expected):
        assert parse_timestamp(value) == expected

    @pytest.mark.parametrize("value", [None, "", "mañana", 12])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None
