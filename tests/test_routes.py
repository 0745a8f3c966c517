"""Route tests: FastAPI app with services backed by the in-memory fakes."""

import pytest
from fastapi.testclient import TestClient

from api import app
from gremio.account.dependencies import get_deletion_service
from gremio.account.services.deletion_service import AccountDeletionService
from gremio.applications.dependencies import get_application_service
from gremio.applications.services.application_service import ApplicationService
from gremio.auth.dependencies import get_login_service, get_password_reset_service
from gremio.auth.services.login_service import LoginService
from gremio.auth.services.password_reset_service import PasswordResetService
from gremio.profile.dependencies import get_profile_service
from gremio.profile.services.profile_service import ProfileService
from gremio.verification.dependencies import get_verification_service
from gremio.verification.services.code_store import VerificationCodeStore
from gremio.verification.services.verification_service import VerificationService


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def client(store, storage, auth, mock_email_service):
    """Lifespan is not entered, so no Supabase connection is made."""
    verification_service = VerificationService(VerificationCodeStore(), mock_email_service)
    overrides = {
        get_deletion_service: lambda: AccountDeletionService(store, storage, auth),
        get_application_service: lambda: ApplicationService(store),
        get_profile_service: lambda: ProfileService(store),
        get_login_service: lambda: LoginService(store),
        get_password_reset_service: lambda: PasswordResetService(store, auth, mock_email_service),
        get_verification_service: lambda: verification_service,
    }
    app.dependency_overrides.update(overrides)
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────────
# /delete-user
# ─────────────────────────────────────────────────────────────────


class TestDeleteUserRoute:
    def test_deletes_own_account(self, client, store, auth):
        response = client.post(
            "/delete-user",
            json={"userId": "u1"},
            headers={"Authorization": "Bearer token-u1"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Usuario eliminado correctamente"
        assert body["data"]["userId"] == "u1"
        assert "u1" not in auth.users
        assert "u1" not in [row["id"] for row in store.rows("users")]

    def test_missing_user_id(self, client, call_log):
        response = client.post("/delete-user", json={}, headers={"Authorization": "Bearer token-u1"})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "userId es requerido"
        assert call_log == []

    def test_missing_body(self, client):
        response = client.post("/delete-user", headers={"Authorization": "Bearer token-u1"})

        assert response.status_code == 400

    def test_missing_token(self, client):
        response = client.post("/delete-user", json={"userId": "u1"})

        assert response.status_code == 401
        assert response.json()["detail"]["message"] == "Falta Authorization Bearer token"

    def test_wrong_scheme(self, client):
        response = client.post(
            "/delete-user",
            json={"userId": "u1"},
            headers={"Authorization": "Basic dXNlcjpwYXNz"},
        )

        assert response.status_code == 401

    def test_other_users_account(self, client, call_log):
        response = client.post(
            "/delete-user",
            json={"userId": "u1"},
            headers={"Authorization": "Bearer token-e2"},
        )

        assert response.status_code == 403
        assert call_log == []

    def test_identity_failure(self, client, auth):
        from common.utils.exceptions import IdentityError

        auth.delete_error = IdentityError("upstream connect error")

        response = client.post(
            "/delete-user",
            json={"userId": "u1"},
            headers={"Authorization": "Bearer token-u1"},
        )

        assert response.status_code == 500
        assert response.json()["detail"]["message"] == "Error al eliminar usuario de Auth: upstream connect error"


# ─────────────────────────────────────────────────────────────────
# Other endpoints
# ─────────────────────────────────────────────────────────────────


class TestVerificationRoutes:
    def test_send_and_verify(self, client, mock_email_service):
        response = client.post("/enviar-codigo", json={"email": "Ana@Gremio.test"})
        assert response.status_code == 200
        assert response.json()["message"] == "Código enviado"
        assert response.json()["data"] == {"expiresInSec": 300, "resendInSec": 60}

        code = mock_email_service.send_verification_code.call_args.args[1]
        response = client.post("/verificar-codigo", json={"email": "ana@gremio.test", "codigoIngresado": code})
        assert response.status_code == 200
        assert response.json()["message"] == "Código correcto"

    def test_resend_is_throttled(self, client):
        client.post("/enviar-codigo", json={"email": "ana@gremio.test"})

        response = client.post("/enviar-codigo", json={"email": "ana@gremio.test"})

        assert response.status_code == 429
        assert "Retry-After" in response.headers

    def test_numeric_code_is_not_a_validation_error(self, client):
        response = client.post("/verificar-codigo", json={"email": "ana@gremio.test", "codigoIngresado": 123456})

        assert response.status_code == 401


class TestAuthRoutes:
    def test_forgot_password_always_succeeds(self, client):
        response = client.post("/auth/forgot-password", json={"email": "nadie@gremio.test"})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_login_missing_fields(self, client):
        response = client.post("/auth/login", json={})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Faltan datos"

    def test_reset_password_bad_token(self, client):
        response = client.post("/auth/reset-password", json={"token": "nope", "password": "nueva-clave-1"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_RESET_TOKEN"


class TestApplicationRoutes:
    def test_apply_and_list(self, client):
        response = client.post("/postular", json={"user_id": "w9", "job_id": "j4"})
        assert response.status_code == 409  # already applied in the seed data

        response = client.get("/mis-trabajos/w9")
        assert response.status_code == 200
        assert sorted(job["id"] for job in response.json()["data"]["jobs"]) == ["j1", "j4"]


class TestProfileRoutes:
    def test_get_user(self, client):
        response = client.get("/users/e2")

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == "e2"

    def test_get_missing_user(self, client):
        assert client.get("/users/nope").status_code == 404

    def test_full_profile(self, client):
        response = client.get("/perfil-completo/u1")

        assert response.status_code == 200
        assert response.json()["data"]["curriculum"]["id"] == "cv1"


class TestHealth:
    def test_root(self, client):
        assert client.get("/").json() == {"success": True}

    def test_health(self, client):
        body = client.get("/health").json()

        assert body["data"]["status"] == "ok"
        assert body["data"]["backend"] is False
        assert "timestamp" in body["data"]
