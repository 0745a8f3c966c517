"""Unit tests for VerificationService (in-memory code store, fake clock)."""

import pytest

from common.utils.exceptions import APIException
from gremio.verification.services.code_store import VerificationCodeStore
from gremio.verification.services.verification_service import (
    VerificationService,
    generate_code,
    normalize_email,
)


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def code_store(clock):
    return VerificationCodeStore(clock=clock)


@pytest.fixture
def service(code_store, mock_email_service):
    return VerificationService(code_store, mock_email_service, code_ttl_seconds=300, resend_cooldown_seconds=60)


def sent_code(mock_email_service) -> str:
    return mock_email_service.send_verification_code.call_args.args[1]


# ─────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────


class TestHelpers:
    def test_normalize_email(self):
        assert normalize_email("  Ana@Gremio.Test ") == "ana@gremio.test"
        assert normalize_email(None) == ""

    def test_generate_code_is_six_digits(self):
        for _ in range(200):
            code = generate_code()
            assert len(code) == 6
            assert 100000 <= int(code) <= 999999


# ─────────────────────────────────────────────────────────────────
# send_code
# ─────────────────────────────────────────────────────────────────


class TestSendCode:
    @pytest.mark.asyncio
    async def test_sends_code_to_normalized_email(self, service, code_store, mock_email_service):
        result = await service.send_code(" Ana@Gremio.Test ")

        assert result == {"expiresInSec": 300, "resendInSec": 60}
        to_email = mock_email_service.send_verification_code.call_args.args[0]
        assert to_email == "ana@gremio.test"
        assert code_store.get("ana@gremio.test").code == sent_code(mock_email_service)

    @pytest.mark.asyncio
    async def test_missing_email(self, service):
        with pytest.raises(APIException) as exc_info:
            await service.send_code("  ")

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["message"] == "Falta el correo"

    @pytest.mark.asyncio
    async def test_resend_inside_cooldown_is_throttled(self, service, clock, mock_email_service):
        await service.send_code("ana@gremio.test")
        clock.advance(20)

        with pytest.raises(APIException) as exc_info:
            await service.send_code("ana@gremio.test")

        assert exc_info.value.status_code == 429
        assert exc_info.value.headers["Retry-After"] == "40"
        assert exc_info.value.detail["details"] == {"expiresInSec": 300, "retryAfterSec": 40}
        assert mock_email_service.send_verification_code.await_count == 1

    @pytest.mark.asyncio
    async def test_resend_after_cooldown_replaces_code(self, service, clock, code_store, mock_email_service):
        await service.send_code("ana@gremio.test")
        first = code_store.get("ana@gremio.test")
        clock.advance(61)

        await service.send_code("ana@gremio.test")

        second = code_store.get("ana@gremio.test")
        assert second.issued_at == first.issued_at + 61
        assert mock_email_service.send_verification_code.await_count == 2

    @pytest.mark.asyncio
    async def test_failed_send_drops_code_but_keeps_cooldown(self, service, code_store, mock_email_service):
        mock_email_service.send_verification_code.return_value = {"success": False, "error": "401 unauthorized"}

        with pytest.raises(APIException) as exc_info:
            await service.send_code("ana@gremio.test")

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail["message"] == "Error al enviar correo"
        assert code_store.get("ana@gremio.test") is None

        with pytest.raises(APIException) as exc_info:
            await service.send_code("ana@gremio.test")
        assert exc_info.value.status_code == 429


# ─────────────────────────────────────────────────────────────────
# verify_code
# ─────────────────────────────────────────────────────────────────


class TestVerifyCode:
    @pytest.mark.asyncio
    async def test_correct_code_is_consumed(self, service, code_store, mock_email_service):
        await service.send_code("ana@gremio.test")
        code = sent_code(mock_email_service)

        service.verify_code("ANA@gremio.test", f" {code} ")

        assert code_store.get("ana@gremio.test") is None

        with pytest.raises(APIException) as exc_info:
            service.verify_code("ana@gremio.test", code)
        assert exc_info.value.detail["message"] == "Código incorrecto"

    @pytest.mark.asyncio
    async def test_wrong_code_keeps_pending_code(self, service, code_store, mock_email_service):
        await service.send_code("ana@gremio.test")
        code = sent_code(mock_email_service)
        wrong = "000000" if code != "000000" else "111111"

        with pytest.raises(APIException) as exc_info:
            service.verify_code("ana@gremio.test", wrong)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["message"] == "Código incorrecto"
        assert code_store.get("ana@gremio.test") is not None

    @pytest.mark.asyncio
    async def test_expired_code(self, service, clock, code_store, mock_email_service):
        await service.send_code("ana@gremio.test")
        code = sent_code(mock_email_service)
        clock.advance(301)

        with pytest.raises(APIException) as exc_info:
            service.verify_code("ana@gremio.test", code)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["message"] == "Código expirado"
        assert code_store.get("ana@gremio.test") is None

    @pytest.mark.asyncio
    async def test_code_valid_at_exact_lifetime(self, service, clock, mock_email_service):
        await service.send_code("ana@gremio.test")
        clock.advance(300)

        service.verify_code("ana@gremio.test", sent_code(mock_email_service))

    def test_no_pending_code(self, service):
        with pytest.raises(APIException) as exc_info:
            service.verify_code("ana@gremio.test", "123456")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["message"] == "Código incorrecto"

    @pytest.mark.parametrize("email, code", [("", "123456"), ("ana@gremio.test", ""), (None, None)])
    def test_missing_fields(self, service, email, code):
        with pytest.raises(APIException) as exc_info:
            service.verify_code(email, code)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["message"] == "Faltan datos"


class TestCodeStore:
    def test_prune_forgets_expired_entries(self, code_store):
        code_store.put("a@x.test", "111111", issued_at=0)
        code_store.mark_sent("a@x.test", 0)
        code_store.put("b@x.test", "222222", issued_at=250)
        code_store.mark_sent("b@x.test", 250)

        code_store.prune(now=301, code_ttl=300, cooldown=60)

        assert code_store.get("a@x.test") is None
        assert code_store.last_sent_at("a@x.test") is None
        assert code_store.get("b@x.test") is not None
        assert code_store.last_sent_at("b@x.test") == 250
        assert len(code_store) == 1
