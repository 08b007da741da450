# backend/tests/test_telegram_client.py

import json

import httpx
import pytest

from app.telegram.client import (
    TelegramClient,
    TelegramClientError,
    TelegramConnectionError,
    TelegramHTTPError,
)
from app.telegram.config import TelegramSettings
from app.telegram.schemas import TelegramCredential

BASE_URL = "https://telegram.invalid/bot"


def _install_transport(monkeypatch, handler):
    """
    httpx.Client を MockTransport 付きのものに差し替え、リクエストを記録する。
    """
    requests = []
    real_client = httpx.Client

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    def fake_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(recording_handler)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", fake_client)
    return requests


@pytest.fixture
def client() -> TelegramClient:
    return TelegramClient(settings=TelegramSettings(base_url=BASE_URL, timeout_seconds=3))


@pytest.fixture
def credential() -> TelegramCredential:
    return TelegramCredential(api_key="123:token", chat_id="42")


def test_client_errors_share_base_class():
    assert issubclass(TelegramConnectionError, TelegramClientError)
    assert issubclass(TelegramHTTPError, TelegramClientError)


def test_settings_are_read_from_env(monkeypatch):
    from app.telegram import config as telegram_config

    monkeypatch.setenv("TELEGRAM_API_BASE_URL", "http://localhost:8081/bot")
    monkeypatch.setenv("TELEGRAM_TIMEOUT_SECONDS", "not-a-number")
    telegram_config.get_telegram_settings.cache_clear()
    try:
        settings = telegram_config.get_telegram_settings()
    finally:
        telegram_config.get_telegram_settings.cache_clear()

    assert settings.base_url == "http://localhost:8081/bot"
    assert settings.timeout_seconds == 10


def test_check_liveness_calls_get_me(monkeypatch, client, credential):
    requests = _install_transport(monkeypatch, lambda r: httpx.Response(200, json={"ok": True}))

    assert client.check_liveness(credential) is True
    assert requests[0].method == "GET"
    assert str(requests[0].url) == f"{BASE_URL}123:token/getMe"


def test_check_liveness_false_on_non_2xx(monkeypatch, client, credential):
    _install_transport(
        monkeypatch,
        lambda r: httpx.Response(401, json={"ok": False, "description": "Unauthorized"}),
    )

    assert client.check_liveness(credential) is False


def test_check_liveness_raises_on_network_error(monkeypatch, client, credential):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    _install_transport(monkeypatch, handler)

    with pytest.raises(TelegramConnectionError):
        client.check_liveness(credential)


def test_send_message_posts_chat_id_and_text(monkeypatch, client, credential):
    requests = _install_transport(
        monkeypatch, lambda r: httpx.Response(200, json={"ok": True, "result": {}})
    )

    result = client.send_message(credential, "Topic: t\nText: hi\nContacts: {}")

    assert result["ok"] is True
    assert requests[0].method == "POST"
    assert str(requests[0].url) == f"{BASE_URL}123:token/sendMessage"
    assert json.loads(requests[0].content) == {
        "chat_id": "42",
        "text": "Topic: t\nText: hi\nContacts: {}",
    }


def test_send_message_http_error_carries_description(monkeypatch, client, credential):
    _install_transport(
        monkeypatch,
        lambda r: httpx.Response(
            400,
            json={"ok": False, "error_code": 400, "description": "Bad Request: chat not found"},
        ),
    )

    with pytest.raises(TelegramHTTPError) as excinfo:
        client.send_message(credential, "hi")

    assert excinfo.value.status_code == 400
    assert excinfo.value.detail == "Bad Request: chat not found"


def test_send_message_http_error_falls_back_to_text(monkeypatch, client, credential):
    _install_transport(monkeypatch, lambda r: httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(TelegramHTTPError) as excinfo:
        client.send_message(credential, "hi")

    assert excinfo.value.detail == "Bad Gateway"


def test_send_message_http_error_without_body_has_no_detail(monkeypatch, client, credential):
    _install_transport(monkeypatch, lambda r: httpx.Response(500, content=b""))

    with pytest.raises(TelegramHTTPError) as excinfo:
        client.send_message(credential, "hi")

    assert excinfo.value.detail is None


def test_send_message_raises_connection_error_on_timeout(monkeypatch, client, credential):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    _install_transport(monkeypatch, handler)

    with pytest.raises(TelegramConnectionError):
        client.send_message(credential, "hi")


def test_credential_accepts_numeric_chat_id_and_hides_token_in_repr():
    credential = TelegramCredential.model_validate({"api_key": "123:secret", "chat_id": -100})

    assert credential.chat_id == "-100"
    assert "123:secret" not in repr(credential)
