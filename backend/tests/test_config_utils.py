# backend/tests/test_config_utils.py

from app.utils.config import get_env, get_env_bool, get_env_int


def test_get_env_unset_returns_default(monkeypatch):
    monkeypatch.delenv("SOME_UNSET_VAR", raising=False)

    assert get_env("SOME_UNSET_VAR") is None
    assert get_env("SOME_UNSET_VAR", default="fallback") == "fallback"


def test_get_env_optional_uses_default_for_empty_value(monkeypatch):
    monkeypatch.setenv("SOME_OPTIONAL_VAR", "")

    assert get_env("SOME_OPTIONAL_VAR", default="fallback") == "fallback"


def test_get_env_int_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("SOME_INT_VAR", "ten")

    assert get_env_int("SOME_INT_VAR", default=3) == 3


def test_get_env_bool(monkeypatch):
    monkeypatch.setenv("SOME_BOOL_VAR", "Yes")

    assert get_env_bool("SOME_BOOL_VAR") is True


def test_notification_workers_are_clamped(monkeypatch):
    from app.notifications import config as notification_config

    monkeypatch.setenv("NOTIFICATION_MAX_WORKERS", "0")
    notification_config.get_notification_settings.cache_clear()
    try:
        assert notification_config.get_notification_settings().max_workers == 1
    finally:
        notification_config.get_notification_settings.cache_clear()


def test_contact_token_is_read_once(monkeypatch):
    from app.messages import config as messages_config

    messages_config.get_access_settings.cache_clear()
    monkeypatch.setenv("CONTACT_TOKEN", "first")
    try:
        first = messages_config.get_access_settings()
        monkeypatch.setenv("CONTACT_TOKEN", "second")
        assert messages_config.get_access_settings() is first
        assert first.contact_token == "first"
    finally:
        messages_config.get_access_settings.cache_clear()
