# backend/tests/conftest.py
"""
Pytest configuration for the business ideas backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import app.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (in-memory SQLite, dummy contact token).
- Provides in-memory storage and a fake Telegram client so that
  no test talks to a real database file or to api.telegram.org.
"""

import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest
from sqlalchemy import func, select


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    """
    os.environ.setdefault("DATABASE_URL", "sqlite://")
    os.environ.setdefault("CONTACT_TOKEN", "dummy-contact-token-for-tests")
    os.environ.setdefault("TELEGRAM_API_BASE_URL", "https://telegram.invalid/bot")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()

from app.notifications.dispatcher import NotificationDispatcher  # noqa: E402
from app.storage.config import DatabaseSettings  # noqa: E402
from app.storage.models import TopicModel  # noqa: E402
from app.storage.repository import SqlStorage, init_db  # noqa: E402
from app.storage.session import build_engine, build_session_factory  # noqa: E402
from app.telegram.schemas import TelegramCredential  # noqa: E402
from app.messages.service import MessageIngestor  # noqa: E402
from app.topics.service import TopicRegistry  # noqa: E402

CONTACT_TOKEN = "dummy-contact-token-for-tests"


class FakeTelegramClient:
    """
    TelegramClient の代わりに使うテスト用クライアント。

    getMe / sendMessage の呼び出しを記録し、指定された結果・例外を返す。
    """

    def __init__(
        self,
        *,
        live: bool = True,
        liveness_error: Optional[Exception] = None,
        send_error: Optional[Exception] = None,
    ) -> None:
        self.live = live
        self.liveness_error = liveness_error
        self.send_error = send_error
        self.liveness_checks: List[TelegramCredential] = []
        self.sent: List[Tuple[TelegramCredential, str]] = []

    def check_liveness(self, credential: TelegramCredential) -> bool:
        self.liveness_checks.append(credential)
        if self.liveness_error is not None:
            raise self.liveness_error
        return self.live

    def send_message(self, credential: TelegramCredential, text: str) -> dict:
        self.sent.append((credential, text))
        if self.send_error is not None:
            raise self.send_error
        return {"ok": True}


def count_topics(engine) -> int:
    """topic テーブルの行数（作成が拒否されたことの確認用）。"""
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(TopicModel)).scalar_one()


@pytest.fixture
def engine():
    engine = build_engine(DatabaseSettings(url="sqlite://"))
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def storage(engine) -> SqlStorage:
    return SqlStorage(build_session_factory(engine))


@pytest.fixture
def telegram() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def dispatcher(telegram):
    dispatcher = NotificationDispatcher(telegram, max_workers=2)
    yield dispatcher
    dispatcher.shutdown(wait=True)


@pytest.fixture
def registry(storage, telegram) -> TopicRegistry:
    return TopicRegistry(storage, telegram)


@pytest.fixture
def ingestor(storage, registry, dispatcher) -> MessageIngestor:
    return MessageIngestor(storage, registry, dispatcher)


@pytest.fixture
def credential() -> TelegramCredential:
    return TelegramCredential(api_key="123456:dummy-bot-token", chat_id="-1001234567890")
