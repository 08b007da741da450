# backend/app/state.py

"""
アプリ全体で共有するサービスインスタンスの状態管理モジュール。

- Engine（コネクションプール）/ SqlStorage / TopicRegistry / MessageIngestor を提供
- NotificationDispatcher は app.notifications.factory のものを共有する
- テスト時にリセットできるようにする

FastAPI の Depends で使う想定。テストでは app.dependency_overrides で差し替えてもよい。
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.engine import Engine

from app.messages.service import MessageIngestor
from app.notifications.factory import (
    get_notification_dispatcher,
    shutdown_notification_dispatcher,
)
from app.storage.repository import SqlStorage, init_db
from app.storage.session import build_engine, build_session_factory
from app.telegram.client import TelegramClient
from app.topics.service import TopicRegistry

_engine: Optional[Engine] = None
_storage: Optional[SqlStorage] = None
_topic_registry: Optional[TopicRegistry] = None
_message_ingestor: Optional[MessageIngestor] = None


def get_engine() -> Engine:
    """
    共有の Engine を返す。初回呼び出し時にテーブルも作成する。
    """
    global _engine
    if _engine is None:
        _engine = build_engine()
        init_db(_engine)
    return _engine


def get_storage() -> SqlStorage:
    global _storage
    if _storage is None:
        _storage = SqlStorage(build_session_factory(get_engine()))
    return _storage


def get_topic_registry() -> TopicRegistry:
    global _topic_registry
    if _topic_registry is None:
        _topic_registry = TopicRegistry(get_storage(), TelegramClient())
    return _topic_registry


def get_message_ingestor() -> MessageIngestor:
    global _message_ingestor
    if _message_ingestor is None:
        _message_ingestor = MessageIngestor(
            get_storage(),
            get_topic_registry(),
            get_notification_dispatcher(),
        )
    return _message_ingestor


def reset_state() -> None:
    """
    共有インスタンスを破棄する（アプリ終了時・テスト用）。

    通知ワーカープールは実行中の送信が終わるまで待ってから停止する。
    """
    global _engine, _storage, _topic_registry, _message_ingestor
    shutdown_notification_dispatcher(wait=True)
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _storage = None
    _topic_registry = None
    _message_ingestor = None
