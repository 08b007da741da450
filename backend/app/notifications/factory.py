# backend/app/notifications/factory.py

"""
通知ディスパッチャの簡易ファクトリ。

- アプリ全体で 1つの NotificationDispatcher（= 1つのワーカープール）を共有する
- アプリ終了時・テスト時にプールを停止してリセットできるようにする
"""

from __future__ import annotations

from typing import Optional

from app.telegram.client import TelegramClient

from .config import get_notification_settings
from .dispatcher import NotificationDispatcher

_notification_dispatcher: Optional[NotificationDispatcher] = None


def get_notification_dispatcher() -> NotificationDispatcher:
    """
    アプリ全体で共有する NotificationDispatcher を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _notification_dispatcher
    if _notification_dispatcher is None:
        settings = get_notification_settings()
        _notification_dispatcher = NotificationDispatcher(
            TelegramClient(),
            max_workers=settings.max_workers,
        )
    return _notification_dispatcher


def shutdown_notification_dispatcher(wait: bool = True) -> None:
    """
    共有ディスパッチャのワーカープールを停止し、シングルトンを破棄する。
    """
    global _notification_dispatcher
    if _notification_dispatcher is not None:
        _notification_dispatcher.shutdown(wait=wait)
        _notification_dispatcher = None


__all__ = [
    "NotificationDispatcher",
    "get_notification_dispatcher",
    "shutdown_notification_dispatcher",
]
