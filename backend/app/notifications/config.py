# backend/app/notifications/config.py

"""
通知ディスパッチャの設定値。
"""

from dataclasses import dataclass
from functools import lru_cache

from app.utils.config import get_env_int


@dataclass(frozen=True)
class NotificationSettings:
    """通知送信用ワーカープールの設定値。"""

    max_workers: int = 4


@lru_cache()
def get_notification_settings() -> NotificationSettings:
    """
    環境変数から通知設定を読み込む。

    任意:
      - NOTIFICATION_MAX_WORKERS（デフォルト 4、1 未満は 1 に丸める）
    """
    max_workers = max(1, get_env_int("NOTIFICATION_MAX_WORKERS", default=4))
    return NotificationSettings(max_workers=max_workers)
