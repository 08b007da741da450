# backend/app/telegram/config.py

"""
Telegram Bot API 連携の設定値。
"""

from dataclasses import dataclass
from functools import lru_cache

from app.utils.config import get_env, get_env_int

TELEGRAM_API_URL = "https://api.telegram.org/bot"


@dataclass(frozen=True)
class TelegramSettings:
    """
    Telegram Bot API 関連の設定値。

    base_url の直後に Bot トークンを連結してエンドポイントを組み立てる
    （例: https://api.telegram.org/bot<token>/getMe）。
    """

    base_url: str = TELEGRAM_API_URL
    timeout_seconds: int = 10


@lru_cache()
def get_telegram_settings() -> TelegramSettings:
    """
    Telegram 設定値を環境変数から読み出す。

    任意:
      - TELEGRAM_API_BASE_URL（デフォルト https://api.telegram.org/bot）
      - TELEGRAM_TIMEOUT_SECONDS（デフォルト 10秒）
    """
    base_url = get_env("TELEGRAM_API_BASE_URL", default=TELEGRAM_API_URL)
    timeout_seconds = get_env_int("TELEGRAM_TIMEOUT_SECONDS", default=10)

    return TelegramSettings(base_url=base_url, timeout_seconds=timeout_seconds)
