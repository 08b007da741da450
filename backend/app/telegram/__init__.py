"""
Telegram Bot API 連携モジュール。

- config: API のベース URL・タイムアウト
- schemas: トピックに紐づく通知設定（Bot トークン + chat_id）
- client: getMe（生存確認）/ sendMessage（送信）の HTTP クライアント
"""

from .client import (  # noqa: F401
    TelegramClient,
    TelegramClientError,
    TelegramConnectionError,
    TelegramHTTPError,
)
from .config import TelegramSettings, get_telegram_settings  # noqa: F401
from .schemas import TelegramCredential  # noqa: F401
