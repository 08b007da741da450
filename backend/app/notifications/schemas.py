# backend/app/notifications/schemas.py

"""
通知 1件分の送信状態・結果のスキーマ定義。

メッセージ 1件あたりの通知は次の状態を一方向にだけ遷移する:

    NOT_ATTEMPTED → SENDING → {DELIVERED | TRANSPORT_FAILED | REJECTED}

終端状態はログに出すだけで、Message エンティティには保存しない。
リトライもしない。
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DeliveryStatus(str, Enum):
    """
    通知の送信状態。

    - NOT_ATTEMPTED: まだ送信していない
    - SENDING: sendMessage を呼び出し中
    - DELIVERED: 2xx が返った
    - TRANSPORT_FAILED: Telegram に到達できなかった
    - REJECTED: 2xx 以外が返った
    """

    NOT_ATTEMPTED = "not_attempted"
    SENDING = "sending"
    DELIVERED = "delivered"
    TRANSPORT_FAILED = "transport_failed"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (
            DeliveryStatus.DELIVERED,
            DeliveryStatus.TRANSPORT_FAILED,
            DeliveryStatus.REJECTED,
        )


class DeliveryFailureReason(str, Enum):
    """送信失敗の理由。"""

    TRANSPORT = "transport"
    REJECTED = "rejected"
    RESPONSE_UNREADABLE = "response-unreadable"


class NotificationOutcome(BaseModel):
    """
    通知 1件分の送信結果。

    観測用（ログ・テスト）の値であり、呼び出し元のレスポンスには影響しない。
    """

    message_id: int = Field(..., description="通知対象のメッセージ ID")
    status: DeliveryStatus = Field(..., description="終端状態")
    reason: Optional[DeliveryFailureReason] = Field(
        None,
        description="失敗理由（成功時は None）。",
    )
    detail: Optional[str] = Field(
        None,
        description="Telegram が返したエラー内容など（取得できた場合のみ）。",
    )

    @property
    def delivered(self) -> bool:
        return self.status == DeliveryStatus.DELIVERED
