# backend/app/storage/schemas.py

"""
永続化レイヤが上位レイヤへ返すレコードモデル。

ORM オブジェクトはセッション外へ持ち出さず、ここで定義する Pydantic モデルに
変換してから返す。
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TopicRecord(BaseModel):
    """
    保存済みトピック 1件。

    notification_config は保存されたままの型なし JSON 値（オブジェクトとは限らない）。
    プロバイダ固有の型（TelegramCredential）への変換は送信直前に行う。
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID = Field(..., description="トピック ID（作成時に採番）")
    name: str = Field(..., description="トピック名")
    notification_config: Optional[Any] = Field(
        None,
        description="通知設定。None の場合このトピックは通知しない。",
    )

    @property
    def can_notify(self) -> bool:
        return self.notification_config is not None


class MessageRecord(BaseModel):
    """保存済みメッセージ 1件。"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int = Field(..., description="ストレージ側で採番される ID")
    created_at: datetime = Field(..., description="挿入時刻")
    contacts: Any = Field(None, description="連絡先情報（任意の JSON 値）")
    text: str = Field(..., description="本文")
    topic_id: UUID = Field(..., description="宛先トピック ID")
