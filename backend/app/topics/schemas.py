# backend/app/topics/schemas.py

"""
/topics 用のリクエスト・レスポンススキーマ。
"""

from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from app.telegram.schemas import TelegramCredential


class CreateTopicRequest(BaseModel):
    """
    POST /topics のリクエストボディ。

    notification_config を指定した場合、Bot トークンの生存確認に通ったときだけ
    トピックが作成される。旧クライアント向けに tg_api というキー名も受け付ける。
    """

    name: str = Field(..., min_length=1, description="トピック名")
    notification_config: Optional[TelegramCredential] = Field(
        None,
        validation_alias=AliasChoices("notification_config", "tg_api"),
        description="Telegram 通知設定（省略時は通知しないトピックになる）",
    )


class CreateTopicResponse(BaseModel):
    """POST /topics のレスポンスボディ。"""

    id: UUID = Field(..., description="作成されたトピックの ID")
