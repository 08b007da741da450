# backend/app/messages/schemas.py

"""
/topics/{topic_id}/messages 用のリクエスト・レスポンススキーマ。
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateMessageRequest(BaseModel):
    """
    POST /topics/{topic_id}/messages のリクエストボディ。

    contacts は任意の JSON 値（オブジェクト・配列・文字列など）をそのまま保存する。
    """

    contacts: Any = Field(..., description="連絡先情報（任意の JSON 値）")
    text: str = Field(..., description="本文")


class MessageResponse(BaseModel):
    """GET /topics/{topic_id}/messages の 1要素。"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    contacts: Any = None
    text: str
    topic_id: UUID
