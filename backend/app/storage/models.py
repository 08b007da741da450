# backend/app/storage/models.py

"""
SQLAlchemy ORM モデル定義。

- topic: トピック本体（通知設定は型なし JSON ドキュメントとして保持）
- message: トピック宛てのメッセージ（topic への外部キー制約付き）

リクエスト / レスポンス用の Pydantic モデルは schemas.py を参照。
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TopicModel(Base):
    __tablename__ = "topic"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    notification_config = Column(JSON(none_as_null=True), nullable=True)


class MessageModel(Base):
    __tablename__ = "message"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # 挿入時にストレージ側で採番する。一覧の並び順のキーになる
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    contacts = Column(JSON, nullable=False)
    text = Column(Text, nullable=False)
    topic_id = Column(Uuid, ForeignKey("topic.id"), nullable=False)

    __table_args__ = (Index("ix_message_topic_id_created_at", "topic_id", "created_at"),)


__all__ = ["Base", "TopicModel", "MessageModel"]
