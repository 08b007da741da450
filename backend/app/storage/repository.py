# backend/app/storage/repository.py

"""
トピック / メッセージの永続化を担当するリポジトリ。

各操作は 1 レコード単位でアトミックに完結し、操作ごとに独立したセッションを使う。
SQLAlchemy の例外は StorageError 系に包み直し、呼び出し側には
「見つからない」か「操作に失敗した」かの区別だけを見せる。
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, MessageModel, TopicModel
from .schemas import MessageRecord, TopicRecord

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """永続化レイヤ全般の例外（操作失敗）。"""


class RecordNotFoundError(StorageError):
    """対象レコードが存在しない場合の例外。"""


class TopicNotFoundError(RecordNotFoundError):
    """指定されたトピックが存在しない場合の例外。"""

    def __init__(self, topic_id: UUID) -> None:
        super().__init__(f"Topic(id={topic_id}) not found.")
        self.topic_id = topic_id


_FOREIGN_KEY_VIOLATION = "23503"


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    """
    IntegrityError が外部キー制約違反かどうかを判定する。

    PostgreSQL は SQLSTATE 23503、SQLite はメッセージ文字列でしか区別できない。
    """
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == _FOREIGN_KEY_VIOLATION
    return "foreign key" in str(orig).lower()


class SqlStorage:
    """
    SQLAlchemy セッションファクトリの薄いラッパー。

    - create_topic / get_topic
    - create_message / list_messages

    コネクションプールはエンジン側で共有されるため、インプロセスのロックは持たない。
    一意性・参照整合性の衝突は DB の制約に任せる。
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    # ---- topic ---------------------------------------------------------

    def create_topic(
        self,
        name: str,
        notification_config: Optional[Dict[str, Any]] = None,
    ) -> TopicRecord:
        """
        トピックを 1件作成して返す。

        :param notification_config: 検証済み通知設定のシリアライズ形式（なければ None）
        """
        try:
            with self._session_factory() as session, session.begin():
                topic = TopicModel(name=name, notification_config=notification_config)
                session.add(topic)
                session.flush()
                return TopicRecord.model_validate(topic)
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to create topic: {exc}") from exc

    def get_topic(self, topic_id: UUID) -> Optional[TopicRecord]:
        """トピックを ID で検索する。存在しなければ None。"""
        try:
            with self._session_factory() as session:
                topic = session.get(TopicModel, topic_id)
                return TopicRecord.model_validate(topic) if topic is not None else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to get Topic(id={topic_id}): {exc}") from exc

    # ---- message -------------------------------------------------------

    def create_message(self, topic_id: UUID, contacts: Any, text: str) -> MessageRecord:
        """
        メッセージを 1件保存して返す。

        topic_id が既存トピックを指していない場合は外部キー制約で失敗し、
        TopicNotFoundError を投げる。それ以外の制約違反（NOT NULL など）は StorageError。
        """
        try:
            with self._session_factory() as session, session.begin():
                message = MessageModel(contacts=contacts, text=text, topic_id=topic_id)
                session.add(message)
                session.flush()
                return MessageRecord.model_validate(message)
        except IntegrityError as exc:
            if not _is_foreign_key_violation(exc):
                raise StorageError(f"Failed to create message: {exc}") from exc
            logger.warning("Message rejected by foreign key for Topic(id=%s).", topic_id)
            raise TopicNotFoundError(topic_id) from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to create message: {exc}") from exc

    def list_messages(self, topic_id: UUID) -> List[MessageRecord]:
        """
        トピックのメッセージを新しい順に返す。

        created_at が同一の場合は ID の降順で並べる。
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.topic_id == topic_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        try:
            with self._session_factory() as session:
                rows = session.scalars(stmt).all()
                return [MessageRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to list messages for Topic(id={topic_id}): {exc}") from exc


def init_db(engine: Engine) -> None:
    """テーブルが存在しなければ作成する。"""
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to initialize database: {exc}") from exc
