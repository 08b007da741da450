# backend/app/messages/service.py

"""
メッセージ受け付けのサービス層。

処理順:
1. トピックを参照（存在しなければ TopicNotFoundError、何も保存しない）
2. メッセージを保存（失敗したら通知もしない）
3. トピックに通知設定があれば TelegramCredential にデコード
   （失敗したら warning を出して通知しない。受け付け自体は成功）
   設定が JSON オブジェクトでない場合も同様
4. NotificationDispatcher に送信を登録し、結果は待たずに返る
   （登録自体に失敗してもログのみ。保存済みのメッセージは取り消さない）

メッセージの保存が Telegram 側の可用性に左右されないことが、この層の一番の約束事。
"""

from __future__ import annotations

import logging
from typing import Any, List
from uuid import UUID

from pydantic import ValidationError

from app.notifications.dispatcher import NotificationDispatcher
from app.storage.repository import SqlStorage, TopicNotFoundError
from app.storage.schemas import MessageRecord, TopicRecord
from app.telegram.schemas import TelegramCredential
from app.topics.service import TopicRegistry

logger = logging.getLogger(__name__)


class MessageIngestor:
    """
    トピック宛てメッセージの保存と、通知送信の起動を行うサービス。
    """

    def __init__(
        self,
        storage: SqlStorage,
        registry: TopicRegistry,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._storage = storage
        self._registry = registry
        self._dispatcher = dispatcher

    def ingest(self, topic_id: UUID, contacts: Any, text: str) -> MessageRecord:
        """
        メッセージを 1件受け付ける。

        戻った時点でメッセージはコミット済みで、一覧から参照できる。

        :raises TopicNotFoundError: トピックが存在しない場合。
        :raises StorageError: 参照・保存に失敗した場合。
        """
        topic = self._registry.get_topic(topic_id)
        if topic is None:
            raise TopicNotFoundError(topic_id)

        message = self._storage.create_message(topic_id, contacts, text)

        if topic.can_notify:
            self._notify(topic, message)

        return message

    def list_messages(self, topic_id: UUID) -> List[MessageRecord]:
        """
        トピックのメッセージを新しい順に返す。

        :raises TopicNotFoundError: トピックが存在しない場合。
        """
        if self._registry.get_topic(topic_id) is None:
            raise TopicNotFoundError(topic_id)
        return self._storage.list_messages(topic_id)

    def _notify(self, topic: TopicRecord, message: MessageRecord) -> None:
        try:
            credential = TelegramCredential.model_validate(topic.notification_config)
        except ValidationError:
            logger.warning("Failed to parse notification config for Topic(id=%s).", topic.id)
            return

        # Future は待たない（送信結果はディスパッチャ側でログに出る）
        try:
            self._dispatcher.submit(credential, topic.name, message)
        except Exception:
            # メッセージは保存済みなので、登録失敗はログのみで受け付けは成功させる
            logger.exception("Failed to schedule notification for Message(id=%s).", message.id)
