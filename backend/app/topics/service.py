# backend/app/topics/service.py

"""
トピックの登録・参照を担当するサービス層。

- 通知設定なし: そのまま作成
- 通知設定あり: Bot トークンの生存確認に通ったときだけ作成
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol
from uuid import UUID

from app.storage.repository import SqlStorage
from app.storage.schemas import TopicRecord
from app.telegram.client import TelegramConnectionError
from app.telegram.schemas import TelegramCredential

logger = logging.getLogger(__name__)


class CredentialValidator(Protocol):
    """認証情報の生存確認インターフェース（TelegramClient が実装する）。"""

    def check_liveness(self, credential: TelegramCredential) -> bool:  # pragma: no cover - Protocol
        ...


class CredentialRejectedError(Exception):
    """
    通知設定の検証に失敗したためトピック作成を拒否した場合の例外。

    reason:
      - "invalid": getMe が 2xx 以外を返した（トークン無効）
      - "unreachable": getMe 自体が失敗した（接続エラー・タイムアウト）

    いずれも API としては 400 を返すが、運用上の切り分けのため理由は区別して持つ。
    """

    INVALID = "invalid"
    UNREACHABLE = "unreachable"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Notification credential rejected: {reason}")
        self.reason = reason


class TopicRegistry:
    """
    トピックの作成と参照。

    通知設定はトピック作成時に一度だけ検証し、以降メッセージごとの再検証はしない。
    """

    def __init__(self, storage: SqlStorage, validator: CredentialValidator) -> None:
        self._storage = storage
        self._validator = validator

    def create_topic(
        self,
        name: str,
        notification_config: Optional[TelegramCredential] = None,
    ) -> TopicRecord:
        """
        トピックを作成する。

        :raises CredentialRejectedError: 通知設定の検証に失敗した場合（トピックは作成されない）。
        :raises StorageError: 保存に失敗した場合。
        """
        if notification_config is None:
            return self._storage.create_topic(name, None)

        self._ensure_live(name, notification_config)

        topic = self._storage.create_topic(name, notification_config.model_dump())
        logger.info("Topic(id=%s) created with Telegram notification.", topic.id)
        return topic

    def get_topic(self, topic_id: UUID) -> Optional[TopicRecord]:
        """トピックを参照する。存在しない場合は None（エラーではない）。"""
        return self._storage.get_topic(topic_id)

    def _ensure_live(self, name: str, credential: TelegramCredential) -> None:
        try:
            is_live = self._validator.check_liveness(credential)
        except TelegramConnectionError as exc:
            logger.warning(
                "Rejected notification config for topic %r: liveness check failed: %s", name, exc
            )
            raise CredentialRejectedError(CredentialRejectedError.UNREACHABLE) from exc

        if not is_live:
            logger.warning("Rejected notification config for topic %r: credential is invalid.", name)
            raise CredentialRejectedError(CredentialRejectedError.INVALID)
