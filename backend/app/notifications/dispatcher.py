# backend/app/notifications/dispatcher.py

"""
通知ディスパッチャ。

メッセージの保存がコミットされた後に呼ばれ、Telegram への送信を
バックグラウンドのワーカープールに投げてすぐに戻る。

- 送信結果（成功 / 失敗）は呼び出し元に一切伝播しない
- 失敗はログに残すだけで、リトライも保存もしない
- 同一トピック宛ての通知同士の到着順は保証しない
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional, Protocol

from app.storage.schemas import MessageRecord
from app.telegram.client import TelegramConnectionError, TelegramHTTPError
from app.telegram.schemas import TelegramCredential

from .schemas import DeliveryFailureReason, DeliveryStatus, NotificationOutcome

logger = logging.getLogger(__name__)


class NotificationSender(Protocol):
    """
    通知送信の最小インターフェース（TelegramClient が実装する）。
    """

    def send_message(self, credential: TelegramCredential, text: str) -> Dict[str, Any]:  # pragma: no cover - Protocol
        ...


def format_notification_body(topic_name: str, message: MessageRecord) -> str:
    """
    人間向けの通知本文を組み立てる。

    contacts は任意の JSON 値なので、JSON 文字列としてそのまま埋め込む。
    """
    try:
        contacts = json.dumps(message.contacts, ensure_ascii=False)
    except (TypeError, ValueError):
        contacts = ""
    return f"Topic: {topic_name}\nText: {message.text}\nContacts: {contacts}"


class NotificationDispatcher:
    """
    メッセージ 1件につき 1回だけ通知を送るディスパッチャ。

    submit() は送信処理を ThreadPoolExecutor に登録して即座に Future を返す。
    呼び出し側（MessageIngestor）はこの Future を待たない。
    """

    def __init__(
        self,
        sender: NotificationSender,
        *,
        max_workers: int = 4,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._sender = sender
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="notification",
        )

    # ---- 公開 API ------------------------------------------------------

    def submit(
        self,
        credential: TelegramCredential,
        topic_name: str,
        message: MessageRecord,
    ) -> Future:
        """
        通知送信をバックグラウンドに登録する（ノンブロッキング）。
        """
        logger.debug(
            "Message(id=%s) notification %s.", message.id, DeliveryStatus.NOT_ATTEMPTED.value
        )
        return self._executor.submit(self._run, credential, topic_name, message)

    def dispatch(
        self,
        credential: TelegramCredential,
        topic_name: str,
        message: MessageRecord,
    ) -> NotificationOutcome:
        """
        通知を 1回だけ送信し、終端状態を NotificationOutcome として返す。

        例外は投げない（TelegramClientError はすべて結果に変換する）。
        """
        body = format_notification_body(topic_name, message)
        logger.debug("Message(id=%s) notification %s.", message.id, DeliveryStatus.SENDING.value)

        try:
            self._sender.send_message(credential, body)
        except TelegramConnectionError as exc:
            logger.error(
                "Message(id=%s) sending failed. Failed send request: %s", message.id, exc
            )
            return NotificationOutcome(
                message_id=message.id,
                status=DeliveryStatus.TRANSPORT_FAILED,
                reason=DeliveryFailureReason.TRANSPORT,
                detail=str(exc),
            )
        except TelegramHTTPError as exc:
            if exc.detail is None:
                logger.error(
                    "Message(id=%s) sending failed. Failed get response (status_code=%s).",
                    message.id,
                    exc.status_code,
                )
                return NotificationOutcome(
                    message_id=message.id,
                    status=DeliveryStatus.REJECTED,
                    reason=DeliveryFailureReason.RESPONSE_UNREADABLE,
                )
            logger.warning(
                "Message(id=%s) sending failed. status_code=%s response=%r",
                message.id,
                exc.status_code,
                exc.detail,
            )
            return NotificationOutcome(
                message_id=message.id,
                status=DeliveryStatus.REJECTED,
                reason=DeliveryFailureReason.REJECTED,
                detail=exc.detail,
            )

        logger.info("Message(id=%s) sent successfully.", message.id)
        return NotificationOutcome(message_id=message.id, status=DeliveryStatus.DELIVERED)

    def shutdown(self, wait: bool = True) -> None:
        """
        ワーカープールを停止する。wait=True なら実行中・待機中の送信が終わるまで待つ。
        """
        self._executor.shutdown(wait=wait)

    # ---- 内部 ----------------------------------------------------------

    def _run(
        self,
        credential: TelegramCredential,
        topic_name: str,
        message: MessageRecord,
    ) -> Optional[NotificationOutcome]:
        try:
            return self.dispatch(credential, topic_name, message)
        except Exception:  # noqa: BLE001 - 通知は本処理に影響させない
            logger.exception("Message(id=%s) notification crashed unexpectedly.", message.id)
            return None
