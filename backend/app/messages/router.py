# backend/app/messages/router.py

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.messages.auth import require_contact_token
from app.messages.schemas import CreateMessageRequest, MessageResponse
from app.messages.service import MessageIngestor
from app.state import get_message_ingestor
from app.storage.repository import RecordNotFoundError, StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/topics/{topic_id}/messages", tags=["messages"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="トピックにメッセージを投稿",
)
def create_message(
    topic_id: UUID,
    body: CreateMessageRequest,
    ingestor: MessageIngestor = Depends(get_message_ingestor),
) -> Response:
    """
    メッセージ受け付けエンドポイント。

    - 保存できた時点で 201（Telegram 通知の成否は待たない）
    - トピックが存在しない → 404 Not Found
    - トピックの参照・保存に失敗 → 500 Internal Server Error
    """
    try:
        ingestor.ingest(topic_id, body.contacts, body.text)
    except RecordNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Topic not found.",
        ) from exc
    except StorageError as exc:
        logger.error("Failed create_message for Topic(id=%s): %s", topic_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store message.",
        ) from exc

    return Response(status_code=status.HTTP_201_CREATED)


@router.get(
    "",
    response_model=List[MessageResponse],
    dependencies=[Depends(require_contact_token)],
    summary="トピックのメッセージ一覧（新しい順）",
)
def list_messages(
    topic_id: UUID,
    ingestor: MessageIngestor = Depends(get_message_ingestor),
) -> List[MessageResponse]:
    """
    メッセージ一覧取得エンドポイント（Bearer トークン必須）。

    - トークンなし / 不一致 → 401
    - トピックが存在しない / 参照に失敗 → 404
    """
    try:
        messages = ingestor.list_messages(topic_id)
    except StorageError as exc:
        logger.error("Failed list_messages for Topic(id=%s): %s", topic_id, exc)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Messages not found.",
        ) from exc

    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]
