# backend/app/topics/router.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.state import get_topic_registry
from app.storage.repository import StorageError
from app.topics.schemas import CreateTopicRequest, CreateTopicResponse
from app.topics.service import CredentialRejectedError, TopicRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/topics", tags=["topics"])


@router.post(
    "",
    response_model=CreateTopicResponse,
    status_code=status.HTTP_201_CREATED,
    summary="トピックを作成",
    description="notification_config を指定した場合は Bot トークンの生存確認に通ったときだけ作成する。",
)
def create_topic(
    body: CreateTopicRequest,
    registry: TopicRegistry = Depends(get_topic_registry),
) -> CreateTopicResponse:
    """
    トピック作成エンドポイント。

    - 通知設定の検証失敗（無効・到達不能どちらも） → 400 Bad Request
    - 保存失敗 → 500 Internal Server Error
    """
    try:
        topic = registry.create_topic(body.name, body.notification_config)
    except CredentialRejectedError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Notification credential check failed.",
        ) from exc
    except StorageError as exc:
        logger.error("Failed create_topic: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create topic.",
        ) from exc

    return CreateTopicResponse(id=topic.id)
