# backend/app/messages/auth.py

"""
メッセージ一覧取得用の Bearer トークン認証。
"""

import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import AccessSettings, get_access_settings

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def require_contact_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    settings: AccessSettings = Depends(get_access_settings),
) -> None:
    """
    Authorization: Bearer <token> が CONTACT_TOKEN と一致するか確認する。

    - ヘッダなし / 不一致 → 401 Unauthorized
    - CONTACT_TOKEN 未設定 → 500（設定漏れ）
    """
    if not settings.contact_token:
        logger.error("CONTACT_TOKEN is not configured; message listing is unavailable.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Contact token is not configured.",
        )

    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode("utf-8"),
        settings.contact_token.encode("utf-8"),
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )
