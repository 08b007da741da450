# backend/app/messages/config.py

"""
メッセージ取得 API のアクセス制御設定。

CONTACT_TOKEN はプロセス起動時に一度だけ読み込み、以降は読み取り専用で共有する。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from app.utils.config import get_env


@dataclass(frozen=True)
class AccessSettings:
    """メッセージ一覧取得に必要な共有トークン。"""

    contact_token: Optional[str] = None


@lru_cache()
def get_access_settings() -> AccessSettings:
    """
    環境変数からアクセス設定を読み込む。

    任意:
      - CONTACT_TOKEN（未設定の場合、メッセージ一覧 API は 500 を返す）
    """
    return AccessSettings(contact_token=get_env("CONTACT_TOKEN"))
