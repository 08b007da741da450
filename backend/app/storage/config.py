# backend/app/storage/config.py

"""
永続化レイヤの設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache

from app.utils.config import get_env, get_env_bool


@dataclass(frozen=True)
class DatabaseSettings:
    """DB 接続用の設定値コンテナ。"""

    url: str
    echo: bool = False


@lru_cache()
def get_database_settings() -> DatabaseSettings:
    """
    環境変数から DB 設定を読み込む。

    任意:
      - DATABASE_URL  (デフォルト: sqlite:///./business_ideas.db)
      - DATABASE_ECHO (デフォルト: false)
    """
    url = get_env("DATABASE_URL", default="sqlite:///./business_ideas.db")
    return DatabaseSettings(url=url, echo=get_env_bool("DATABASE_ECHO"))
