# backend/app/utils/config.py

"""
環境変数読み取り用のユーティリティ。
DB / Telegram / 通知ワーカー / アクセス制御の各設定から共通利用する。

どの設定も起動時に必須ではないため、未設定は常にデフォルト値で扱う。
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    環境変数を取得するヘルパー。

    :param name: 環境変数名
    :param default: 未設定（または空文字）の場合に返す値
    :return: 文字列値（未設定なら default）
    """
    value = os.getenv(name)

    if value is None or value == "":
        return default

    return value


def get_env_int(name: str, default: int) -> int:
    """
    整数の環境変数を取得する。

    未設定 or パース不能の場合は warning を出して default を返す。
    """
    raw = get_env(name)
    if raw is None:
        return default

    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r; using default %s.", name, raw, default)
        return default


def get_env_bool(name: str, default: bool = False) -> bool:
    """
    真偽値の環境変数を取得する（1/true/yes/on を True とみなす）。
    """
    raw = get_env(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")
