# backend/app/utils/logging_setup.py

"""
ロギング初期化。

httpx は INFO レベルでリクエスト URL をログに出すが、Telegram Bot API の URL には
Bot トークンがそのまま含まれる（.../bot<token>/sendMessage）。
そのためコンソールハンドラにはトークンを伏せ字にする Formatter を使う。
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from .config import get_env

_BOT_TOKEN_PATTERN = re.compile(r"/bot[^/\s]+/")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RedactingFormatter(logging.Formatter):
    """Bot トークンと既知のシークレットを *** に置き換える Formatter。"""

    def __init__(
        self,
        secrets: Iterable[str] = (),
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        # 長いものから置換して部分一致の取りこぼしを防ぐ
        self._secrets = sorted({s for s in secrets if s}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        message = _BOT_TOKEN_PATTERN.sub("/bot***/", message)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def configure_logging(level_name: Optional[str] = None) -> None:
    """
    ルートロガーにコンソールハンドラを設定する。

    LOG_LEVEL（デフォルト INFO）でレベルを切り替える。
    CONTACT_TOKEN が設定されていれば、それもログから伏せる。
    """
    level_name = (level_name or get_env("LOG_LEVEL", default="INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    secrets = [get_env("CONTACT_TOKEN") or ""]
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(RedactingFormatter(secrets, fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))

    logging.basicConfig(level=level, handlers=[handler])
