# backend/app/telegram/client.py

"""
Telegram Bot API との通信を担当するクライアントモジュール。

- getMe: Bot トークンの生存確認（トピック作成時の認証情報チェック）
- sendMessage: 通知メッセージの送信
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .config import TelegramSettings, get_telegram_settings
from .schemas import TelegramCredential


class TelegramClientError(Exception):
    """Telegram クライアント全般の基底例外。"""


class TelegramConnectionError(TelegramClientError):
    """接続エラー・タイムアウトなど、API に到達できなかった場合の例外。"""


class TelegramHTTPError(TelegramClientError):
    """
    HTTP ステータスコードが 2xx 以外だった場合の例外。

    detail は Telegram が返したエラー内容（description もしくは本文）。
    本文を読み取れなかった場合は None。
    """

    def __init__(self, status_code: int, detail: Optional[str] = None) -> None:
        super().__init__(f"Telegram API error: status_code={status_code}")
        self.status_code = status_code
        self.detail = detail


def _extract_error_detail(response: httpx.Response) -> Optional[str]:
    """
    エラーレスポンスから人間が読める説明を取り出す。

    Telegram は {"ok": false, "error_code": 400, "description": "..."} を返すので
    description を優先し、JSON でなければ本文テキストをそのまま使う。
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    except httpx.StreamError:
        return None

    if isinstance(body, dict) and isinstance(body.get("description"), str):
        return body["description"]

    try:
        text = response.text.strip()
    except httpx.StreamError:
        return None
    return text or None


class TelegramClient:
    """
    Telegram Bot API の薄いラッパークライアント。

    Bot トークンはトピックごとに異なるため、インスタンスには持たせず
    呼び出しごとに TelegramCredential を受け取る。
    """

    def __init__(self, settings: TelegramSettings | None = None) -> None:
        self._settings = settings or get_telegram_settings()

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    @property
    def timeout(self) -> int:
        return self._settings.timeout_seconds

    def _endpoint(self, credential: TelegramCredential, method: str) -> str:
        return f"{self.base_url}{credential.api_key}/{method}"

    def check_liveness(self, credential: TelegramCredential) -> bool:
        """
        getMe を呼び出し、Bot トークンが有効かを確認する。

        :return: 2xx なら True、それ以外のステータスなら False。
        :raises TelegramConnectionError: 接続エラーやタイムアウト時。
            「トークンが無効」とは区別して扱えるよう、False にはしない。
        """
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(self._endpoint(credential, "getMe"))
        except httpx.RequestError as exc:
            raise TelegramConnectionError(f"Failed to call getMe: {exc}") from exc

        return response.is_success

    def send_message(self, credential: TelegramCredential, text: str) -> Dict[str, Any]:
        """
        sendMessage で 1件送信する。

        :raises TelegramConnectionError: 接続エラーやタイムアウト時。
        :raises TelegramHTTPError: Telegram が 2xx 以外を返した場合。
        :return: Telegram からの JSON レスポンス（成功時）。
        """
        payload = {"chat_id": credential.chat_id, "text": text}

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self._endpoint(credential, "sendMessage"), json=payload)
        except httpx.RequestError as exc:
            raise TelegramConnectionError(f"Failed to call sendMessage: {exc}") from exc

        if not response.is_success:
            raise TelegramHTTPError(
                status_code=response.status_code,
                detail=_extract_error_detail(response),
            )

        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}
