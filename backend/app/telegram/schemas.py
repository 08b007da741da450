# backend/app/telegram/schemas.py

"""
Telegram 通知設定のスキーマ定義。

トピックには型なし JSON として保存され、送信直前に TelegramCredential へ
デコードされる。デコードに失敗したトピックはそのメッセージについて通知しない。
"""

from pydantic import BaseModel, ConfigDict, Field


class TelegramCredential(BaseModel):
    """
    トピック 1件分の Telegram 通知設定。

    ※ api_key は Bot トークンそのものなので、ログやレスポンスに出さないこと。
    """

    # chat_id は数値（-100...）で渡されることも多い
    model_config = ConfigDict(coerce_numbers_to_str=True)

    api_key: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Bot トークン（getMe / sendMessage の認証に使う）",
    )
    chat_id: str = Field(
        ...,
        min_length=1,
        description="送信先チャット ID。存在チェックのみ行う。",
    )
