# backend/app/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- POST /topics: トピック作成（Telegram 通知設定の検証付き）
- POST /topics/{topic_id}/messages: メッセージ受け付け（保存後に通知をバックグラウンド送信）
- GET /topics/{topic_id}/messages: メッセージ一覧（Bearer トークン必須）
"""

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from app.messages.config import get_access_settings
from app.messages.router import router as messages_router
from app.state import get_message_ingestor, reset_state
from app.topics.router import router as topics_router
from app.utils.logging_setup import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    起動時に共有インスタンス（DB エンジン・通知ワーカープール）を生成し、
    終了時に実行中の通知送信を待ってから破棄する。
    """
    get_access_settings()
    get_message_ingestor()
    yield
    reset_state()


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - トピック / メッセージ エンドポイント
    - ヘルスチェックエンドポイント (/health, /ping)
    """
    load_dotenv()
    configure_logging()

    app = FastAPI(title="Business Ideas Backend", lifespan=lifespan)

    # ルーター登録
    app.include_router(topics_router)
    app.include_router(messages_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    @app.get("/ping", tags=["health"], response_class=PlainTextResponse)
    def ping() -> str:
        return "pong"

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
