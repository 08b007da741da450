# backend/app/storage/session.py

"""
SQLAlchemy エンジン / セッションファクトリの生成。

- エンジンはコネクションプールを持ち、複数リクエストから同時に使ってよい
- SQLite の場合は外部キー制約がデフォルト無効なので接続ごとに PRAGMA で有効化する
- sqlite:// （インメモリ）の場合は StaticPool で単一コネクションを共有する（テスト用）
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DatabaseSettings, get_database_settings

logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # noqa: ARG001
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Optional[DatabaseSettings] = None) -> Engine:
    """
    設定値から Engine を生成する。

    :param settings: 省略時は環境変数から読み込んだ DatabaseSettings を使う
    """
    settings = settings or get_database_settings()
    kwargs: Dict[str, Any] = {"echo": settings.echo}

    if _is_sqlite(settings.url):
        # FastAPI の sync エンドポイントはスレッドプールで動くため
        kwargs["connect_args"] = {"check_same_thread": False}
        if settings.url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(settings.url, **kwargs)

    if _is_sqlite(settings.url):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    logger.info("Database engine created (dialect=%s).", engine.dialect.name)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Engine に紐づくセッションファクトリを返す。

    expire_on_commit=False にして、commit 後も ORM オブジェクトの属性を読めるようにする。
    """
    return sessionmaker(bind=engine, expire_on_commit=False)
