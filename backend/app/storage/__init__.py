"""
永続化レイヤ。

- config: DB 接続設定（DATABASE_URL など）
- models: SQLAlchemy ORM モデル（topic / message）
- schemas: 上位レイヤに返すレコードモデル
- session: Engine / セッションファクトリの生成
- repository: トピック / メッセージの CRUD
"""

from .repository import (  # noqa: F401
    RecordNotFoundError,
    SqlStorage,
    StorageError,
    TopicNotFoundError,
    init_db,
)
from .schemas import MessageRecord, TopicRecord  # noqa: F401
