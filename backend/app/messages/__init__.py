"""
メッセージ受け付け・一覧モジュール。

- config: 一覧 API 用の共有トークン設定
- auth: Bearer トークン認証の依存関数
- schemas: リクエスト / レスポンス
- service: MessageIngestor（保存 → 通知の起動）
- router: /topics/{topic_id}/messages エンドポイント
"""
