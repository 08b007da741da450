"""
トピック管理モジュール。

- schemas: POST /topics のリクエスト / レスポンス
- service: TopicRegistry（通知設定の検証付き作成・参照）
- router: /topics エンドポイント
"""
