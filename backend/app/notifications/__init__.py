# backend/app/notifications/__init__.py

"""
通知レイヤ用モジュール群。

メッセージ保存後に、トピックの Telegram 設定を使って 1件ずつ通知を送る。
送信はバックグラウンドで行い、結果はログに残すだけ。

構成:
- schemas: 送信状態・送信結果のスキーマ
- config: ワーカープールの設定
- dispatcher: 本文の組み立てと送信、結果のログ出力
- factory: アプリ全体で共有する NotificationDispatcher の生成
"""
