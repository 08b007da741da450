# backend/app/__init__.py
"""
Business ideas backend application package.

This package contains:
- main: FastAPI application entrypoint
- storage: topic / message persistence (SQLAlchemy)
- telegram: Telegram Bot API client (getMe / sendMessage)
- topics: topic creation with notification credential check
- messages: message ingestion and listing
- notifications: background notification dispatch
"""
