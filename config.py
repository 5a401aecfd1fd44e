import os

LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///inventory.db")
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_recycle": 300,
        "pool_pre_ping": True,
    }
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # Request bodies are small JSON documents

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", 3001))
    DEBUG = os.environ.get("FLASK_DEBUG", "").lower() in ("1", "true", "yes")
