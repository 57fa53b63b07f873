"""
Application configuration.

Values come from environment variables (optionally loaded from a .env file).
`create_app` takes one of these classes, so tests can swap in an in-memory
database without touching the environment.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> list:
    return [o.strip() for o in raw.split(",") if o.strip()]


class Config:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///eventbook.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes")

    CORS_ORIGINS = _split_origins(
        os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5500,http://localhost:8080")
    )

    GATEWAY_PORT = int(os.getenv("GATEWAY_PORT", 5050))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    TESTING = False


class TestingConfig(Config):
    # Shared in-memory database (see Database for the pool setup)
    DATABASE_URL = "sqlite://"
    SQL_ECHO = False
    TESTING = True
