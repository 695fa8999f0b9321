"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or accept real tokens
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("AUTH_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("LOG_FORMAT", "text")
