"""Root conftest — shared test configuration."""

import os

# Tests never reach a real database or bucket unless a fixture builds one
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
