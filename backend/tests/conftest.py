"""Root conftest — shared test configuration."""

import os

# Settings are read at import time by app.main; tests never need a real secret or database
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STATIC_DIR", "web-not-present-in-tests")
