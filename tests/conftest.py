"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use; pin test values before any uptask import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("LOG_FORMAT", "text")
