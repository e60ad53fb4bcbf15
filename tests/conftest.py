"""Root conftest — shared test configuration."""

import os

# The app module builds its settings at import: keep tests off any real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")
