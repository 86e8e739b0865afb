"""Root conftest — shared test configuration."""

import os

# Ensure tests never touch a developer's local invoices.db
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
