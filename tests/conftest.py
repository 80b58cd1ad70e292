"""
Shared test setup.

Settings are read lazily through get_settings(), but appsimple.main builds the
app at import time, so the environment must be populated before any test
module imports it. An in-memory SQLite URL keeps the default engine off disk.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "dev")
