# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS

- Used by pytest (see pyproject.toml) and by `manage.py test --settings=backend.settings.test`.
- SQLite test DB is file-backed (see base.py) so threaded checkout tests get real,
  independently locking connections.
"""

from __future__ import annotations

from .base import *  # noqa: F403

DEBUG = False

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Keep retry behaviour deterministic in tests.
ORDER_COMMIT_CONFLICT_RETRIES = 2

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
