"""Root conftest: settings need a database identity before any module imports.

Values from a local .env.test win; otherwise harmless placeholders are used.
No test opens a real connection.
"""
from __future__ import annotations

import os
from pathlib import Path

_DEFAULTS = {
    "POSTGRES_USER": "dashboard",
    "POSTGRES_PASSWORD": "dashboard",
    "POSTGRES_DB": "dm_dashboard_test",
    "REDIS_URL": "redis://localhost:6379/15",
}

_env_test = Path(__file__).resolve().parent / ".env.test"
if _env_test.exists():
    for line in _env_test.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip())

for _key, _value in _DEFAULTS.items():
    os.environ.setdefault(_key, _value)
