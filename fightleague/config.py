"""
Settings for the season scheduler, read from environment variables with defaults.
"""
from __future__ import annotations

import os


def _get_int(key: str, default: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# League configuration defaults
DEFAULT_POINTS_PER_WIN = _get_int("DEFAULT_POINTS_PER_WIN", 3)
# Upper bound on roster size accepted over HTTP
MAX_FIGHTERS_PER_DIVISION = _get_int("MAX_FIGHTERS_PER_DIVISION", 16)

CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if o.strip()
]
