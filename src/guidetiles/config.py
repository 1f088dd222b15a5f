"""Local configuration for guidetiles."""

from __future__ import annotations

import os


DEFAULT_BUDGET_CHARS = 1500
DEFAULT_SENTENCE_THRESHOLD = 2
DEFAULT_LENGTH_THRESHOLD = 100
DEFAULT_CONTAINER_OPEN = '<div class="feature-box">'
DEFAULT_CONTAINER_CLOSE = "</div>"
DEFAULT_INTRO_HEADINGS = "Overview"
DEFAULT_GUIDES_TABLE = "guides"
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "guidetiles/0.1"
DEFAULT_CONCURRENCY = 4
DEFAULT_LOG_LEVEL = "INFO"

# Transform defaults. Callers may still override each one through TileOptions.
GUIDETILES_BUDGET_CHARS = int(os.getenv("GUIDETILES_BUDGET_CHARS", str(DEFAULT_BUDGET_CHARS)))
GUIDETILES_SENTENCE_THRESHOLD = int(os.getenv("GUIDETILES_SENTENCE_THRESHOLD", str(DEFAULT_SENTENCE_THRESHOLD)))
GUIDETILES_LENGTH_THRESHOLD = int(os.getenv("GUIDETILES_LENGTH_THRESHOLD", str(DEFAULT_LENGTH_THRESHOLD)))
GUIDETILES_CONTAINER_OPEN = os.getenv("GUIDETILES_CONTAINER_OPEN", DEFAULT_CONTAINER_OPEN)
GUIDETILES_CONTAINER_CLOSE = os.getenv("GUIDETILES_CONTAINER_CLOSE", DEFAULT_CONTAINER_CLOSE)
GUIDETILES_INTRO_HEADINGS = tuple(
    name.strip() for name in os.getenv("GUIDETILES_INTRO_HEADINGS", DEFAULT_INTRO_HEADINGS).split(",") if name.strip()
)

# Hosted backend (PostgREST) holding the guides table.
SUPABASE_URL = os.getenv("SUPABASE_URL", os.getenv("VITE_SUPABASE_URL", "")).rstrip("/")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
GUIDETILES_GUIDES_TABLE = os.getenv("GUIDETILES_GUIDES_TABLE", DEFAULT_GUIDES_TABLE)
GUIDETILES_FETCH_TIMEOUT_S = float(os.getenv("GUIDETILES_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
GUIDETILES_FETCH_MAX_RETRIES = int(os.getenv("GUIDETILES_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
GUIDETILES_FETCH_BACKOFF_S = float(os.getenv("GUIDETILES_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
GUIDETILES_USER_AGENT = os.getenv("GUIDETILES_USER_AGENT", DEFAULT_USER_AGENT)
GUIDETILES_CONCURRENCY = int(os.getenv("GUIDETILES_CONCURRENCY", str(DEFAULT_CONCURRENCY)))
GUIDETILES_LOG_LEVEL = os.getenv("GUIDETILES_LOG_LEVEL", DEFAULT_LOG_LEVEL)
