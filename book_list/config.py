"""Application configuration read from the environment."""

import logging
import os

from dotenv import load_dotenv

from book_list.models import PLACEHOLDER_COVER_URL as _PLACEHOLDER_COVER_URL

load_dotenv()

SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")

CATALOG_API_URL = os.environ.get(
    "CATALOG_API_URL", "https://www.googleapis.com/books/v1/volumes"
)
# Google Books allows up to 40; the page shows a single row of cards.
CATALOG_MAX_RESULTS = int(os.environ.get("CATALOG_MAX_RESULTS", "6"))
CATALOG_TIMEOUT = float(os.environ.get("CATALOG_TIMEOUT", "10"))
GOOGLE_BOOKS_API_KEY = os.environ.get("GOOGLE_BOOKS_API_KEY") or None

# Query used to populate the page on the first visit of a session.
DEFAULT_QUERY = os.environ.get("DEFAULT_QUERY", "programming")

# Idle sessions are dropped after SESSION_TTL seconds; at most MAX_SESSIONS
# trackers are kept in memory.
SESSION_TTL = int(os.environ.get("SESSION_TTL", str(6 * 3600)))
MAX_SESSIONS = int(os.environ.get("MAX_SESSIONS", "1000"))

PLACEHOLDER_COVER_URL = os.environ.get(
    "PLACEHOLDER_COVER_URL", _PLACEHOLDER_COVER_URL
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
FLASK_DEBUG = os.environ.get("FLASK_DEBUG", "False").lower() == "true"


def configure_logging() -> None:
    """Configure the root logger at the configured level."""
    level = getattr(logging, LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
