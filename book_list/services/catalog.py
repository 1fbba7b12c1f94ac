"""Google Books catalog search and normalization into Book records."""

import html
import logging
from typing import Any, Dict, List, Optional

import requests

from book_list import config
from book_list.models import (
    DEFAULT_AUTHOR,
    DEFAULT_DESCRIPTION,
    DEFAULT_TITLE,
    DEFAULT_YEAR,
    Book,
)

logger = logging.getLogger("book_list")

# Shared session for connection pooling and consistent headers.
_session: Optional[requests.Session] = None


class CatalogError(Exception):
    """Raised when the catalog can not be reached or returns unusable data."""


def _get_session() -> requests.Session:
    """Get or create a shared requests session with a proper User-Agent."""
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update(
            {
                "User-Agent": "BookList/1.0 (personal reading list)",
            }
        )
    return _session


def _upgrade_image_url(url: Optional[str]) -> Optional[str]:
    """Serve Google Books thumbnails over HTTPS without the page-curl effect."""
    if not url:
        return None
    url = url.replace("http://", "https://")
    return url.replace("&edge=curl", "")


def parse_catalog_item(item: Dict[str, Any]) -> Book:
    """Normalize a single Google Books volume into a Book.

    Every field is optional in the payload and falls back to a default.
    """
    info = item.get("volumeInfo") or {}
    image_links = info.get("imageLinks") or {}

    title = info.get("title")
    authors = [a for a in (info.get("authors") or []) if a]
    thumbnail = _upgrade_image_url(
        image_links.get("thumbnail") or image_links.get("smallThumbnail")
    )

    return Book(
        id=str(item.get("id") or ""),
        title=html.unescape(title) if title else DEFAULT_TITLE,
        author=", ".join(authors) if authors else DEFAULT_AUTHOR,
        year=info.get("publishedDate") or DEFAULT_YEAR,
        description=info.get("description") or DEFAULT_DESCRIPTION,
        cover_image=thumbnail or config.PLACEHOLDER_COVER_URL,
    )


def parse_catalog_response(payload: Dict[str, Any]) -> List[Book]:
    """Normalize every item of a volumes response.

    Google Books omits ``items`` entirely when nothing matched. Items without
    an ``id`` are skipped.
    """
    books = []
    for item in payload.get("items") or []:
        if not isinstance(item, dict):
            continue
        if not item.get("id"):
            title = (item.get("volumeInfo") or {}).get("title")
            logger.warning(f"Skipping catalog item without id: {title}")
            continue
        books.append(parse_catalog_item(item))
    return books


def search_catalog(query: str, max_results: Optional[int] = None) -> List[Book]:
    """Search the remote catalog and return normalized books.

    Args:
        query: Free-text search query.
        max_results: Result cap, defaults to the configured value (6).

    Returns:
        Up to ``max_results`` books, possibly none.

    Raises:
        CatalogError: on any network, HTTP or decoding failure.
    """
    session = _get_session()
    params: Dict[str, str] = {
        "q": query,
        "maxResults": str(max_results or config.CATALOG_MAX_RESULTS),
    }
    if config.GOOGLE_BOOKS_API_KEY:
        params["key"] = config.GOOGLE_BOOKS_API_KEY

    logger.debug(f"Catalog search for '{query}'")
    try:
        response = session.get(
            config.CATALOG_API_URL, params=params, timeout=config.CATALOG_TIMEOUT
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        raise CatalogError(f"Catalog search failed for '{query}': {e}") from e

    if not isinstance(payload, dict):
        raise CatalogError(f"Unexpected catalog response for '{query}'")

    books = parse_catalog_response(payload)
    logger.debug(f"Catalog returned {len(books)} books for '{query}'")
    return books
