"""Per-session reading state: search results, personal list and status map."""

import logging
import threading
import time
import uuid
from typing import Callable, Dict, List, Optional

from book_list import config
from book_list.models import ActionResult, Book, BookDraft, ReadingStatus
from book_list.services.catalog import CatalogError

logger = logging.getLogger("book_list.tracker")

Fetcher = Callable[[str], List[Book]]


class BookTracker:
    """All in-memory state belonging to one browser session.

    Nothing here is persisted; records are only ever appended, never edited.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.search_results: List[Book] = []
        self.my_books: List[Book] = []
        self.statuses: Dict[str, ReadingStatus] = {}
        self.draft = BookDraft()
        self.last_query = ""
        self.initial_loaded = False
        self._clock = clock
        self._lock = threading.Lock()
        self._sequence = 0
        self._in_flight = 0
        self.last_seen = clock()

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def get_search_result(self, book_id: str) -> Optional[Book]:
        for book in self.search_results:
            if book.id == book_id:
                return book
        return None

    def get_my_book(self, book_id: str) -> Optional[Book]:
        for book in self.my_books:
            if book.id == book_id:
                return book
        return None

    # -----------------------------
    # Catalog search
    # -----------------------------

    def load_initial(self, fetch: Fetcher, query: str) -> ActionResult:
        """Populate search results on the first page view of a session."""
        self.initial_loaded = True
        result = self._fetch(fetch, query)
        if result is ActionResult.NETWORK_ERROR:
            logger.warning("Initial catalog load failed; starting with no results")
        return result

    def search(self, query: str, fetch: Fetcher) -> ActionResult:
        query = (query or "").strip()
        if not query:
            return ActionResult.EMPTY_QUERY
        self.last_query = query
        # A user search supersedes the default listing.
        self.initial_loaded = True
        return self._fetch(fetch, query)

    def _fetch(self, fetch: Fetcher, query: str) -> ActionResult:
        with self._lock:
            self._sequence += 1
            token = self._sequence
            self._in_flight += 1

        try:
            books = fetch(query)
        except CatalogError as e:
            logger.error(f"Error fetching books: {e}")
            return ActionResult.NETWORK_ERROR
        finally:
            with self._lock:
                self._in_flight -= 1

        with self._lock:
            if token < self._sequence:
                logger.warning(
                    f"Discarding stale results for '{query}' "
                    f"(request {token}, latest {self._sequence})"
                )
                return ActionResult.STALE
            if not books:
                logger.info(f"No catalog results for '{query}'")
                return ActionResult.NO_RESULTS
            self.search_results = list(books)

        logger.info(f"Loaded {len(books)} catalog results for '{query}'")
        return ActionResult.SUCCESS

    # -----------------------------
    # Personal list
    # -----------------------------

    def add_search_result(self, book_id: str) -> ActionResult:
        """Copy a book from the current search results into the personal list."""
        with self._lock:
            book = self.get_search_result(book_id)
            if book is None:
                return ActionResult.NOT_FOUND
            if self.get_my_book(book_id) is not None:
                return ActionResult.DUPLICATE
            self.my_books.append(book)
        logger.info(f"Added '{book.title}' ({book.id}) to personal list")
        return ActionResult.SUCCESS

    def add_manual_book(self, draft: BookDraft) -> ActionResult:
        with self._lock:
            if not draft.is_complete():
                self.draft = draft
                return ActionResult.VALIDATION_FAILED
            book = draft.to_book(self._new_book_id(), config.PLACEHOLDER_COVER_URL)
            self.my_books.append(book)
            self.draft = BookDraft()
        logger.info(f"Added manual book '{book.title}' ({book.id})")
        return ActionResult.SUCCESS

    def _new_book_id(self) -> str:
        """Millisecond timestamp, bumped past any identifier already in use."""
        taken = {book.id for book in self.my_books}
        candidate = int(self._clock() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    # -----------------------------
    # Reading status
    # -----------------------------

    def status_of(self, book_id: str) -> ReadingStatus:
        return self.statuses.get(book_id, ReadingStatus.initial())

    def toggle_status(self, book_id: str) -> ReadingStatus:
        with self._lock:
            status = self.status_of(book_id).toggled()
            self.statuses[book_id] = status
        logger.debug(f"Status of {book_id} is now {status.value}")
        return status


# -----------------------------
# Session registry
# -----------------------------

_trackers: Dict[str, BookTracker] = {}
_registry_lock = threading.Lock()


def new_tracker_id() -> str:
    return uuid.uuid4().hex


def _expire_trackers(now: float) -> None:
    """Drop idle trackers, then the least recently seen ones above the cap.

    Must be called with ``_registry_lock`` held.
    """
    expired = [
        tracker_id
        for tracker_id, tracker in _trackers.items()
        if tracker.last_seen + config.SESSION_TTL <= now
    ]
    for tracker_id in expired:
        del _trackers[tracker_id]

    overflow = len(_trackers) - config.MAX_SESSIONS + 1
    if overflow > 0:
        oldest = sorted(_trackers, key=lambda key: _trackers[key].last_seen)
        for tracker_id in oldest[:overflow]:
            del _trackers[tracker_id]
        expired.extend(oldest[:overflow])

    if expired:
        logger.info(f"Dropped {len(expired)} idle trackers, {len(_trackers)} remain")


def get_tracker_for(tracker_id: str, now: Optional[float] = None) -> BookTracker:
    """Get or create the tracker for a session identifier."""
    now = time.time() if now is None else now
    with _registry_lock:
        tracker = _trackers.get(tracker_id)
        if tracker is None:
            _expire_trackers(now)
            tracker = BookTracker()
            _trackers[tracker_id] = tracker
            logger.debug(f"Created tracker {tracker_id}")
        elif tracker.last_seen + config.SESSION_TTL <= now:
            # Expired sessions start over.
            tracker = BookTracker()
            _trackers[tracker_id] = tracker
            logger.debug(f"Replaced expired tracker {tracker_id}")
        tracker.last_seen = now
        return tracker


def reset_trackers() -> None:
    with _registry_lock:
        _trackers.clear()


def tracker_count() -> int:
    with _registry_lock:
        return len(_trackers)
