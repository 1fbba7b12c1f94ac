"""Domain types shared by the catalog, the tracker and the views."""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

PLACEHOLDER_COVER_URL = "https://via.placeholder.com/150"

DEFAULT_TITLE = "No Title"
DEFAULT_AUTHOR = "Unknown Author"
DEFAULT_YEAR = "Unknown Year"
DEFAULT_DESCRIPTION = "No description available"

MANUAL_DEFAULT_YEAR = "Not specified"
MANUAL_DEFAULT_DESCRIPTION = "No description"


class ReadingStatus(Enum):
    """Reading status of a book."""

    WANT_TO_READ = "want-to-read"
    READ = "read"

    @classmethod
    def initial(cls) -> "ReadingStatus":
        """Status of a book that has never been toggled."""
        return cls.WANT_TO_READ

    def toggled(self) -> "ReadingStatus":
        if self is ReadingStatus.READ:
            return ReadingStatus.WANT_TO_READ
        return ReadingStatus.READ

    @property
    def label(self) -> str:
        if self is ReadingStatus.READ:
            return "✅ Already Read"
        return "📖 Want to Read"


class ActionResult(Enum):
    """Outcome of a tracker action, mapped to a notice by the views."""

    SUCCESS = "success"
    DUPLICATE = "duplicate"
    VALIDATION_FAILED = "validation-failed"
    EMPTY_QUERY = "empty-query"
    NETWORK_ERROR = "network-error"
    NO_RESULTS = "no-results"
    NOT_FOUND = "not-found"
    STALE = "stale"


@dataclass(frozen=True)
class Book:
    """A normalized book record."""

    id: str
    title: str = DEFAULT_TITLE
    author: str = DEFAULT_AUTHOR
    year: str = DEFAULT_YEAR
    description: str = DEFAULT_DESCRIPTION
    cover_image: str = PLACEHOLDER_COVER_URL


@dataclass
class BookDraft:
    """Contents of the manual-entry form."""

    title: str = ""
    author: str = ""
    year: str = ""
    description: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "BookDraft":
        return cls(
            title=(form.get("title", "") or "").strip(),
            author=(form.get("author", "") or "").strip(),
            year=(form.get("year", "") or "").strip(),
            description=(form.get("description", "") or "").strip(),
        )

    def is_complete(self) -> bool:
        """Title and author are the only required fields."""
        return bool(self.title.strip()) and bool(self.author.strip())

    def to_book(self, book_id: str, cover_image: Optional[str] = None) -> Book:
        return Book(
            id=book_id,
            title=self.title.strip(),
            author=self.author.strip(),
            year=self.year.strip() or MANUAL_DEFAULT_YEAR,
            description=self.description.strip() or MANUAL_DEFAULT_DESCRIPTION,
            cover_image=cover_image or PLACEHOLDER_COVER_URL,
        )
