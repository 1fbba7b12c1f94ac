from typing import Optional

from book_list.models import DEFAULT_DESCRIPTION

DESCRIPTION_PREVIEW_LENGTH = 100


def truncate_description(
    description: Optional[str], limit: int = DESCRIPTION_PREVIEW_LENGTH
) -> str:
    """Shorten a description for display on a book card.

    Examples: a 250 character description becomes its first 100 characters
    followed by '...'; anything up to 100 characters is returned unchanged.
    """
    if not description:
        return DEFAULT_DESCRIPTION
    if len(description) > limit:
        return description[:limit] + "..."
    return description
