"""
Validators deciding whether a decoded payload may create or update a book.

Checks run in a fixed order (status, author, title, identifier) and stop
at the first failure, so a payload with several problems always reports
the same reason.
"""

from .errors import ValidationError
from .models import BookPayload, BookStatus

VALID_STATUSES = frozenset(status.value for status in BookStatus)

INVALID_STATUS = "invalid status"
MISSING_AUTHOR = "missing author"
MISSING_TITLE = "missing title"
IDENTIFIER_SUPPLIED = "identifier must not be supplied"
ONLY_STATUS = "only status may be provided"


def validate_for_create(candidate: BookPayload) -> None:
    """
    Accept a payload for the create operation or raise ValidationError.

    A new book needs a valid status, an author and a title, and must not
    carry an identifier; identifiers are always generated server-side.
    """
    if candidate.status not in VALID_STATUSES:
        raise ValidationError(INVALID_STATUS)
    if not candidate.author:
        raise ValidationError(MISSING_AUTHOR)
    if not candidate.title:
        raise ValidationError(MISSING_TITLE)
    if candidate.id:
        raise ValidationError(IDENTIFIER_SUPPLIED)


def validate_for_update(candidate: BookPayload) -> None:
    """Accept a status-only payload for the update operation or raise ValidationError."""
    if candidate.status not in VALID_STATUSES:
        raise ValidationError(INVALID_STATUS)
    if candidate.author or candidate.title or candidate.id:
        raise ValidationError(ONLY_STATUS)
