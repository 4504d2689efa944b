"""
Query engine for book listings.

A listing is computed from a store snapshot in three fixed steps:
filter by status, sort by title, then paginate by offset and limit.
The whole result is computed, or a single RangeError raised, before
anything is handed back to the caller.
"""

import re
from enum import Enum
from operator import attrgetter
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from .errors import RangeError
from .models import Book


class PaginationPolicy(str, Enum):
    """
    Bounds applied to offset and limit.

    STRICT accepts only 0 < value < length, so an offset of 0 and a limit
    equal to the remaining length are both rejected. INCLUSIVE accepts
    0 <= offset <= length and any non-negative limit.
    """
    STRICT = "strict"
    INCLUSIVE = "inclusive"


class BookQuery(BaseModel):
    """Parameters for a single listing request."""
    status: Optional[str] = Field(None, description="Exact status to keep")
    offset: Optional[int] = Field(None, description="Leading books to skip")
    limit: Optional[int] = Field(None, description="Maximum books to return")

    @classmethod
    def from_request(
        cls,
        status: Optional[str] = None,
        offset: Optional[str] = None,
        limit: Optional[str] = None
    ) -> "BookQuery":
        """
        Build a query from raw query-string values.

        Empty strings count as absent parameters.

        Raises:
            RangeError: If offset or limit is not an integer
        """
        return cls(
            status=status or None,
            offset=_parse_bound("offset", offset),
            limit=_parse_bound("limit", limit),
        )


def _parse_bound(name: str, raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    # ASCII digits only, no whitespace or underscores
    if not re.fullmatch(r"[+-]?[0-9]+", raw):
        raise RangeError(f"{name} must be an integer")
    return int(raw)


def filter_by_status(books: Sequence[Book], status: Optional[str]) -> List[Book]:
    """Keep books whose status equals status exactly; None keeps everything."""
    if status is None:
        return list(books)
    return [book for book in books if book.status.value == status]


def sort_by_title(books: Sequence[Book]) -> List[Book]:
    """Stable ascending sort by title."""
    return sorted(books, key=attrgetter("title"))


def _check_offset(offset: int, length: int, policy: PaginationPolicy) -> None:
    if policy is PaginationPolicy.STRICT:
        valid = 0 < offset < length
    else:
        valid = 0 <= offset <= length
    if not valid:
        raise RangeError(_bound_message("offset", policy))


def _check_limit(limit: int, length: int, policy: PaginationPolicy) -> None:
    if policy is PaginationPolicy.STRICT:
        valid = 0 < limit < length
    else:
        valid = limit >= 0
    if not valid:
        raise RangeError(_bound_message("limit", policy))


def _bound_message(name: str, policy: PaginationPolicy) -> str:
    if policy is PaginationPolicy.STRICT:
        return f"{name} must be greater than 0 and less than the number of books"
    return f"{name} must be a non-negative integer within the number of books"


def paginate(
    books: Sequence[Book],
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    policy: PaginationPolicy = PaginationPolicy.STRICT
) -> List[Book]:
    """
    Apply offset, then limit.

    Each bound is checked against the length of the sequence at the time
    its step runs, so limit is compared with what is left after the offset.
    An absent parameter skips its step entirely.

    Raises:
        RangeError: If a supplied offset or limit is out of bounds
    """
    result = list(books)
    if offset is not None:
        _check_offset(offset, len(result), policy)
        result = result[offset:]
    if limit is not None:
        _check_limit(limit, len(result), policy)
        result = result[:limit]
    return result


def run_query(
    books: Sequence[Book],
    query: BookQuery,
    policy: PaginationPolicy = PaginationPolicy.STRICT
) -> List[Book]:
    """Run the full filter, sort and paginate pipeline over a snapshot."""
    filtered = filter_by_status(books, query.status)
    ordered = sort_by_title(filtered)
    return paginate(ordered, query.offset, query.limit, policy)
