"""
In-memory record store for books.
"""

import threading
from typing import Dict, List, Optional

import structlog

from .errors import NotFoundError
from .models import Book

logger = structlog.get_logger(__name__)


class BookStore:
    """
    Keyed collection of books, the single source of truth for the catalog.

    Every operation takes the same lock, so the store can be shared
    between request handlers running on different threads. Snapshots are
    plain list copies and may be processed without holding the lock.
    """

    def __init__(self):
        self._books: Dict[str, Book] = {}
        self._lock = threading.Lock()

    def insert(self, book: Book) -> None:
        """
        Add a new book.

        Args:
            book: Book with a freshly generated identifier

        Raises:
            ValueError: If the identifier is empty or already taken
        """
        if not book.id:
            raise ValueError("Cannot insert a book without an identifier")
        with self._lock:
            if book.id in self._books:
                raise ValueError(f"Book identifier '{book.id}' is already in use")
            self._books[book.id] = book
        logger.debug("Book inserted", book_id=book.id)

    def fetch(self, book_id: str) -> Optional[Book]:
        with self._lock:
            return self._books.get(book_id)

    def replace(self, book_id: str, book: Book) -> None:
        """
        Overwrite the book stored under book_id.

        Raises:
            NotFoundError: If no book is stored under book_id
            ValueError: If the replacement carries a different identifier
        """
        if book.id != book_id:
            raise ValueError("Replacement book must keep its identifier")
        with self._lock:
            if book_id not in self._books:
                raise NotFoundError("book does not exist")
            self._books[book_id] = book
        logger.debug("Book replaced", book_id=book_id)

    def delete(self, book_id: str) -> Book:
        """
        Remove and return the book stored under book_id.

        Raises:
            NotFoundError: If no book is stored under book_id
        """
        with self._lock:
            try:
                book = self._books.pop(book_id)
            except KeyError:
                raise NotFoundError("book does not exist") from None
        logger.debug("Book deleted", book_id=book_id)
        return book

    def snapshot(self) -> List[Book]:
        """Return all books in unspecified order."""
        with self._lock:
            return list(self._books.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    def __contains__(self, book_id: object) -> bool:
        with self._lock:
            return book_id in self._books
