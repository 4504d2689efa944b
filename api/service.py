"""
Catalog service layer for the FastAPI application.
"""

import uuid
from typing import Callable, Dict, List

import structlog

from catalog.errors import CatalogError, NotFoundError
from catalog.models import Book, BookPayload, BookStatus
from catalog.query import BookQuery, PaginationPolicy, run_query
from catalog.store import BookStore
from catalog.validation import validate_for_create, validate_for_update

logger = structlog.get_logger(__name__)


def generate_book_id() -> str:
    return str(uuid.uuid4())


class CatalogService:
    """Service orchestrating validation, storage and queries for API operations."""

    def __init__(
        self,
        store: BookStore,
        id_factory: Callable[[], str] = generate_book_id,
        pagination_policy: PaginationPolicy = PaginationPolicy.STRICT
    ):
        self.store = store
        self.id_factory = id_factory
        self.pagination_policy = pagination_policy

    def create_book(self, payload: BookPayload) -> Book:
        """
        Create a book from a client payload.

        Args:
            payload: Decoded request body with title, author and status

        Returns:
            The stored book with its generated identifier
        """
        try:
            validate_for_create(payload)
        except CatalogError as e:
            logger.info("Book creation rejected", reason=e.message)
            raise

        book = Book(
            id=self.id_factory(),
            title=payload.title,
            author=payload.author,
            status=BookStatus(payload.status),
        )
        self.store.insert(book)
        logger.info("Book created", book_id=book.id, status=book.status.value)
        return book

    def list_books(self, query: BookQuery) -> List[Book]:
        """
        List books matching a query.

        Args:
            query: Status filter and pagination bounds

        Returns:
            Books filtered by status, ordered by title and paginated
        """
        try:
            books = run_query(self.store.snapshot(), query, self.pagination_policy)
        except CatalogError as e:
            logger.info("Book listing rejected", reason=e.message, **query.model_dump())
            raise

        logger.debug("Books listed", count=len(books), **query.model_dump())
        return books

    def get_book(self, book_id: str) -> Book:
        book = self.store.fetch(book_id)
        if book is None:
            raise NotFoundError("book does not exist")
        return book

    def update_book_status(self, book_id: str, payload: BookPayload) -> Book:
        """
        Change the reading status of an existing book.

        Only the status is taken from the payload; title, author and
        identifier are kept from the stored record.

        Args:
            book_id: Identifier of the book to update
            payload: Decoded request body carrying only a status

        Returns:
            The updated book
        """
        try:
            validate_for_update(payload)
            existing = self.get_book(book_id)
            updated = existing.model_copy(update={"status": BookStatus(payload.status)})
            self.store.replace(book_id, updated)
        except CatalogError as e:
            logger.info("Book update rejected", book_id=book_id, reason=e.message)
            raise

        logger.info(
            "Book status updated",
            book_id=book_id,
            old_status=existing.status.value,
            new_status=updated.status.value
        )
        return updated

    def delete_book(self, book_id: str) -> Book:
        try:
            book = self.store.delete(book_id)
        except CatalogError as e:
            logger.info("Book deletion rejected", book_id=book_id, reason=e.message)
            raise

        logger.info("Book deleted", book_id=book_id)
        return book

    def stats(self) -> Dict[str, object]:
        """Count books in total and per reading status."""
        books = self.store.snapshot()
        by_status = {status.value: 0 for status in BookStatus}
        for book in books:
            by_status[book.status.value] += 1
        return {"total_books": len(books), "books_by_status": by_status}
