"""
Pytest configuration and shared fixtures.
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from api.main import app, get_catalog_service
from api.service import CatalogService
from catalog.models import Book, BookPayload, BookStatus
from catalog.query import PaginationPolicy
from catalog.store import BookStore


@pytest.fixture
def book_store():
    """Create an empty book store."""
    return BookStore()


@pytest.fixture
def id_factory():
    """Create a predictable identifier generator."""
    counter = itertools.count(1)
    return lambda: f"book-{next(counter)}"


@pytest.fixture
def catalog_service(book_store, id_factory):
    """Create a catalog service over the empty store."""
    return CatalogService(book_store, id_factory=id_factory)


@pytest.fixture
def inclusive_service(book_store, id_factory):
    """Create a catalog service using inclusive pagination bounds."""
    return CatalogService(
        book_store,
        id_factory=id_factory,
        pagination_policy=PaginationPolicy.INCLUSIVE
    )


@pytest.fixture
def client(catalog_service):
    """Create test client backed by a fresh catalog service."""
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_book():
    """Build a stored book record."""
    def _make_book(book_id, title, status=BookStatus.UNREAD, author="Some Author"):
        return Book(id=book_id, title=title, author=author, status=status)
    return _make_book


@pytest.fixture
def five_books(make_book):
    """Five books with distinct titles, in non-alphabetical order."""
    return [
        make_book("e", "Emma", BookStatus.READING),
        make_book("b", "Beloved", BookStatus.COMPLETED),
        make_book("d", "Dracula", BookStatus.READING),
        make_book("a", "Antigone", BookStatus.UNREAD),
        make_book("c", "Candide", BookStatus.READING),
    ]


@pytest.fixture
def hamlet_payload():
    """Valid create payload."""
    return BookPayload(title="Hamlet", author="Yusuf", status="reading")
