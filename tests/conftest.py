"""Shared fixtures for the catalog test suite."""
import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from bytebooks.db.repository import InMemoryBookRepository
from bytebooks.main import app
from bytebooks.models.book_model import Book
from bytebooks.routers.books import get_book_repository

SAMPLE_BOOKS = [
    Book(title="The Hobbit", author="J.R.R. Tolkien", isbn="9780547928227", category="Fantasy"),
    Book(
        title="Dune",
        author="Frank Herbert",
        isbn="9780441172719",
        category="Science Fiction",
        price=Decimal("9.99"),
        image_url="https://images.example.com/dune.jpg",
    ),
    Book(title="Neuromancer", author="William Gibson", isbn="9780441569595", category="Science Fiction"),
    Book(title="A Brief History of Time", author="Stephen Hawking", isbn="9780553380163", category="Science"),
    Book(title="Emma", author="Jane Austen", isbn="9780141439587", category="Classics"),
]


@pytest.fixture
def repository():
    """An empty in-memory repository."""
    return InMemoryBookRepository()


@pytest.fixture
def seeded_repository(repository):
    """Repository holding SAMPLE_BOOKS with ids 1..5 in list order."""

    async def seed():
        for book in SAMPLE_BOOKS:
            await repository.insert(book)

    asyncio.run(seed())
    return repository


@pytest.fixture
def client(seeded_repository):
    """HTTP client wired to the seeded repository, without running startup."""
    app.dependency_overrides[get_book_repository] = lambda: seeded_repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temporary file and return its path."""

    def _write(content: str, name: str = "books.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
