"""Tests for the Book and BookPage models."""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from bytebooks.models.book_model import Book, BookPage


def test_book_serializes_camel_case_json():
    book = Book(id=7, title="Dune", image_url="https://img/dune.jpg", publication_year=1965, ratings_count=12)

    data = book.model_dump(mode="json", by_alias=True)

    assert data["imageUrl"] == "https://img/dune.jpg"
    assert data["publicationYear"] == 1965
    assert data["ratingsCount"] == 12
    assert data["averageRating"] is None
    assert "image_url" not in data


def test_price_is_a_json_number():
    book = Book(title="Dune", price=Decimal("9.99"))

    assert book.model_dump(mode="json")["price"] == 9.99
    assert book.price == Decimal("9.99")


def test_all_business_fields_optional():
    book = Book()

    assert book.id is None
    assert book.title is None
    assert book.category is None


def test_accepts_aliases_and_field_names():
    assert Book(imageUrl="a.jpg").image_url == "a.jpg"
    assert Book(image_url="a.jpg").image_url == "a.jpg"


def test_title_longer_than_column_is_rejected():
    with pytest.raises(ValidationError):
        Book(title="x" * 256)


def test_description_bound_is_wider():
    assert len(Book(description="d" * 1000).description) == 1000
    with pytest.raises(ValidationError):
        Book(description="d" * 1001)


def test_book_page_envelope_keys():
    page = BookPage(books=[Book(id=1, title="Emma")], current_page=0, total_items=1, total_pages=1)

    data = page.model_dump(mode="json", by_alias=True)

    assert set(data) == {"books", "currentPage", "totalItems", "totalPages"}
    assert data["books"][0]["title"] == "Emma"
