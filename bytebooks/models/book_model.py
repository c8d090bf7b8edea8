"""Book models."""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer
from pydantic.alias_generators import to_camel


class Book(BaseModel):
    """A catalog record.

    Only ``id`` is guaranteed once stored; every business field is optional
    because the import source enforces none of them. String bounds follow
    the ``books`` table column widths.
    """

    id: Optional[int] = None
    title: Optional[str] = Field(default=None, max_length=255)
    author: Optional[str] = Field(default=None, max_length=255)
    isbn: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    image_url: Optional[str] = Field(default=None, max_length=255)
    price: Optional[Decimal] = None
    publication_year: Optional[int] = None
    publisher: Optional[str] = Field(default=None, max_length=255)
    language: Optional[str] = Field(default=None, max_length=255)
    page_count: Optional[int] = None
    category: Optional[str] = Field(default=None, max_length=255)
    stock_quantity: Optional[int] = None
    average_rating: Optional[float] = None
    ratings_count: Optional[int] = None

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Optional[Decimal]) -> Optional[float]:
        return float(price) if price is not None else None


class BookPage(BaseModel):
    """One page of books plus pagination metadata."""

    books: List[Book]
    current_page: int
    total_items: int
    total_pages: int

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
