"""Pydantic models for API responses."""
from .book_model import Book, BookPage
