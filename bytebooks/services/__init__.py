"""Services package."""
from . import book_service, csv_import_service

__all__ = [
    "book_service",
    "csv_import_service",
]
