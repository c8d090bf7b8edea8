"""Book catalog queries."""
import math
from typing import List, Optional, Tuple

from bytebooks.db.repository import BookFilter, BookRepository
from bytebooks.models.book_model import Book, BookPage

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest OFFSET a bigint parameter can carry
MAX_OFFSET = 2**63 - 1

SEARCH_FIELDS = ("title", "author", "isbn")


def clamp_pagination(page: int, size: int) -> Tuple[int, int]:
    """Coerce page/size into a usable window instead of rejecting them.

    Negative pages become the first page, non-positive sizes fall back to
    the default and oversized pages are capped.
    """
    page = max(page, DEFAULT_PAGE)
    if size <= 0:
        size = DEFAULT_PAGE_SIZE
    return page, min(size, MAX_PAGE_SIZE)


def build_page(books: List[Book], total: int, page: int, size: int) -> BookPage:
    return BookPage(
        books=books,
        current_page=page,
        total_items=total,
        total_pages=math.ceil(total / size),
    )


async def _find_page(
    repository: BookRepository,
    page: int,
    size: int,
    book_filter: Optional[BookFilter] = None,
    sort_by_title: bool = False,
) -> BookPage:
    page, size = clamp_pagination(page, size)
    books, total = await repository.find_page(
        offset=min(page * size, MAX_OFFSET),
        limit=size,
        book_filter=book_filter,
        sort_by_title=sort_by_title,
    )
    return build_page(books, total, page, size)


async def list_books(
    repository: BookRepository,
    page: int = DEFAULT_PAGE,
    size: int = DEFAULT_PAGE_SIZE,
) -> BookPage:
    """List every book, sorted by title."""
    return await _find_page(repository, page, size, sort_by_title=True)


async def get_book(repository: BookRepository, book_id: int) -> Optional[Book]:
    """Get a book by its ID."""
    return await repository.find_by_id(book_id)


async def search_books(
    repository: BookRepository,
    query: str,
    page: int = DEFAULT_PAGE,
    size: int = DEFAULT_PAGE_SIZE,
) -> BookPage:
    """Case-insensitive substring search over title, author and ISBN."""
    return await _find_page(repository, page, size, BookFilter(query, SEARCH_FIELDS))


async def list_books_by_category(
    repository: BookRepository,
    category: str,
    page: int = DEFAULT_PAGE,
    size: int = DEFAULT_PAGE_SIZE,
) -> BookPage:
    """Books whose category contains ``category``, ignoring case."""
    return await _find_page(repository, page, size, BookFilter(category, ("category",)))
