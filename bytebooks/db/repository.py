"""Book storage behind a small repository interface."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

import asyncpg

from bytebooks.models.book_model import Book

BOOK_COLUMNS = (
    "title",
    "author",
    "isbn",
    "description",
    "image_url",
    "price",
    "publication_year",
    "publisher",
    "language",
    "page_count",
    "category",
    "stock_quantity",
    "average_rating",
    "ratings_count",
)


@dataclass(frozen=True)
class BookFilter:
    """Matches books where any of ``fields`` contains ``term``, ignoring case."""

    term: str
    fields: Tuple[str, ...]

    def __post_init__(self):
        unknown = [f for f in self.fields if f not in BOOK_COLUMNS]
        if unknown:
            raise ValueError(f"Unknown book fields: {', '.join(unknown)}")
        if not self.fields:
            raise ValueError("BookFilter needs at least one field")

    def matches(self, book: Book) -> bool:
        needle = self.term.lower()
        for field in self.fields:
            value = getattr(book, field)
            if value is not None and needle in str(value).lower():
                return True
        return False


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BookRepository(ABC):
    """Persistence capabilities the catalog needs."""

    @abstractmethod
    async def insert(self, book: Book) -> Book:
        """Store a new book and return it with its assigned id."""

    @abstractmethod
    async def find_by_id(self, book_id: int) -> Optional[Book]:
        ...

    @abstractmethod
    async def find_page(
        self,
        offset: int,
        limit: int,
        book_filter: Optional[BookFilter] = None,
        sort_by_title: bool = False,
    ) -> Tuple[List[Book], int]:
        """Return one window of matching books and the total match count.

        Without ``sort_by_title`` books come back in storage order (by id).
        """

    @abstractmethod
    async def count(self) -> int:
        ...


class PostgresBookRepository(BookRepository):
    """Repository over the ``books`` table through an asyncpg pool."""

    def __init__(self, pool: asyncpg.pool.Pool):
        self.pool = pool

    async def insert(self, book: Book) -> Book:
        values = [getattr(book, column) for column in BOOK_COLUMNS]
        placeholders = ", ".join(f"${i}" for i in range(1, len(BOOK_COLUMNS) + 1))
        async with self.pool.acquire() as conn:
            record = await conn.fetchrow(
                f"""
                INSERT INTO books ({", ".join(BOOK_COLUMNS)})
                VALUES ({placeholders})
                RETURNING *
                """,
                *values,
            )
        return Book(**dict(record))

    async def find_by_id(self, book_id: int) -> Optional[Book]:
        async with self.pool.acquire() as conn:
            record = await conn.fetchrow("SELECT * FROM books WHERE id=$1", book_id)
        return Book(**dict(record)) if record else None

    async def find_page(
        self,
        offset: int,
        limit: int,
        book_filter: Optional[BookFilter] = None,
        sort_by_title: bool = False,
    ) -> Tuple[List[Book], int]:
        where = ""
        params: list = []
        param_count = 0

        if book_filter is not None:
            param_count += 1
            clauses = [f"{field} ILIKE ${param_count}" for field in book_filter.fields]
            where = " WHERE " + " OR ".join(clauses)
            params.append(f"%{escape_like(book_filter.term)}%")

        order = " ORDER BY title, id" if sort_by_title else " ORDER BY id"
        query = "SELECT * FROM books" + where + order
        param_count += 1
        query += f" LIMIT ${param_count}"
        param_count += 1
        query += f" OFFSET ${param_count}"

        async with self.pool.acquire() as conn:
            total = await conn.fetchval("SELECT COUNT(*) FROM books" + where, *params)
            records = await conn.fetch(query, *params, limit, offset)

        return [Book(**dict(record)) for record in records], total

    async def count(self) -> int:
        async with self.pool.acquire() as conn:
            return await conn.fetchval("SELECT COUNT(*) FROM books")


class InMemoryBookRepository(BookRepository):
    """List-backed repository for local runs and tests."""

    def __init__(self):
        self._books: List[Book] = []
        self._next_id = 1

    async def insert(self, book: Book) -> Book:
        stored = book.model_copy(update={"id": self._next_id})
        self._next_id += 1
        self._books.append(stored)
        return stored.model_copy()

    async def find_by_id(self, book_id: int) -> Optional[Book]:
        book = next((b for b in self._books if b.id == book_id), None)
        return book.model_copy() if book else None

    async def find_page(
        self,
        offset: int,
        limit: int,
        book_filter: Optional[BookFilter] = None,
        sort_by_title: bool = False,
    ) -> Tuple[List[Book], int]:
        items = self._books
        if book_filter is not None:
            items = [b for b in items if book_filter.matches(b)]
        if sort_by_title:
            # NULL titles last as in PostgreSQL; casefold approximates a
            # linguistic collation rather than code point order
            items = sorted(
                items, key=lambda b: (b.title is None, (b.title or "").casefold(), b.id)
            )
        window = items[offset:offset + limit]
        return [b.model_copy() for b in window], len(items)

    async def count(self) -> int:
        return len(self._books)
