"""Book endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from bytebooks.db.repository import BookRepository
from bytebooks.models.book_model import Book, BookPage
from bytebooks.services import book_service

router = APIRouter()


def get_book_repository(request: Request) -> BookRepository:
    """Repository created during application startup."""
    return request.app.state.book_repository


@router.get("", response_model=BookPage)
async def list_books(
    page: int = Query(book_service.DEFAULT_PAGE, description="Zero-based page index"),
    size: int = Query(book_service.DEFAULT_PAGE_SIZE, description="Books per page"),
    repository: BookRepository = Depends(get_book_repository),
):
    """List all books sorted by title."""
    return await book_service.list_books(repository, page=page, size=size)


@router.get("/search", response_model=BookPage)
async def search_books(
    query: str = Query(..., description="Text to find in title, author or ISBN"),
    page: int = Query(book_service.DEFAULT_PAGE, description="Zero-based page index"),
    size: int = Query(book_service.DEFAULT_PAGE_SIZE, description="Books per page"),
    repository: BookRepository = Depends(get_book_repository),
):
    """Search books by title, author or ISBN."""
    return await book_service.search_books(repository, query, page=page, size=size)


@router.get("/category/{category}", response_model=BookPage)
async def get_books_by_category(
    category: str,
    page: int = Query(book_service.DEFAULT_PAGE, description="Zero-based page index"),
    size: int = Query(book_service.DEFAULT_PAGE_SIZE, description="Books per page"),
    repository: BookRepository = Depends(get_book_repository),
):
    """List books whose category contains the given text."""
    return await book_service.list_books_by_category(repository, category, page=page, size=size)


@router.get("/{book_id}", response_model=Book)
async def get_book(book_id: int, repository: BookRepository = Depends(get_book_repository)):
    """Get book details by ID."""
    book = await book_service.get_book(repository, book_id)
    if not book:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with ID {book_id} not found",
        )
    return book
