"""FastAPI entrypoint for the book catalog service."""
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bytebooks.config import settings
from bytebooks.db.connection import close_pool, get_pool
from bytebooks.db.repository import BookRepository, InMemoryBookRepository, PostgresBookRepository
from bytebooks.routers import books
from bytebooks.routers.books import get_book_repository
from bytebooks.services.csv_import_service import run_startup_import
from bytebooks.utils.logger import get_logger

logger = get_logger(__name__)


async def create_repository() -> BookRepository:
    if settings.storage_backend == "memory":
        logger.info("Using in-memory book storage")
        return InMemoryBookRepository()
    pool = await get_pool()
    return PostgresBookRepository(pool)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.book_repository = await create_repository()
    try:
        # The import finishes before the app starts serving requests
        await run_startup_import(app.state.book_repository, settings)
        yield
    finally:
        if settings.storage_backend == "postgres":
            await close_pool()


app = FastAPI(
    title="ByteBooks Catalog API",
    version="0.1.0",
    description="Paginated book catalog backed by PostgreSQL and seeded from a CSV export.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["health"])
async def healthcheck():
    """Basic health check."""
    return {"status": "ok", "env": settings.app_env}


@app.get("/health/db", tags=["health"])
async def db_healthcheck(repository: BookRepository = Depends(get_book_repository)):
    """Storage connectivity health check."""
    try:
        book_count = await repository.count()
        return {
            "status": "connected",
            "backend": settings.storage_backend,
            "books": book_count,
        }
    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
            "type": type(e).__name__,
        }


app.include_router(books.router, prefix="/api/books", tags=["books"])
