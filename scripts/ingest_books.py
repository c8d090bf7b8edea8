"""Import books from a CSV file into the database."""
import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import bytebooks modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from bytebooks.config import settings
from bytebooks.db.connection import close_pool, init_db
from bytebooks.db.repository import PostgresBookRepository
from bytebooks.services.csv_import_service import IMPORT_ROW_LIMIT, import_books_from_csv


async def ingest_books(csv_path: Path, limit: int = IMPORT_ROW_LIMIT) -> None:
    """Import up to ``limit`` books from ``csv_path`` into PostgreSQL."""
    pool = await init_db()
    try:
        result = await import_books_from_csv(PostgresBookRepository(pool), csv_path, row_limit=limit)
    finally:
        await close_pool()

    print(f"Imported {result.imported} books ({result.failed} rows failed)")


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Import books from a CSV file into the database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Import the configured file (CSV_IMPORT_FILE_PATH)
  python scripts/ingest_books.py

  # Import the first 200 books of another export
  python scripts/ingest_books.py --csv data/books.csv --limit 200
        """,
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=str(settings.csv_import_file_path),
        help=f"Path to CSV file (default: {settings.csv_import_file_path})",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=IMPORT_ROW_LIMIT,
        help=f"Maximum number of books to import (default: {IMPORT_ROW_LIMIT})",
    )

    args = parser.parse_args()

    await ingest_books(csv_path=Path(args.csv), limit=args.limit)


if __name__ == "__main__":
    asyncio.run(main())
