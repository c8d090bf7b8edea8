"""Bulk import of books from a CSV export.

The importer is best-effort: an unreadable file is logged and ignored, and
each row is built and stored on its own so one bad row never stops the rest
of the batch.
"""
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from bytebooks.config import Settings
from bytebooks.db.repository import BookRepository
from bytebooks.models.book_model import Book
from bytebooks.utils.logger import get_logger

logger = get_logger(__name__)

IMPORT_ROW_LIMIT = 1000
PROGRESS_INTERVAL = 100
READ_CHUNK_SIZE = 100
ABSENT = -1
# Undecodable bytes become U+FFFD so they only affect their own row
ENCODING_ERRORS = "replace"


def _parse_text(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


def _parse_float(value: Any) -> Optional[float]:
    text = _parse_text(value)
    if text is None:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_int(value: Any) -> Optional[int]:
    # Exports often carry integers as floats, e.g. "1997.0"
    number = _parse_float(value)
    return int(number) if number is not None else None


# (header name, Book field, parser)
COLUMN_FIELDS: Tuple[Tuple[str, str, Callable[[Any], Any]], ...] = (
    ("title", "title", _parse_text),
    ("authors", "author", _parse_text),
    ("isbn", "isbn", _parse_text),
    ("original_publication_year", "publication_year", _parse_int),
    ("average_rating", "average_rating", _parse_float),
    ("ratings_count", "ratings_count", _parse_int),
    ("image_url", "image_url", _parse_text),
    ("language_code", "language", _parse_text),
)


@dataclass
class ColumnAssignment:
    field: str
    index: int
    parse: Callable[[Any], Any]


@dataclass
class ImportResult:
    imported: int = 0
    failed: int = 0
    skipped: bool = False


def find_column_index(header: Sequence[str], column_name: str) -> int:
    """Position of ``column_name`` in the header (case-insensitive), or ABSENT."""
    wanted = column_name.lower()
    for index, cell in enumerate(header):
        if str(cell).strip().lower() == wanted:
            return index
    return ABSENT


def build_column_plan(header: Sequence[str]) -> List[ColumnAssignment]:
    """Resolve every known column once; missing columns map to ABSENT."""
    return [
        ColumnAssignment(field=field, index=find_column_index(header, name), parse=parse)
        for name, field, parse in COLUMN_FIELDS
    ]


def book_from_row(row: Sequence[Any], plan: List[ColumnAssignment]) -> Book:
    values = {}
    for assignment in plan:
        if assignment.index == ABSENT or assignment.index >= len(row):
            continue
        values[assignment.field] = assignment.parse(row[assignment.index])
    return Book(**values)


def _field_present(value: Any) -> bool:
    # Cells past the end of a short row are padded, never str
    return isinstance(value, str)


def _raw_row(row: Sequence[Any]) -> str:
    return ", ".join("" if _parse_text(v) is None else str(v) for v in row)


async def import_books_from_csv(
    repository: BookRepository,
    csv_path: Union[str, Path],
    row_limit: int = IMPORT_ROW_LIMIT,
) -> ImportResult:
    """Import up to ``row_limit`` books from ``csv_path`` into ``repository``.

    Never raises for file or row problems; they are logged and reflected in
    the returned counts.
    """
    csv_path = Path(csv_path)
    result = ImportResult()
    logger.info(f"Starting import of books from CSV file: {csv_path.resolve()}")

    try:
        header = list(
            pd.read_csv(csv_path, nrows=0, dtype=str, encoding_errors=ENCODING_ERRORS).columns
        )
    except pd.errors.EmptyDataError:
        logger.error(f"CSV file is empty: {csv_path}")
        return result
    except Exception as e:
        logger.error(f"Error reading CSV file {csv_path}: {e}")
        return result

    logger.info(f"CSV header: {', '.join(header)}")
    plan = build_column_plan(header)
    missing = [a.field for a in plan if a.index == ABSENT]
    if missing:
        logger.warning(f"Columns not found, fields left empty: {', '.join(missing)}")

    def on_bad_line(bad_line: List[str]) -> None:
        result.failed += 1
        logger.error(f"Skipping malformed row: {', '.join(bad_line)}")
        return None

    # One spare column past the header flags rows with extra fields;
    # index_col=False keeps pandas from turning extra fields into an index.
    width = len(header)
    names = list(range(width + 1))

    try:
        with pd.read_csv(
            csv_path,
            header=0,
            names=names,
            index_col=False,
            dtype={i: str for i in range(width)},
            converters={width: _field_present},
            keep_default_na=False,
            encoding_errors=ENCODING_ERRORS,
            engine="python",
            on_bad_lines=on_bad_line,
            chunksize=READ_CHUNK_SIZE,
        ) as reader:
            for chunk in reader:
                for row in chunk.itertuples(index=False, name=None):
                    if result.imported >= row_limit:
                        break
                    if row[width]:
                        on_bad_line([_raw_row(row[:width]), "..."])
                        continue
                    try:
                        book = book_from_row(row[:width], plan)
                        await repository.insert(book)
                    except Exception:
                        result.failed += 1
                        logger.exception(f"Error processing row: {_raw_row(row[:width])}")
                        continue

                    result.imported += 1
                    if result.imported % PROGRESS_INTERVAL == 0:
                        logger.info(f"Imported {result.imported} books")

                if result.imported >= row_limit:
                    logger.info(f"Reached import limit of {row_limit} books")
                    break
    except Exception as e:
        # Rows already imported stay; the rest of the file is abandoned
        logger.error(f"Error reading CSV file {csv_path}: {e}")

    logger.info(
        f"Import completed. Total books imported: {result.imported} (failed rows: {result.failed})"
    )
    return result


async def run_startup_import(repository: BookRepository, settings: Settings) -> ImportResult:
    """Run the CSV import configured for application startup."""
    logger.info(f"CSV file path: {settings.csv_import_file_path}")
    if settings.skip_data_import:
        logger.info("Data import skipped based on configuration")
        return ImportResult(skipped=True)
    return await import_books_from_csv(repository, settings.csv_import_file_path)
