"""
Dev-data loader for the books table.

Usage:
    # Load books from a JSON array file
    python -m bookstore.scripts.import_data --import dev-data/books.json

    # Remove every book
    python -m bookstore.scripts.import_data --delete
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bookstore.config import get_settings
from bookstore.core.errors import AppError
from bookstore.db.base import Base
from bookstore.db.session import create_session_factory, dispose_session_factory
from bookstore.infrastructure.observability import setup_logging
from bookstore.schemas.book import BookCreate
from bookstore.services import book_service

logger = logging.getLogger(__name__)

_BOOK_LIST = TypeAdapter(list[BookCreate])


def load_books_file(path: Path) -> list[BookCreate]:
    """Read and validate a JSON array of books."""
    return _BOOK_LIST.validate_python(json.loads(path.read_text(encoding="utf-8")))


async def import_data(
    session_factory: async_sessionmaker[AsyncSession], path: Path,
) -> int:
    books = load_books_file(path)
    async with session_factory() as db:
        await db.run_sync(lambda s: Base.metadata.create_all(s.connection()))
        await db.commit()
        return await book_service.import_books(db, books)


async def delete_data(session_factory: async_sessionmaker[AsyncSession]) -> int:
    async with session_factory() as db:
        return await book_service.delete_all_books(db)


async def _run(args: argparse.Namespace, database_url: str) -> int:
    factory = create_session_factory(database_url)
    try:
        if args.import_path is not None:
            count = await import_data(factory, args.import_path)
            logger.info("Data successfully imported: %d books.", count)
        else:
            count = await delete_data(factory)
            logger.info("Data successfully deleted: %d books.", count)
        return count
    finally:
        await dispose_session_factory(factory)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load or wipe bookstore dev data")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--import", dest="import_path", type=Path, metavar="FILE",
        help="JSON array of books to insert",
    )
    group.add_argument(
        "--delete", action="store_true", help="Delete every book",
    )
    parser.add_argument(
        "--database-url", default=None,
        help="Override DATABASE_URL from the environment",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    setup_logging(get_settings().log_level, "text")
    args = _build_parser().parse_args(argv)
    database_url = args.database_url or get_settings().database_url

    try:
        asyncio.run(_run(args, database_url))
    except (
        OSError, json.JSONDecodeError, ValidationError, AppError, SQLAlchemyError,
    ) as e:
        logger.error("Dev-data operation failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
