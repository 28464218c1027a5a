"""Book Service — persistence operations behind the /books routes.

Invariants:
    - Every lookup by id either returns a Book or raises (NotFoundError / InvalidIdentifierError)
    - Unique-name violations surface as DuplicateResourceError, never as raw IntegrityError
    - Filter values are coerced to the column's Python type before reaching SQL

Design Decisions:
    - Module-level async functions over a repository class: one resource, one session
      per call, nothing to hold between calls
"""

import logging
from datetime import date, datetime
from typing import Any, Iterable
from uuid import UUID

from sqlalchemy import asc, delete, desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.errors import (
    BadRequestError, DuplicateResourceError, InvalidIdentifierError, NotFoundError,
)
from bookstore.core.query_features import FilterClause, ListQuery
from bookstore.models.book import Book
from bookstore.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)

# JSON list columns cannot be compared portably
FILTERABLE_FIELDS = frozenset({
    "name", "price", "pages", "author", "in_stock", "publisher",
    "publication_date", "weight", "dimensions", "rating", "created_at",
})

_COMPARATORS = {
    "eq": lambda col, v: col == v,
    "gte": lambda col, v: col >= v,
    "gt": lambda col, v: col > v,
    "lte": lambda col, v: col <= v,
    "lt": lambda col, v: col < v,
}

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def parse_book_id(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise InvalidIdentifierError("id", raw)


async def list_books(db: AsyncSession, query: ListQuery) -> list[Book]:
    stmt = select(Book)
    for clause in query.filters:
        column = getattr(Book, clause.field)
        stmt = stmt.where(
            _COMPARATORS[clause.op](column, _coerce(clause)),
        )
    for key in query.sort:
        column = getattr(Book, key.field)
        stmt = stmt.order_by(desc(column) if key.descending else asc(column))
    stmt = stmt.offset(query.offset).limit(query.limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_book(db: AsyncSession, book_id: str) -> Book:
    """Fetch one book or raise NotFoundError."""
    book = await db.get(Book, parse_book_id(book_id))
    if book is None:
        raise NotFoundError("Book", book_id)
    return book


async def create_book(db: AsyncSession, data: BookCreate) -> Book:
    book = Book(**data.model_dump())
    db.add(book)
    await _commit_or_duplicate(db, data.name)
    await db.refresh(book)
    logger.info(f"Book created: {book.id}")
    return book


async def update_book(db: AsyncSession, book_id: str, data: BookUpdate) -> Book:
    book = await get_book(db, book_id)
    changes = data.changes()
    for name, value in changes.items():
        setattr(book, name, value)
    await _commit_or_duplicate(db, changes.get("name", book.name))
    await db.refresh(book)
    return book


async def delete_book(db: AsyncSession, book_id: str) -> None:
    book = await get_book(db, book_id)
    await db.delete(book)
    await db.commit()
    logger.info(f"Book deleted: {book_id}")


async def import_books(db: AsyncSession, items: Iterable[BookCreate]) -> int:
    """Bulk insert; all-or-nothing."""
    books = [Book(**item.model_dump()) for item in items]
    db.add_all(books)
    await _commit_or_duplicate(db, None)
    return len(books)


async def delete_all_books(db: AsyncSession) -> int:
    result = await db.execute(delete(Book))
    await db.commit()
    return result.rowcount or 0


async def _commit_or_duplicate(db: AsyncSession, name: str | None) -> None:
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Book integrity error: {e.orig}")
        raise DuplicateResourceError("Book", "name", name or "the same")


def _coerce(clause: FilterClause) -> Any:
    python_type = getattr(Book, clause.field).type.python_type
    raw = clause.value
    try:
        if python_type is bool:
            lowered = raw.lower()
            if lowered not in _TRUE | _FALSE:
                raise ValueError(raw)
            return lowered in _TRUE
        if python_type is datetime:
            return datetime.fromisoformat(raw)
        if python_type is date:
            return date.fromisoformat(raw)
        if python_type in (int, float):
            return python_type(raw)
    except ValueError:
        raise BadRequestError(f"Invalid value for {clause.field}: {raw}")
    return raw
