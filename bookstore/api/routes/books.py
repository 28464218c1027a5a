"""Books — CRUD routes for the catalogue.

Invariants:
    - Success bodies carry "status": "success"; failures are raised, never built here
    - book_id is taken as a raw string so malformed ids become a 400 "Invalid id"
      envelope instead of a framework validation error
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.query_features import parse_list_query, project
from bookstore.infrastructure.database import get_db
from bookstore.schemas.book import BOOK_FIELDS, BookCreate, BookResponse, BookUpdate
from bookstore.services import book_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/books", tags=["books"])


def _serialize(book) -> dict:
    return BookResponse.model_validate(book).model_dump(mode="json")


@router.get("")
async def get_all_books(request: Request, db: AsyncSession = Depends(get_db)):
    """List books with filtering, sorting, field selection and pagination."""
    query = parse_list_query(
        request.query_params, BOOK_FIELDS, book_service.FILTERABLE_FIELDS,
    )
    books = await book_service.list_books(db, query)
    return {
        "status": "success",
        "requestedAt": getattr(request.state, "request_time", None),
        "results": len(books),
        "data": {"books": [project(_serialize(b), query.fields) for b in books]},
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_new_book(body: BookCreate, db: AsyncSession = Depends(get_db)):
    book = await book_service.create_book(db, body)
    return {"status": "success", "data": {"book": _serialize(book)}}


@router.get("/{book_id}")
async def get_single_book(book_id: str, db: AsyncSession = Depends(get_db)):
    book = await book_service.get_book(db, book_id)
    return {"status": "success", "data": {"book": _serialize(book)}}


@router.patch("/{book_id}")
async def update_single_book(
    book_id: str, body: BookUpdate, db: AsyncSession = Depends(get_db),
):
    book = await book_service.update_book(db, book_id, body)
    return {"status": "success", "data": {"book": _serialize(book)}}


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_single_book(book_id: str, db: AsyncSession = Depends(get_db)):
    await book_service.delete_book(db, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
