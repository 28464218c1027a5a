"""Book Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - BookCreate.name / author: 1-200 chars, stripped, non-empty
    - price >= 0, pages >= 1, rating in [0, 5]
    - BookUpdate is partial, but never sets a required column to null

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - BookResponse.from_attributes: routes hand ORM rows straight to the schema
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

REQUIRED_FIELDS = ("name", "price", "pages", "author", "in_stock")


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


class BookCreate(BaseModel):
    """Book creation — every required catalogue field must be present."""
    name: str = Field(min_length=1, max_length=200)
    price: float = Field(ge=0)
    pages: int = Field(ge=1)
    author: str = Field(min_length=1, max_length=200)
    in_stock: bool = True
    languages: list[str] = Field(default_factory=list)
    genre: list[str] = Field(default_factory=list)
    publisher: str | None = Field(None, max_length=200)
    publication_date: date | None = None
    weight: float | None = Field(None, ge=0)
    dimensions: str | None = Field(None, max_length=100)
    rating: float = Field(0.0, ge=0, le=5)
    description: str | None = None

    @field_validator("name", "author")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v


class BookUpdate(BaseModel):
    """Partial update — only fields present in the body are applied."""
    name: str | None = Field(None, min_length=1, max_length=200)
    price: float | None = Field(None, ge=0)
    pages: int | None = Field(None, ge=1)
    author: str | None = Field(None, min_length=1, max_length=200)
    in_stock: bool | None = None
    languages: list[str] | None = None
    genre: list[str] | None = None
    publisher: str | None = Field(None, max_length=200)
    publication_date: date | None = None
    weight: float | None = Field(None, ge=0)
    dimensions: str | None = Field(None, max_length=100)
    rating: float | None = Field(None, ge=0, le=5)
    description: str | None = None

    @field_validator("name", "author")
    @classmethod
    def strip_required_text(cls, v: str | None) -> str | None:
        return _strip_required(v) if v is not None else v

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in REQUIRED_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        for name in ("languages", "genre"):
            if name in self.model_fields_set and getattr(self, name) is None:
                setattr(self, name, [])
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class BookResponse(BaseModel):
    """Book response — public-facing catalogue data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    price: float
    pages: int
    author: str
    in_stock: bool
    languages: list[str]
    genre: list[str]
    publisher: str | None = None
    publication_date: date | None = None
    weight: float | None = None
    dimensions: str | None = None
    rating: float
    description: str | None = None
    created_at: datetime


BOOK_FIELDS = frozenset(BookResponse.model_fields)
