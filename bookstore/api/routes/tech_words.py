"""Guess the tech word — a random word and its length for the guessing game."""

import random

from fastapi import APIRouter, Depends

from bookstore.core.tech_words import pick_tech_word

router = APIRouter(prefix="/api/v1", tags=["guess"])


def get_rng() -> random.Random:
    """Random source dependency; overridden in tests for determinism."""
    return random.Random()


@router.get("/guess")
async def get_random_tech_word(rng: random.Random = Depends(get_rng)):
    return {"status": "success", **pick_tech_word(rng)}
