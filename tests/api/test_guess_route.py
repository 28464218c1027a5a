"""Guess route — returns a word from the list with its length."""

from bookstore.api.routes.tech_words import get_rng
from bookstore.core.tech_words import TECH_WORDS


class _FixedRng:
    def choice(self, seq):
        return "Kubernetes"


async def test_guess_returns_word_and_length(app, client):
    app.dependency_overrides[get_rng] = _FixedRng
    res = await client.get("/api/v1/guess")
    assert res.status_code == 200
    assert res.json() == {"status": "success", "guessWord": "Kubernetes", "length": 10}


async def test_guess_with_real_rng_picks_known_word(client):
    body = (await client.get("/api/v1/guess")).json()
    assert body["guessWord"] in TECH_WORDS
    assert body["length"] == len(body["guessWord"])
