"""Tech words for the guessing game — pure selection, randomness injected."""

import random

TECH_WORDS: tuple[str, ...] = (
    "Docker", "Kubernetes", "Javascript", "Angular", "C", "C++",
)


def pick_tech_word(
    rng: random.Random | None = None, words: tuple[str, ...] = TECH_WORDS,
) -> dict:
    """Pick one word and describe it for the client."""
    word = (rng or random).choice(words)
    return {"guessWord": word, "length": len(word)}
