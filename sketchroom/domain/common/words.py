from __future__ import annotations

import random
from typing import Optional, Sequence

WORDS: Sequence[str] = (
    "CAT", "DOG", "HOUSE", "TREE", "CAR", "FLOWER", "BIRD", "FISH", "SUN", "MOON",
    "APPLE", "BOOK", "PHONE", "COMPUTER", "MUSIC", "DANCE", "SOCCER", "PIZZA", "GUITAR", "CAMERA",
    "MOUNTAIN", "OCEAN", "RAINBOW", "BUTTERFLY", "ELEPHANT", "ROCKET", "CASTLE", "ROBOT", "DRAGON", "WIZARD",
)


def random_word(rng: Optional[random.Random] = None, words: Sequence[str] = WORDS) -> str:
    """Uniform pick with replacement: the same word may come up in consecutive rounds."""
    return (rng or random).choice(words)
