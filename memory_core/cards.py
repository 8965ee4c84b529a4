from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

Symbol = str

# Fixed catalog the deck is sampled from; its size caps the pair count.
ANIMAL_SYMBOLS: Tuple[Symbol, ...] = ('🦁', '🐻', '🐆', '🦉', '🐒', '🐢', '🐊', '🐉', '🦌')

# Pair counts offered to the player.
SUPPORTED_PAIR_COUNTS: Tuple[int, ...] = (2, 4, 6, 8)

MAX_PAIRS = len(ANIMAL_SYMBOLS)


@dataclass
class Card:
    """A single card on the table. Only `is_face_up` and `is_matched` change during a round."""
    id: int
    content: Symbol
    is_face_up: bool = False
    is_matched: bool = False


def validate_pair_count(pair_count: int) -> int:
    """Returns the pair count if the catalog can supply it, raises ValueError otherwise."""
    if isinstance(pair_count, bool) or not isinstance(pair_count, int):
        raise ValueError(f'pair count must be an integer, got {pair_count!r}')
    if pair_count < 1 or pair_count > MAX_PAIRS:
        raise ValueError(f'pair count must be between 1 and {MAX_PAIRS}, got {pair_count}')
    return pair_count


def deal_deck(pair_count: int, ids: Iterator[int], rng: Optional[random.Random] = None) -> List[Card]:
    """Samples `pair_count` symbols, doubles them and shuffles the result into a fresh deck."""
    validate_pair_count(pair_count)
    rng = rng or random.Random()
    chosen = rng.sample(ANIMAL_SYMBOLS, pair_count)
    contents: List[Symbol] = chosen + chosen
    rng.shuffle(contents)
    return [Card(id=next(ids), content=c) for c in contents]
