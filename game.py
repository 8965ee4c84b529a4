from __future__ import annotations

# Facade module that re-exports the memory game core.
# The Flask app and the tests import from here; single-responsibility
# modules live under memory_core/*.

from memory_core.cards import (
    ANIMAL_SYMBOLS,
    MAX_PAIRS,
    SUPPORTED_PAIR_COUNTS,
    Card,
    deal_deck,
    validate_pair_count,
)
from memory_core.particles import (
    BLAST_DURATION,
    BLAST_PARTICLE_COUNT,
    BLAST_SPEED_RANGE,
    BlastParticle,
    make_blast,
)
from memory_core.scheduler import ManualScheduler, MonotonicScheduler
from memory_core.state import (
    MATCH_DELAY,
    MISMATCH_DELAY,
    VICTORY_BURSTS,
    GameState,
)

__all__ = [
    'ANIMAL_SYMBOLS',
    'MAX_PAIRS',
    'SUPPORTED_PAIR_COUNTS',
    'Card',
    'deal_deck',
    'validate_pair_count',
    'BLAST_DURATION',
    'BLAST_PARTICLE_COUNT',
    'BLAST_SPEED_RANGE',
    'BlastParticle',
    'make_blast',
    'ManualScheduler',
    'MonotonicScheduler',
    'MATCH_DELAY',
    'MISMATCH_DELAY',
    'VICTORY_BURSTS',
    'GameState',
    'main',
]


def main() -> None:
    # CLI driver delegated to memory_core.cli
    from memory_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
