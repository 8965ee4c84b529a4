from __future__ import annotations

import argparse
import random
from typing import List, Optional

from .cards import SUPPORTED_PAIR_COUNTS
from .config import configure_logging, load_settings
from .scheduler import ManualScheduler
from .state import MISMATCH_DELAY, GameState, VICTORY_BURSTS


def _parse_pick(text: str, state: GameState) -> Optional[int]:
    """Maps a typed grid index to a card id, or None if it is not a valid index."""
    try:
        index = int(text)
    except ValueError:
        return None
    if 0 <= index < len(state.cards):
        return state.cards[index].id
    return None


def main(argv: Optional[List[str]] = None) -> None:
    settings = load_settings()
    parser = argparse.ArgumentParser(description='Animal Match-Up in the terminal')
    parser.add_argument('--pairs', type=int, choices=SUPPORTED_PAIR_COUNTS, default=settings.default_pairs,
                        help='Number of pairs on the table')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--columns', type=int, default=4, help='Cards per printed row')
    args = parser.parse_args(argv)
    configure_logging(settings)

    scheduler = ManualScheduler()
    state = GameState(pair_count=args.pairs, scheduler=scheduler, rng=random.Random(args.seed))
    print('Find all the pairs. Enter a card number, r to reshuffle, q to quit.')

    while True:
        print(state.pretty(args.columns))
        if state.is_won:
            # Let the closing celebration play out on the virtual clock.
            scheduler.advance(VICTORY_BURSTS[-1][0])
            print('JUNGLE KING! You matched all the animals!')
            break
        text = input('Pick a card: ').strip().lower()
        if text == 'q':
            break
        if text == 'r':
            state.reset()
            continue
        card_id = _parse_pick(text, state)
        if card_id is None:
            print('Not a card number. Try again.')
            continue
        before = state.selected_card_id
        state.choose(card_id)
        if before is not None and state.selected_card_id is None:
            # Second pick: show both cards, then let the outcome resolve.
            print(state.pretty(args.columns))
            scheduler.advance(MISMATCH_DELAY)


if __name__ == '__main__':
    main()
