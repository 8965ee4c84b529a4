from __future__ import annotations

import itertools
import logging
import random
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from .cards import Card, deal_deck, validate_pair_count
from .particles import BLAST_DURATION, BlastParticle, make_blast
from .scheduler import ManualScheduler

logger = logging.getLogger(__name__)

MATCH_DELAY = 0.5
MISMATCH_DELAY = 1.0
# (delay after the final match, symbol) for the closing celebration.
VICTORY_BURSTS: Tuple[Tuple[float, str], ...] = ((1.0, '✨'), (1.5, '🍃'), (2.0, '🎉'))

Observer = Callable[['GameState'], None]


class GameState:
    """The memory game state machine.

    Owns the deck, the pending first pick and the particle list. Outcomes of a
    second pick are applied later through the scheduler; every delayed callback
    remembers the round generation it was scheduled in and does nothing once a
    reset has started a new round.
    """

    def __init__(self, pair_count: int = 4, scheduler: Optional[ManualScheduler] = None,
                 rng: Optional[random.Random] = None) -> None:
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._rng = rng or random.Random()
        self._ids = itertools.count(1)
        self._observers: List[Observer] = []
        self._pair_count = validate_pair_count(pair_count)
        self._selected: Optional[int] = None  # index into cards
        self._awaiting_match: Set[int] = set()  # card ids
        self.cards: List[Card] = []
        self.particles: List[BlastParticle] = []
        self.generation = 0
        self.reset(pair_count)

    # ---------- observers ----------

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        try:
            self._observers.remove(observer)
        except ValueError:
            pass

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self)

    # ---------- queries ----------

    @property
    def pair_count(self) -> int:
        return self._pair_count

    @pair_count.setter
    def pair_count(self, value: int) -> None:
        self.reset(value)

    @property
    def selected_card_id(self) -> Optional[int]:
        if self._selected is None:
            return None
        return self.cards[self._selected].id

    @property
    def is_won(self) -> bool:
        return bool(self.cards) and all(c.is_matched for c in self.cards)

    def card_index(self, card_id: int) -> Optional[int]:
        for i, card in enumerate(self.cards):
            if card.id == card_id:
                return i
        return None

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of everything a renderer needs."""
        return {
            'pairCount': self._pair_count,
            'generation': self.generation,
            'selected': self.selected_card_id,
            'won': self.is_won,
            'cards': [
                {'id': c.id, 'content': c.content, 'faceUp': c.is_face_up, 'matched': c.is_matched}
                for c in self.cards
            ],
            'particles': [
                {
                    'content': p.content,
                    'angle': p.angle,
                    'speed': p.speed,
                    'offset': [p.offset[0], p.offset[1]],
                    'opacity': p.opacity,
                }
                for p in self.particles
            ],
        }

    def pretty(self, columns: int = 4) -> str:
        """Text grid: matched '·', face-up cards show their symbol, face-down cards their index."""
        columns = max(1, columns)
        width = len(str(len(self.cards) - 1)) if self.cards else 1
        lines: List[str] = []
        for start in range(0, len(self.cards), columns):
            row: List[str] = []
            for i in range(start, min(start + columns, len(self.cards))):
                card = self.cards[i]
                if card.is_matched:
                    row.append('·'.center(width))
                elif card.is_face_up:
                    row.append(card.content.center(width))
                else:
                    row.append(str(i).rjust(width))
            lines.append(' '.join(row))
        return '\n'.join(lines)

    # ---------- commands ----------

    def reset(self, pair_count: Optional[int] = None) -> None:
        """Deals a new round. Raises ValueError for pair counts the catalog cannot supply."""
        count = validate_pair_count(self._pair_count if pair_count is None else pair_count)
        deck = deal_deck(count, self._ids, self._rng)
        self.generation += 1
        self._pair_count = count
        self.cards = deck
        self._selected = None
        self._awaiting_match.clear()
        self.particles = []
        logger.info('new round %d with %d pairs', self.generation, count)
        self._notify()

    def choose(self, card_id: int) -> None:
        index = self.card_index(card_id)
        if index is None:
            logger.debug('ignoring unknown card id %r', card_id)
            return
        card = self.cards[index]
        if card.is_face_up or card.is_matched:
            logger.debug('ignoring card %r (face up or matched)', card_id)
            return

        if self._selected is None:
            for other in self.cards:
                if not other.is_matched and other.id not in self._awaiting_match:
                    other.is_face_up = False
            card.is_face_up = True
            self._selected = index
            self._notify()
            return

        first = self.cards[self._selected]
        card.is_face_up = True
        self._selected = None
        generation = self.generation

        if card.content == first.content:
            self._awaiting_match.update((card.id, first.id))
            completes_round = all(c.is_matched or c.id in self._awaiting_match for c in self.cards)
            self.trigger_blast(card.content)
            self.scheduler.schedule(MATCH_DELAY, lambda: self._resolve_match(generation, first, card))
            if completes_round:
                for delay, symbol in VICTORY_BURSTS:
                    self.scheduler.schedule(delay, lambda s=symbol: self._victory_blast(generation, s))
        else:
            self.scheduler.schedule(MISMATCH_DELAY, lambda: self._resolve_mismatch(generation, first, card))
        self._notify()

    def trigger_blast(self, content: str) -> None:
        """Replaces the particle list with a fresh burst and clears it once the animation is over."""
        self.particles = make_blast(content, self._rng)
        generation = self.generation
        self.scheduler.schedule(BLAST_DURATION, lambda: self._clear_particles(generation))
        self._notify()

    # ---------- delayed outcomes ----------

    def _is_stale(self, generation: int, what: str) -> bool:
        if generation != self.generation:
            logger.debug('dropping stale %s from round %d (now %d)', what, generation, self.generation)
            return True
        return False

    def _resolve_match(self, generation: int, a: Card, b: Card) -> None:
        if self._is_stale(generation, 'match'):
            return
        a.is_matched = True
        b.is_matched = True
        self._awaiting_match.difference_update((a.id, b.id))
        self._notify()
        if self.is_won:
            logger.info('round %d won', self.generation)

    def _resolve_mismatch(self, generation: int, a: Card, b: Card) -> None:
        if self._is_stale(generation, 'mismatch'):
            return
        pending = self.selected_card_id
        for card in (a, b):
            if card.is_matched or card.id == pending or card.id in self._awaiting_match:
                continue
            card.is_face_up = False
        self._notify()

    def _victory_blast(self, generation: int, symbol: str) -> None:
        if self._is_stale(generation, 'victory burst'):
            return
        self.trigger_blast(symbol)

    def _clear_particles(self, generation: int) -> None:
        if self._is_stale(generation, 'particle clear'):
            return
        self.particles = []
        self._notify()
