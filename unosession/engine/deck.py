"""Draw and discard piles."""

import logging
import random
from typing import Iterable, List, Optional

from unosession.engine.card import Card, Rank

logger = logging.getLogger(__name__)


class DrawPile:
    """Face-down pile. The top is the end of the list."""

    def __init__(self, cards: Iterable[Card] = (), rng: Optional[random.Random] = None):
        self._cards: List[Card] = list(cards)
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._cards)

    def shuffle(self) -> None:
        """Shuffle in place (``random.shuffle`` is an unbiased Fisher-Yates)."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Optional[Card]:
        """Remove and return the top card, or None when the pile is empty."""
        if not self._cards:
            return None
        return self._cards.pop()

    def add(self, cards: Iterable[Card]) -> None:
        """Put cards back without shuffling."""
        self._cards.extend(cards)

    def add_and_shuffle(self, card: Card) -> None:
        self._cards.append(card)
        self.shuffle()

    def holds_other_than(self, rank: Rank) -> bool:
        """True if any card in the pile has a different rank."""
        return any(c.rank is not rank for c in self._cards)


class DiscardPile:
    """Face-up pile. The top (last) card is the active card."""

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards: List[Card] = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def top(self) -> Optional[Card]:
        return self._cards[-1] if self._cards else None

    def push(self, card: Card) -> None:
        self._cards.append(card)

    def reclaimable(self) -> int:
        """Number of cards a reclaim would return (everything but the top)."""
        return max(len(self._cards) - 1, 0)

    def take_all_but_top(self) -> List[Card]:
        """Empty the pile except for its top card and return the rest."""
        if len(self._cards) <= 1:
            return []
        rest, self._cards = self._cards[:-1], self._cards[-1:]
        return rest


def reclaim_discard(draw_pile: DrawPile, discard_pile: DiscardPile) -> bool:
    """Move all but the top discard back into the draw pile and reshuffle.

    Returns False, leaving both piles untouched, when the discard pile holds
    one card or fewer.
    """
    if discard_pile.reclaimable() == 0:
        return False
    reclaimed = discard_pile.take_all_but_top()
    draw_pile.add(reclaimed)
    draw_pile.shuffle()
    logger.info("Reclaimed %d discards into the draw pile", len(reclaimed))
    return True
