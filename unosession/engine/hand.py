"""Player hands."""

from typing import Iterator, List, Optional, Tuple

from unosession.engine.card import Card


class Hand:
    """Unordered collection of cards owned by one player.

    Lookup and removal go by card id, never by color/rank, since a hand may
    hold several cards with the same face.
    """

    def __init__(self) -> None:
        self._cards: List[Card] = []

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    def add(self, card: Card) -> None:
        self._cards.append(card)

    def remove(self, card: Card) -> bool:
        for i, held in enumerate(self._cards):
            if held.id == card.id:
                del self._cards[i]
                return True
        return False

    def find_by_id(self, card_id: str) -> Optional[Card]:
        return next((c for c in self._cards if c.id == card_id), None)

    def clear(self) -> None:
        self._cards = []


class Player:
    """A seated player: opaque id, display name and hand."""

    def __init__(self, player_id: str, name: str):
        self.id = player_id
        self.name = name
        self.hand = Hand()

    def __repr__(self) -> str:
        return f"Player(id={self.id!r}, name={self.name!r}, cards={len(self.hand)})"
