"""Shared fixtures and pile-rigging helpers.

Helpers only move existing cards between the draw pile, discard pile and
hands, so the 108-card total is preserved.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional, Tuple

import pytest

from unosession.engine import Card, Color, GameSession, Rank, TurnState
from unosession.engine.rules import HAND_SIZE


def total_cards(session: GameSession) -> int:
    status = session.status()
    return (
        status.draw_pile_count
        + status.discard_pile_count
        + sum(p.card_count for p in status.players)
    )


def take(session: GameSession, color: Color, rank: Rank) -> Card:
    """Pull a card with this face out of the draw pile (or a hand)."""
    pile = session.draw_pile._cards
    for i, card in enumerate(pile):
        if card.face == (color, rank):
            return pile.pop(i)
    for player in session.players:
        for card in player.hand:
            if card.face == (color, rank):
                player.hand.remove(card)
                return card
    raise LookupError(f"No {color.value} {rank.value} left to take")


def give(session: GameSession, index: int, color: Color, rank: Rank) -> Card:
    card = take(session, color, rank)
    session.players[index].hand.add(card)
    return card


def set_hand(session: GameSession, index: int, faces: Iterable[Tuple[Color, Rank]]) -> list:
    """Return the player's hand to the draw pile and deal exactly ``faces``."""
    player = session.players[index]
    session.draw_pile.add(player.hand.cards)
    player.hand.clear()
    return [give(session, index, color, rank) for color, rank in faces]


def set_top(session: GameSession, color: Color, rank: Rank) -> Card:
    card = take(session, color, rank)
    session.discard_pile.push(card)
    return card


def bury_draw_pile(session: GameSession) -> None:
    """Move the whole draw pile underneath the current top discard."""
    top = session.discard_pile.top()
    buried = session.draw_pile._cards
    session.draw_pile._cards = []
    session.discard_pile._cards = buried + session.discard_pile._cards[:-1] + [top]


def make_session(num_players: int, seed: int = 7, rng: Optional[random.Random] = None) -> GameSession:
    session = GameSession(seed=seed, rng=rng)
    for i in range(num_players):
        assert session.add_player(f"p{i}", f"Player {i}")
    assert session.start()
    return session


def table(num_players: int, seed: int = 7) -> GameSession:
    """A started session reset to a plain position: seat 0 to act, red 5 on top."""
    session = make_session(num_players, seed=seed)
    session.turn = TurnState()
    set_top(session, Color.RED, Rank.FIVE)
    return session


class FirstCardRigged(random.Random):
    """RNG whose first shuffle puts a card of the rigged rank where the opening card is turned."""

    shuffles = 0

    def rig(self, rank: Rank, num_players: int) -> "FirstCardRigged":
        self.rank = rank
        self.depth = HAND_SIZE * num_players + 1
        self.shuffles = 0
        return self

    def shuffle(self, x) -> None:
        self.shuffles += 1
        super().shuffle(x)
        if self.shuffles == 1:
            i = next(i for i, c in enumerate(x) if c.rank is self.rank)
            j = len(x) - self.depth
            x[i], x[j] = x[j], x[i]


@pytest.fixture
def two_player() -> GameSession:
    return table(2)


@pytest.fixture
def three_player() -> GameSession:
    return table(3)


@pytest.fixture
def four_player() -> GameSession:
    return table(4)


class UndealtRigged(random.Random):
    """RNG whose first shuffle leaves only Wild Draw Fours at the bottom of the deck."""

    shuffles = 0

    def rig(self, undealt: int) -> "UndealtRigged":
        self.undealt = undealt
        self.shuffles = 0
        return self

    def shuffle(self, x) -> None:
        self.shuffles += 1
        super().shuffle(x)
        if self.shuffles == 1:
            wild_fours = [i for i, c in enumerate(x) if c.rank is Rank.WILD_DRAW_FOUR]
            for j, i in zip(range(self.undealt), wild_fours):
                x[i], x[j] = x[j], x[i]
