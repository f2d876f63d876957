"""Tests for cards and the standard deck catalog."""

from collections import Counter

import pytest

from unosession.engine import Card, Color, Rank, build_standard_deck
from unosession.engine.card import NUMBER_RANKS, SUIT_COLORS


def test_standard_deck_size() -> None:
    assert len(build_standard_deck()) == 108


def test_standard_deck_composition() -> None:
    faces = Counter(card.face for card in build_standard_deck())
    for color in SUIT_COLORS:
        assert faces[(color, Rank.ZERO)] == 1
        for rank in NUMBER_RANKS[1:]:
            assert faces[(color, rank)] == 2
        for rank in (Rank.SKIP, Rank.REVERSE, Rank.DRAW_TWO):
            assert faces[(color, rank)] == 2
        assert sum(n for (c, _), n in faces.items() if c is color) == 25
    assert faces[(Color.WILD, Rank.WILD)] == 4
    assert faces[(Color.WILD, Rank.WILD_DRAW_FOUR)] == 4


def test_standard_deck_is_deterministic() -> None:
    d1 = build_standard_deck()
    d2 = build_standard_deck()
    assert [c.face for c in d1] == [c.face for c in d2]


def test_card_ids_are_unique() -> None:
    deck = build_standard_deck() + build_standard_deck()
    assert len({c.id for c in deck}) == len(deck)


def test_duplicate_faces_are_distinct_cards() -> None:
    a = Card(Color.RED, Rank.DRAW_TWO)
    b = Card(Color.RED, Rank.DRAW_TWO)
    assert a.face == b.face
    assert a != b


@pytest.mark.parametrize(
    "color, rank",
    [
        (Color.WILD, Rank.SEVEN),
        (Color.RED, Rank.WILD),
        (Color.BLUE, Rank.WILD_DRAW_FOUR),
    ],
)
def test_wild_invariant_enforced(color: Color, rank: Rank) -> None:
    with pytest.raises(ValueError):
        Card(color, rank)


def test_card_str() -> None:
    assert str(Card(Color.GREEN, Rank.SKIP)) == "green_skip"
    assert str(Card(Color.WILD, Rank.WILD_DRAW_FOUR)) == "wild_draw_four"
