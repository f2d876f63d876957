"""Card and Color types for UNO, plus the standard deck catalog."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple
from uuid import uuid4


class Color(str, Enum):
    """Card colors. WILD marks the two wild ranks."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    WILD = "wild"


class Rank(str, Enum):
    """Card ranks."""

    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


SUIT_COLORS = (Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE)
NUMBER_RANKS = (
    Rank.ZERO, Rank.ONE, Rank.TWO, Rank.THREE, Rank.FOUR,
    Rank.FIVE, Rank.SIX, Rank.SEVEN, Rank.EIGHT, Rank.NINE,
)
WILD_RANKS = (Rank.WILD, Rank.WILD_DRAW_FOUR)
DRAW_RANKS = (Rank.DRAW_TWO, Rank.WILD_DRAW_FOUR)

DECK_SIZE = 108


def _new_card_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class Card:
    """A UNO card.

    Wild and wild_draw_four cards carry Color.WILD; every other rank carries
    one of the four suit colors. ``id`` is unique per process so that two
    red 7s in the same hand are still different cards.
    """

    color: Color
    rank: Rank
    id: str = field(default_factory=_new_card_id)

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise ValueError(f"Invalid card color: {self.color!r}")
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid card rank: {self.rank!r}")
        if self.rank in WILD_RANKS and self.color is not Color.WILD:
            raise ValueError("Wild cards must have color=WILD")
        if self.rank not in WILD_RANKS and self.color is Color.WILD:
            raise ValueError("Non-wild cards must have a suit color")

    @property
    def face(self) -> Tuple[Color, Rank]:
        """Color and rank, ignoring identity."""
        return (self.color, self.rank)

    @property
    def is_wild(self) -> bool:
        return self.color is Color.WILD

    @property
    def is_number(self) -> bool:
        return self.rank in NUMBER_RANKS

    def __str__(self) -> str:
        if self.is_wild:
            return self.rank.value
        return f"{self.color.value}_{self.rank.value}"


def build_standard_deck() -> List[Card]:
    """Create a standard 108-card UNO deck in catalog order (unshuffled).

    - 4 colors x (one 0, two each of 1-9, Skip, Reverse, Draw Two): 100 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in SUIT_COLORS:
        cards.append(Card(color=color, rank=Rank.ZERO))
        for rank in NUMBER_RANKS[1:]:
            cards.append(Card(color=color, rank=rank))
            cards.append(Card(color=color, rank=rank))
        for rank in (Rank.SKIP, Rank.REVERSE, Rank.DRAW_TWO):
            cards.append(Card(color=color, rank=rank))
            cards.append(Card(color=color, rank=rank))

    for _ in range(4):
        cards.append(Card(color=Color.WILD, rank=Rank.WILD))
    for _ in range(4):
        cards.append(Card(color=Color.WILD, rank=Rank.WILD_DRAW_FOUR))

    return cards
