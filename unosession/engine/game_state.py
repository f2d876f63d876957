"""Turn state and the read-only views built from it."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from unosession.engine.card import Card, Color


class Phase(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


class Direction(int, Enum):
    FORWARD = 1
    BACKWARD = -1

    def flipped(self) -> "Direction":
        return Direction.BACKWARD if self is Direction.FORWARD else Direction.FORWARD


@dataclass(frozen=True)
class ColorResolved:
    """No choice outstanding. ``color`` is the color picked for a wild on
    top of the discard pile, or None when the top card's own color applies."""

    color: Optional[Color] = None


@dataclass(frozen=True)
class ColorPending:
    """A wild-family card was just played and its color is still open."""

    card: Card


ColorState = Union[ColorResolved, ColorPending]


@dataclass
class TurnState:
    """Mutable turn record owned by a GameSession."""

    current_index: int = 0
    direction: Direction = Direction.FORWARD
    pending_draw: int = 0  # cards the current player owes before acting
    color: ColorState = field(default_factory=ColorResolved)

    @property
    def awaiting_color_choice(self) -> bool:
        return isinstance(self.color, ColorPending)

    @property
    def active_wild_color(self) -> Optional[Color]:
        if isinstance(self.color, ColorResolved):
            return self.color.color
        return None


@dataclass(frozen=True)
class PlayerInfo:
    """Public per-player data. Never includes hand contents."""

    id: str
    name: str
    card_count: int


@dataclass(frozen=True)
class StatusSnapshot:
    """Public, read-only status of a session."""

    phase: Phase
    active_card: Optional[Card]
    current_player_id: Optional[str]
    direction: Direction
    draw_pile_count: int
    discard_pile_count: int
    awaiting_color_choice: bool
    active_wild_color: Optional[Color]
    pending_draw_amount: int
    players: Tuple[PlayerInfo, ...]
    winner_id: Optional[str] = None
    message: str = ""

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    def card_count(self, player_id: str) -> Optional[int]:
        for info in self.players:
            if info.id == player_id:
                return info.card_count
        return None


@dataclass(frozen=True)
class PlayerView:
    """What a single player may see: their own hand and the public status."""

    player_id: str
    my_hand: Tuple[Card, ...]
    status: StatusSnapshot

    @property
    def top_discard(self) -> Optional[Card]:
        return self.status.active_card

    @property
    def color_to_match(self) -> Optional[Color]:
        """Chosen wild color if one is in force, else the top card's color."""
        if self.status.active_wild_color is not None:
            return self.status.active_wild_color
        top = self.status.active_card
        return top.color if top is not None else None
