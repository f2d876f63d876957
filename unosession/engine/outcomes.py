"""Structured results for engine operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from unosession.engine.game_state import StatusSnapshot


class Reason(str, Enum):
    """Why an operation was rejected."""

    NOT_RUNNING = "not_running"
    NOT_YOUR_TURN = "not_your_turn"
    UNKNOWN_PLAYER = "unknown_player"
    CARD_NOT_FOUND = "card_not_found"
    ILLEGAL_PLAY = "illegal_play"
    AWAITING_COLOR_CHOICE = "awaiting_color_choice"
    NO_COLOR_CHOICE_PENDING = "no_color_choice_pending"
    INVALID_COLOR_CHOICE = "invalid_color_choice"
    INSUFFICIENT_PLAYERS = "insufficient_players"
    PILE_EXHAUSTED = "pile_exhausted"
    GAME_IN_PROGRESS = "game_in_progress"
    DUPLICATE_PLAYER = "duplicate_player"
    INVALID_PLAYER = "invalid_player"


@dataclass(frozen=True)
class Outcome:
    """Result of a session operation.

    Truthy iff the operation was accepted. A rejected operation never
    changes session state.
    """

    ok: bool
    reason: Optional[Reason] = None
    message: str = ""
    status: Optional["StatusSnapshot"] = None

    def __bool__(self) -> bool:
        return self.ok
