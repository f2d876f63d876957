"""Game engine for UNO."""

from unosession.engine.card import Card, Color, Rank, build_standard_deck
from unosession.engine.deck import DiscardPile, DrawPile, reclaim_discard
from unosession.engine.game_state import (
    ColorPending,
    ColorResolved,
    Direction,
    Phase,
    PlayerInfo,
    PlayerView,
    StatusSnapshot,
    TurnState,
)
from unosession.engine.hand import Hand, Player
from unosession.engine.outcomes import Outcome, Reason
from unosession.engine.rules import (
    Action,
    ChooseColor,
    DrawCard,
    GameSession,
    PlayCard,
)

__all__ = [
    "Card",
    "Color",
    "Rank",
    "build_standard_deck",
    "DrawPile",
    "DiscardPile",
    "reclaim_discard",
    "ColorPending",
    "ColorResolved",
    "Direction",
    "Phase",
    "PlayerInfo",
    "PlayerView",
    "StatusSnapshot",
    "TurnState",
    "Hand",
    "Player",
    "Outcome",
    "Reason",
    "Action",
    "PlayCard",
    "DrawCard",
    "ChooseColor",
    "GameSession",
]
