"""UNO rules: the turn engine for one game session."""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from unosession.engine.card import (
    DRAW_RANKS,
    SUIT_COLORS,
    Card,
    Color,
    Rank,
    build_standard_deck,
)
from unosession.engine.deck import DiscardPile, DrawPile, reclaim_discard
from unosession.engine.game_state import (
    ColorPending,
    ColorResolved,
    Phase,
    PlayerInfo,
    PlayerView,
    StatusSnapshot,
    TurnState,
)
from unosession.engine.hand import Player
from unosession.engine.outcomes import Outcome, Reason

logger = logging.getLogger(__name__)

HAND_SIZE = 7
MIN_PLAYERS = 2


@dataclass(frozen=True)
class PlayCard:
    """Action: play the card with this id from your hand."""

    card_id: str


@dataclass(frozen=True)
class DrawCard:
    """Action: draw one card, or pay the pending penalty."""

    pass


@dataclass(frozen=True)
class ChooseColor:
    """Action: name the color for the wild you just played."""

    color: Color


Action = Union[PlayCard, DrawCard, ChooseColor]


class GameSession:
    """Authoritative state for a single game.

    Not thread-safe: callers serialize access per session (see
    ``unosession.orchestration.registry``). Every operation either applies
    fully or returns a rejected ``Outcome`` without touching state.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random(seed)
        self._players: List[Player] = []
        self.draw_pile = DrawPile(rng=self._rng)
        self.discard_pile = DiscardPile()
        self.turn = TurnState()
        self.phase = Phase.NOT_STARTED
        self.winner_id: Optional[str] = None
        self.message = ""

    # -- queries ---------------------------------------------------------

    @property
    def players(self) -> tuple:
        return tuple(self._players)

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def active_card(self) -> Optional[Card]:
        return self.discard_pile.top()

    @property
    def current_player(self) -> Optional[Player]:
        if not self.running or not self._players:
            return None
        return self._players[self.turn.current_index]

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self._players if p.id == player_id), None)

    def status(self) -> StatusSnapshot:
        current = self.current_player
        return StatusSnapshot(
            phase=self.phase,
            active_card=self.active_card,
            current_player_id=current.id if current else None,
            direction=self.turn.direction,
            draw_pile_count=len(self.draw_pile),
            discard_pile_count=len(self.discard_pile),
            awaiting_color_choice=self.turn.awaiting_color_choice,
            active_wild_color=self.turn.active_wild_color,
            pending_draw_amount=self.turn.pending_draw,
            players=tuple(PlayerInfo(p.id, p.name, len(p.hand)) for p in self._players),
            winner_id=self.winner_id,
            message=self.message,
        )

    def player_view(self, player_id: str) -> Optional[PlayerView]:
        """The given player's own hand plus public status, or None if unseated."""
        player = self.get_player(player_id)
        if player is None:
            return None
        return PlayerView(player_id=player.id, my_hand=player.hand.cards, status=self.status())

    def is_playable(self, card: Card) -> bool:
        """Check a card against the active card and the current turn state."""
        top = self.active_card
        if not self.running or top is None:
            return False
        if self.turn.pending_draw > 0:
            # Only a draw card may be stacked, and only onto a draw card.
            return card.rank in DRAW_RANKS and top.rank in DRAW_RANKS
        if card.is_wild:
            return True
        wild_color = self.turn.active_wild_color
        if wild_color is not None:
            return card.color == wild_color
        return card.color == top.color or card.rank == top.rank

    def legal_actions(self, player_id: str) -> List[Action]:
        """Return all legal actions for the player (empty when not their turn)."""
        current = self.current_player
        if current is None or current.id != player_id:
            return []
        if self.turn.awaiting_color_choice:
            return [ChooseColor(color) for color in SUIT_COLORS]
        actions: List[Action] = [PlayCard(c.id) for c in current.hand if self.is_playable(c)]
        actions.append(DrawCard())
        return actions

    # -- roster ----------------------------------------------------------

    def add_player(self, player_id: str, name: str) -> Outcome:
        if self.running:
            return self._reject(Reason.GAME_IN_PROGRESS, "Cannot add players while a game is running")
        if not _valid_label(player_id) or not _valid_label(name):
            return self._reject(Reason.INVALID_PLAYER, "Player id and name must be non-empty")
        if self.get_player(player_id) is not None:
            return self._reject(Reason.DUPLICATE_PLAYER, f"Player {player_id} is already seated")
        self._players.append(Player(player_id, name))
        return self._accept(f"{name} joined ({len(self._players)} players)")

    # -- operations ------------------------------------------------------

    def start(self, players: Optional[Sequence[Player]] = None) -> Outcome:
        """Deal a new game. Restarting resets everything except the roster."""
        if players is None:
            roster = list(self._players)
        else:
            roster = list(players)
            problem = _roster_problem(roster)
            if problem is not None:
                return self._reject(*problem)
        if len(roster) < MIN_PLAYERS:
            return self._reject(
                Reason.INSUFFICIENT_PLAYERS,
                f"Need at least {MIN_PLAYERS} players, have {len(roster)}",
            )

        pile = DrawPile(build_standard_deck(), rng=self._rng)
        pile.shuffle()
        dealt: Dict[str, List[Card]] = {p.id: [] for p in roster}
        for _ in range(HAND_SIZE):
            for player in roster:
                card = pile.draw()
                if card is None:
                    return self._reject(Reason.PILE_EXHAUSTED, "Deck ran out during the deal")
                dealt[player.id].append(card)

        first = pile.draw()
        if first is None:
            return self._reject(Reason.PILE_EXHAUSTED, "Deck empty when turning the first card")
        if first.rank is Rank.WILD_DRAW_FOUR and not pile.holds_other_than(Rank.WILD_DRAW_FOUR):
            return self._reject(Reason.PILE_EXHAUSTED, "Only Wild Draw Fours left to open with")
        # The game may never open on a Wild Draw Four.
        while first.rank is Rank.WILD_DRAW_FOUR:
            logger.debug("First card was %s; shuffling it back", first)
            pile.add_and_shuffle(first)
            first = pile.draw()

        restarted = self.phase is not Phase.NOT_STARTED
        self._players = roster
        for player in roster:
            player.hand.clear()
            for card in dealt[player.id]:
                player.hand.add(card)
        self.draw_pile = pile
        self.discard_pile = DiscardPile([first])
        self.turn = TurnState()
        self.winner_id = None
        self.phase = Phase.RUNNING
        logger.info(
            "%s game with %d players; first card %s",
            "Restarted" if restarted else "Started", len(roster), first,
        )

        # The first card takes effect as if seat 0 had played it.
        self._resolve(first, roster[0], from_hand=False)
        return self._accept(f"Game started. First card is {first}")

    def play_card(self, player_id: str, card_id: str) -> Outcome:
        player = self.get_player(player_id)
        rejection = self._check_turn(player_id, player)
        if rejection is not None:
            return rejection
        card = player.hand.find_by_id(card_id)
        if card is None:
            return self._reject(Reason.CARD_NOT_FOUND, f"{player.name} does not hold card {card_id}")
        if not self.is_playable(card):
            return self._reject(Reason.ILLEGAL_PLAY, f"{card} cannot be played on {self.active_card}")

        player.hand.remove(card)
        self.discard_pile.push(card)
        self.turn.color = ColorResolved()
        self._resolve(card, player, from_hand=True)

        if self.phase is Phase.FINISHED:
            return self._accept(f"{player.name} played {card} and won")
        if self.turn.awaiting_color_choice:
            return self._accept(f"{player.name} played {card} and must choose a color")
        return self._accept(f"{player.name} played {card}")

    def choose_color(self, player_id: str, color: Union[Color, str]) -> Outcome:
        player = self.get_player(player_id)
        if not self.running:
            return self._reject(Reason.NOT_RUNNING, "No game is running")
        if player is None:
            return self._reject(Reason.UNKNOWN_PLAYER, f"Unknown player {player_id}")
        if not self.turn.awaiting_color_choice:
            return self._reject(Reason.NO_COLOR_CHOICE_PENDING, "No color choice is pending")
        if self.current_player is not player:
            return self._reject(Reason.NOT_YOUR_TURN, f"It is not {player.name}'s turn")
        try:
            chosen = Color(color)
        except ValueError:
            chosen = None
        if chosen is None or chosen is Color.WILD:
            return self._reject(Reason.INVALID_COLOR_CHOICE, f"{color!r} is not a valid color choice")

        wild = self.turn.color.card
        self.turn.color = ColorResolved(chosen)
        if wild.rank is Rank.WILD_DRAW_FOUR:
            self.turn.pending_draw += 4
            self._advance(2)
        else:
            self._advance(1)
        return self._accept(f"{player.name} chose {chosen.value}")

    def draw_card(self, player_id: str) -> Outcome:
        player = self.get_player(player_id)
        rejection = self._check_turn(player_id, player)
        if rejection is not None:
            return rejection

        penalty = self.turn.pending_draw
        count = penalty if penalty > 0 else 1
        available = len(self.draw_pile) + self.discard_pile.reclaimable()
        if available < count:
            logger.warning(
                "Piles exhausted: %s needs %d cards, only %d available",
                player.name, count, available,
            )
            return self._reject(
                Reason.PILE_EXHAUSTED,
                f"Cannot draw {count} card(s): only {available} left in play",
            )

        for _ in range(count):
            player.hand.add(self._draw_one())
        if penalty > 0:
            self.turn.pending_draw = 0
            self.turn.color = ColorResolved()
        self._advance(1)
        if penalty > 0:
            return self._accept(f"{player.name} drew {count} penalty cards")
        return self._accept(f"{player.name} drew a card")

    def apply(self, player_id: str, action: Action) -> Outcome:
        """Dispatch an action value to the matching operation."""
        if isinstance(action, PlayCard):
            return self.play_card(player_id, action.card_id)
        if isinstance(action, DrawCard):
            return self.draw_card(player_id)
        if isinstance(action, ChooseColor):
            return self.choose_color(player_id, action.color)
        raise TypeError(f"Unknown action: {action!r}")

    # -- internals -------------------------------------------------------

    def _check_turn(self, player_id: str, player: Optional[Player]) -> Optional[Outcome]:
        if not self.running:
            return self._reject(Reason.NOT_RUNNING, "No game is running")
        if player is None:
            return self._reject(Reason.UNKNOWN_PLAYER, f"Unknown player {player_id}")
        if self.turn.awaiting_color_choice:
            return self._reject(Reason.AWAITING_COLOR_CHOICE, "A color must be chosen first")
        if self.current_player is not player:
            return self._reject(Reason.NOT_YOUR_TURN, f"It is not {player.name}'s turn")
        return None

    def _resolve(self, card: Card, actor: Player, from_hand: bool) -> None:
        """Apply a card's effect. ``actor`` is the player who put it down."""
        handled = True
        if card.is_number:
            assert self.turn.pending_draw == 0, "number card accepted while a penalty is pending"
            handled = False
        elif card.rank is Rank.SKIP:
            self._advance(2)
        elif card.rank is Rank.REVERSE:
            # Heads-up, Reverse acts as a skip of the only opponent.
            if len(self._players) > 2:
                self.turn.direction = self.turn.direction.flipped()
                self._advance(1)
        elif card.rank is Rank.DRAW_TWO:
            self.turn.pending_draw += 2
            self._advance(1)
        else:
            # Wild and Wild Draw Four wait for choose_color.
            self.turn.color = ColorPending(card)

        if from_hand and len(actor.hand) == 0:
            self.turn.color = ColorResolved()
            self.phase = Phase.FINISHED
            self.winner_id = actor.id
            logger.info("%s won the game", actor.name)
            return
        if not handled:
            self._advance(1)

    def _advance(self, steps: int) -> None:
        count = len(self._players)
        self.turn.current_index = (
            self.turn.current_index + self.turn.direction.value * steps
        ) % count

    def _draw_one(self) -> Card:
        card = self.draw_pile.draw()
        if card is None:
            reclaim_discard(self.draw_pile, self.discard_pile)
            card = self.draw_pile.draw()
        assert card is not None, "draw requested beyond available cards"
        return card

    def _accept(self, message: str) -> Outcome:
        self.message = message
        return Outcome(True, message=message, status=self.status())

    def _reject(self, reason: Reason, message: str) -> Outcome:
        logger.debug("Rejected (%s): %s", reason.value, message)
        return Outcome(False, reason=reason, message=message, status=self.status())


def _valid_label(value: object) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _roster_problem(players: Iterable[Player]) -> Optional[Tuple[Reason, str]]:
    seen = set()
    for player in players:
        if not _valid_label(player.id) or not _valid_label(player.name):
            return Reason.INVALID_PLAYER, "Player id and name must be non-empty"
        if player.id in seen:
            return Reason.DUPLICATE_PLAYER, f"Player {player.id} is listed twice"
        seen.add(player.id)
    return None
