"""Single game runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unosession.engine import ChooseColor, DrawCard, GameSession, Reason

if TYPE_CHECKING:
    from unosession.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]
    num_turns: int
    player_ids: tuple[str, ...]
    end_reason: str  # "winner", "deadlock" or "max_turns"


class GameRunner:
    """Runs a single UNO game to completion."""

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        seed: Optional[int] = None,
        max_turns: int = 1000,
    ):
        self._agents = agents
        self._max_turns = max_turns
        self.session = GameSession(seed=seed)
        for pid, agent in agents.items():
            outcome = self.session.add_player(pid, agent.name)
            if not outcome:
                raise ValueError(outcome.message)

    def run(self) -> GameResult:
        """Run the game and return the result."""
        session = self.session
        player_ids = tuple(self._agents.keys())
        started = session.start()
        if not started:
            raise ValueError(started.message)

        num_turns = 0
        end_reason = "max_turns"
        while session.running and num_turns < self._max_turns:
            pid = session.current_player.id
            legal = session.legal_actions(pid)
            view = session.player_view(pid)
            action = self._agents[pid].get_action(view, legal, pid)
            if action is None or action not in legal:
                action = _default_action(legal)

            outcome = session.apply(pid, action)
            if not outcome and outcome.reason is not Reason.PILE_EXHAUSTED:
                logger.warning("%s: %s; falling back", pid, outcome.message)
                outcome = session.apply(pid, _default_action(legal))
            if not outcome:
                if outcome.reason is Reason.PILE_EXHAUSTED:
                    end_reason = "deadlock"
                    break
                raise RuntimeError(f"Engine rejected fallback action: {outcome.message}")
            num_turns += 1

        if session.winner_id is not None:
            end_reason = "winner"
        logger.info("Game over after %d turns (%s)", num_turns, end_reason)
        return GameResult(
            winner=session.winner_id,
            num_turns=num_turns,
            player_ids=player_ids,
            end_reason=end_reason,
        )


def _default_action(legal):
    """Draw if drawing is offered, otherwise the first color choice."""
    return next((a for a in legal if isinstance(a, (DrawCard, ChooseColor))), legal[0])
