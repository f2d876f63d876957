"""Agent protocol - interface that seats (random, human, LLM) implement."""

from typing import Protocol

from unosession.engine import Action, PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        """Choose an action given the player view and legal actions.

        Args:
            player_view: This player's own hand plus the public status.
            legal_actions: List of valid actions to choose from.
            player_id: This agent's player ID.

        Returns:
            One of the legal actions, or None to take the default
            (draw, or the first offered color while a choice is pending).
        """
        ...
