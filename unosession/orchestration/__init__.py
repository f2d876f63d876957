"""Game orchestration."""

from unosession.orchestration.game_runner import GameResult, GameRunner
from unosession.orchestration.registry import SessionRegistry
from unosession.orchestration.tournament import run_tournament

__all__ = ["GameRunner", "GameResult", "SessionRegistry", "run_tournament"]
