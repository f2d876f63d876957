"""Tests for the runner, tournament, session registry and agent helpers."""

import threading

import pytest
from typer.testing import CliRunner

from conftest import table
from unosession.agents import RandomAgent
from unosession.agents.llm_agent import _parse_action_response
from unosession.cli import app
from unosession.engine import ChooseColor, Color, DrawCard, PlayCard
from unosession.orchestration import GameRunner, SessionRegistry, run_tournament


def _random_agents(n: int) -> dict:
    return {f"p{i}": RandomAgent(f"Bot{i}", seed=i) for i in range(n)}


def test_runner_plays_to_an_end() -> None:
    runner = GameRunner(_random_agents(3), seed=42, max_turns=2000)
    result = runner.run()
    assert result.player_ids == ("p0", "p1", "p2")
    assert result.end_reason in ("winner", "deadlock", "max_turns")
    if result.end_reason == "winner":
        assert result.winner in result.player_ids
        assert not runner.session.running
    else:
        assert result.winner is None


def test_runner_is_reproducible() -> None:
    first = GameRunner(_random_agents(2), seed=3).run()
    second = GameRunner(_random_agents(2), seed=3).run()
    assert (first.winner, first.num_turns) == (second.winner, second.num_turns)


def test_runner_respects_max_turns() -> None:
    result = GameRunner(_random_agents(4), seed=1, max_turns=5).run()
    assert result.num_turns <= 5


class _IllegalAgent:
    """Always answers with a card it does not hold."""

    name = "cheater"

    def get_action(self, player_view, legal_actions, player_id):
        return PlayCard("no-such-card")


def test_runner_replaces_illegal_choices() -> None:
    agents = {"p0": _IllegalAgent(), "p1": _IllegalAgent()}
    result = GameRunner(agents, seed=8, max_turns=20).run()
    assert result.num_turns > 0


def test_tournament_counts_wins() -> None:
    wins = run_tournament(_random_agents(2), num_games=4, seed=5)
    assert set(wins) <= {"p0", "p1"}
    assert sum(wins.values()) <= 4


def test_registry_isolates_sessions() -> None:
    registry = SessionRegistry()
    registry.create("a", seed=1)
    registry.create("b", seed=2)
    with pytest.raises(KeyError):
        registry.create("a")

    with registry.locked("a") as session:
        session.add_player("x", "X")
        session.add_player("y", "Y")
        assert session.start()
    with registry.locked("b") as session:
        assert not session.running
    assert sorted(registry.session_ids()) == ["a", "b"]

    registry.remove("b")
    assert "b" not in registry
    with pytest.raises(KeyError):
        with registry.locked("b"):
            pass


def test_registry_serializes_access() -> None:
    registry = SessionRegistry()
    registry.create("s")
    inside = []
    overlaps = []

    def worker() -> None:
        for _ in range(200):
            with registry.locked("s"):
                inside.append(1)
                if len(inside) > 1:
                    overlaps.append(1)
                inside.pop()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert overlaps == []


def test_random_agent_prefers_plays() -> None:
    session = table(2)
    view = session.player_view("p0")
    legal = session.legal_actions("p0")
    action = RandomAgent(seed=0).get_action(view, legal, "p0")
    if any(isinstance(a, PlayCard) for a in legal):
        assert isinstance(action, PlayCard)
    else:
        assert action == DrawCard()


def test_parse_action_response_json() -> None:
    actions = [PlayCard("a"), PlayCard("b"), DrawCard()]
    assert _parse_action_response('{"action_index": 1}', actions) == PlayCard("b")
    assert _parse_action_response("Sure! {'action_index': 0}", actions) == PlayCard("a")


def test_parse_action_response_fallbacks() -> None:
    actions = [ChooseColor(Color.RED), ChooseColor(Color.BLUE)]
    assert _parse_action_response("action_index: 1", actions) == ChooseColor(Color.BLUE)
    assert _parse_action_response("I pick 0.", actions) == ChooseColor(Color.RED)
    assert _parse_action_response("no idea", actions) is None
    assert _parse_action_response("I will DRAW", [PlayCard("a"), DrawCard()]) == DrawCard()


def test_cli_play_with_random_agents() -> None:
    result = CliRunner().invoke(app, ["play", "--agents", "random,random", "--seed", "4"])
    assert result.exit_code == 0
    assert "Winner:" in result.output


def test_cli_rejects_unknown_agent() -> None:
    result = CliRunner().invoke(app, ["play", "--agents", "random,robot"])
    assert result.exit_code != 0
