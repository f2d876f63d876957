"""Tournament - run many independent sessions and aggregate results."""

import random
from collections import defaultdict
from typing import Any

from unosession.orchestration.game_runner import GameRunner


def run_tournament(
    agents: dict[str, Any],
    num_games: int = 100,
    seed: int | None = None,
    max_turns: int = 1000,
) -> dict[str, int]:
    """Run ``num_games`` games between the same agents.

    Seat order alternates between games so no agent always leads. Each game
    gets its own session and its own derived seed.

    Returns:
        Dict mapping player_id to number of wins (players with no wins are omitted).
    """
    player_ids = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for g in range(num_games):
        order = player_ids if g % 2 == 0 else list(reversed(player_ids))
        ordered_agents = {pid: agents[pid] for pid in order}
        runner = GameRunner(ordered_agents, seed=rng.randint(0, 2**31 - 1), max_turns=max_turns)
        result = runner.run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
