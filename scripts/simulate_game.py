"""Simulate a seeded game with random agents and print the result."""

import logging

from unosession.agents import RandomAgent
from unosession.orchestration.game_runner import GameRunner


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    agents = {
        "p1": RandomAgent("Bot1", seed=1),
        "p2": RandomAgent("Bot2", seed=2),
        "p3": RandomAgent("Bot3", seed=3),
        "p4": RandomAgent("Bot4", seed=4),
    }

    runner = GameRunner(agents, seed=42)
    result = runner.run()

    print(f"Game finished! Winner: {result.winner} ({result.end_reason})")
    print(f"Turns: {result.num_turns}")
    print(f"Last event: {runner.session.status().message}")


if __name__ == "__main__":
    main()
