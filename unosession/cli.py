"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Run UNO game sessions with random, human and LLM seats")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
    seed: Optional[int] = None,
) -> dict[str, "AgentProtocol"]:
    from unosession.agent.protocol import AgentProtocol
    from unosession.agents.human_agent import HumanAgent
    from unosession.agents.llm_agent import LLMAgent
    from unosession.agents.random_agent import RandomAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    agents: dict[str, AgentProtocol] = {}
    for i, part in enumerate(parts):
        pid = f"player_{i}"
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model

        if kind == "llm":
            agents[pid] = LLMAgent(provider=llm_provider, model=model)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        elif kind == "random":
            agents[pid] = RandomAgent(name=f"Random_{i}", seed=None if seed is None else seed + i)
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'random', 'llm' or 'human'.")
    if len(agents) < 2:
        raise typer.BadParameter("At least two agents are required.")
    return agents


LOG_LEVEL = typer.Option(
    "WARNING", "--log-level", "-l", envvar="UNOSESSION_LOG_LEVEL", help="Logging level"
)
LLM_PROVIDER = typer.Option(
    "openrouter",
    "--llm-provider",
    "-p",
    help="LLM provider: openrouter, groq, ollama or huggingface",
)
LLM_MODEL = typer.Option(
    "openai/gpt-4o-mini",
    "--llm-model",
    "-m",
    help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
)


@app.command()
def play(
    agents: str = typer.Option(
        "random,random,random,random",
        "--agents",
        "-a",
        help="Comma-separated: random, human, llm or llm:model_name (e.g. human,random,llm:gpt-4o)",
    ),
    llm_provider: str = LLM_PROVIDER,
    llm_model: str = LLM_MODEL,
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    max_turns: int = typer.Option(1000, "--max-turns", help="Stop the game after this many turns"),
    log_level: str = LOG_LEVEL,
) -> None:
    """Run a single UNO game."""
    from unosession.orchestration.game_runner import GameRunner

    _configure_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed=seed)
    runner = GameRunner(agent_map, seed=seed, max_turns=max_turns)
    result = runner.run()
    typer.echo(f"Winner: {result.winner or 'None'} ({result.end_reason})")
    typer.echo(f"Turns: {result.num_turns}")


@app.command()
def tournament(
    agents: str = typer.Option(
        "random,random",
        "--agents",
        "-a",
        help="Comma-separated agent types or llm:model_name (e.g. llm:gpt-4o,random)",
    ),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    llm_provider: str = LLM_PROVIDER,
    llm_model: str = LLM_MODEL,
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    max_turns: int = typer.Option(1000, "--max-turns", help="Stop each game after this many turns"),
    log_level: str = LOG_LEVEL,
) -> None:
    """Run a tournament."""
    from unosession.orchestration.tournament import run_tournament

    _configure_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed=seed)
    wins = run_tournament(agent_map, num_games=games, seed=seed, max_turns=max_turns)
    typer.echo("Tournament results:")
    for pid in agent_map:
        typer.echo(f"  {pid} ({agent_map[pid].name}): {wins.get(pid, 0)} wins")


if __name__ == "__main__":
    app()
