"""Built-in agents."""

from unosession.agents.human_agent import HumanAgent
from unosession.agents.llm_agent import LLMAgent
from unosession.agents.random_agent import RandomAgent

__all__ = ["LLMAgent", "HumanAgent", "RandomAgent"]
