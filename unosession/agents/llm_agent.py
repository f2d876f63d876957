"""LLM agent using OpenAI library with OpenRouter, Groq, Ollama or Hugging Face."""

import json
import logging
import os
import re
import time
from typing import Optional

from openai import OpenAI

from unosession.agents.human_agent import describe_action
from unosession.engine import Action, ChooseColor, Direction, DrawCard, PlayerView

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"


def _format_player_view(pv: PlayerView, player_id: str) -> str:
    """Format player view as text for the LLM."""
    status = pv.status
    color = pv.color_to_match
    lines = [
        "=== Your hand ===",
        " ".join(str(c) for c in pv.my_hand),
        "",
        "=== Top card on discard ===",
        str(pv.top_discard) if pv.top_discard else "None",
        "",
        "=== Current color to match ===",
        color.value.upper() if color else "any",
        "",
        "=== Other players' card counts ===",
    ]
    for info in status.players:
        if info.id != player_id:
            lines.append(f"  {info.name}: {info.card_count} cards")
    lines.extend([
        "",
        "=== Direction ===",
        "clockwise" if status.direction is Direction.FORWARD else "counter-clockwise",
        "",
        "=== Cards you must draw before playing normally ===",
        str(status.pending_draw_amount),
        "",
        "=== Last event ===",
        status.message or "None",
    ])
    return "\n".join(lines)


def _format_legal_actions(actions: list[Action], pv: PlayerView) -> str:
    """Format legal actions as text."""
    return "\n".join(f"{i}: {describe_action(a, pv)}" for i, a in enumerate(actions))


def _pick(idx: int, actions: list[Action]) -> Action | None:
    if 0 <= idx < len(actions):
        return actions[idx]
    logger.debug("Index %d out of range (0-%d)", idx, len(actions) - 1)
    return None


def _parse_action_response(response: str, actions: list[Action]) -> Action | None:
    """Parse LLM response into an Action."""
    # 1. Try to find a JSON-like object in the response
    json_match = re.search(r'(\{.*?\})', response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        # Strict JSON first, then single quotes swapped for double
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except ValueError:
                continue
            if isinstance(data, dict) and isinstance(data.get("action_index"), int):
                action = _pick(data["action_index"], actions)
                if action is not None:
                    return action
            break

    # 2. Targeted regex for "action_index": N, with or without quotes
    match = re.search(r'["\']?action_index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        action = _pick(int(match.group(1)), actions)
        if action is not None:
            return action

    # 3. Fallback: Look for "DRAW" literally
    if "DRAW" in response.upper():
        for a in actions:
            if isinstance(a, DrawCard):
                return a

    # 4. Last resort: a standalone number
    cleaned_response = re.sub(r'[{}\[\]"\'.,:]', ' ', response)
    for word in cleaned_response.split():
        if word.isdigit():
            action = _pick(int(word), actions)
            if action is not None:
                return action

    return None


class LLMAgent:
    """Agent that uses an LLM to choose actions."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
    ):
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not key:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")

        self._client = OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # Requests per minute
        self._request_history: list[float] = []

        logger.info(
            "[%s] provider=%s base_url=%s timeout=%ss rate_limit=%s rpm",
            self.name, provider, base_url, timeout, rate_limit or "None",
        )

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            # Wait until the oldest request in the window expires
            wait_time = 60.0 - (now - self._request_history[0])
            if wait_time > 0:
                logger.info("[%s] Rate limit reached, waiting %.2fs", self.name, wait_time)
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        if not legal_actions:
            return None

        if isinstance(legal_actions[0], ChooseColor):
            task = "You just played a wild card. Choose the color the next player must match."
        else:
            task = (
                "Match the top discard card by color (or the chosen wild color) or by value. "
                "Wild cards can be played on anything. If you owe penalty cards you may only "
                "stack a draw_two or wild_draw_four, otherwise you must DRAW."
            )

        prompt = f"""You are playing UNO.
Objective: Win by playing all your cards. {task}

{_format_player_view(player_view, player_id)}

=== Legal actions ===
{_format_legal_actions(legal_actions, player_view)}

INSTRUCTIONS:
Select the best action to win the game.
Respond with a JSON object containing the index of your chosen action.
Example: {{"action_index": 2}}
"""

        for attempt in range(1, 4):
            start_time = time.time()
            try:
                self._wait_for_rate_limit()

                kwargs = {
                    "model": self._model,
                    "messages": [{"role": "user", "content": prompt}],
                    "timeout": self._timeout,
                }
                # Only pass response_format where JSON mode is known to work
                if "gpt-4" in self._model or "gpt-3.5" in self._model or "groq" in self._provider:
                    kwargs["response_format"] = {"type": "json_object"}

                logger.debug("[%s] Attempt %d: sending request to %s", self.name, attempt, self._provider)
                resp = self._client.chat.completions.create(**kwargs)

                content = resp.choices[0].message.content or ""
                logger.debug("[%s] Received response in %.2fs", self.name, time.time() - start_time)

                action = _parse_action_response(content, legal_actions)
                if action is not None:
                    return action

                logger.warning("[%s] Failed to parse action from response: %r", self.name, content)
            except Exception as e:
                logger.warning(
                    "[%s] Error on attempt %d after %.2fs: %s: %s",
                    self.name, attempt, time.time() - start_time, type(e).__name__, e,
                )

        logger.warning("[%s] All retries failed. Defaulting to draw/first action.", self.name)
        for a in legal_actions:
            if isinstance(a, DrawCard):
                return a
        return legal_actions[0]
