"""Human agent - reads actions from terminal."""

from unosession.engine import Action, ChooseColor, DrawCard, PlayCard, PlayerView


def describe_action(action: Action, player_view: PlayerView) -> str:
    """One-line label for an action, resolving card ids against the hand."""
    if isinstance(action, DrawCard):
        owed = player_view.status.pending_draw_amount
        return f"DRAW {owed} (penalty)" if owed else "DRAW"
    if isinstance(action, ChooseColor):
        return f"COLOR {action.color.value}"
    card = next((c for c in player_view.my_hand if c.id == action.card_id), None)
    return f"PLAY {card if card is not None else action.card_id}"


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        if not legal_actions:
            return None

        status = player_view.status
        print("\n--- Your turn ---")
        if status.message:
            print("Last:", status.message)
        print("Your hand:", " ".join(str(c) for c in player_view.my_hand))
        print("Top discard:", player_view.top_discard)
        if status.active_wild_color is not None:
            print("Color in force:", status.active_wild_color.value)
        print("Others:", ", ".join(
            f"{p.name}={p.card_count}" for p in status.players if p.id != player_id
        ))
        print("\nLegal actions:")
        for i, a in enumerate(legal_actions):
            print(f"  {i}: {describe_action(a, player_view)}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")
