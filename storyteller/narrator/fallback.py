"""Local storyteller used when no language model is configured.

Replies come from small fixed phrase tables and never touch the network.
All randomness comes from ``rng.random()``, drawn in this order per reply:
the text pick (opening and follow-up cases only), the tool roll, then the
color or sticker pick when a tool was rolled.
"""

import random
from typing import Any, Optional, Sequence

from ..logging.interaction_logger import InteractionLogger
from ..state.conversation import Reply, ToolInvocation, Turn, last_turn_with_role
from ..state.tools import CHANGE_BACKGROUND_COLOR, SHOW_REWARD_STICKER

OPENERS: tuple[str, ...] = (
    "Wow, this scene looks so fun! What do you think the children are building?",
    "I see bright colors and toys everywhere. What is your favorite thing in this picture?",
    "It looks like everyone is having a great time. What would you like to play with here?",
)

LISTENING_PROMPT = "I am listening. Can you tell me one thing you notice in the picture?"

FOLLOW_UPS: tuple[str, ...] = (
    "I like that idea! What else could happen next in this picture?",
    "That is so creative! Who do you think is having the most fun?",
    "Great thinking! If you could jump into this picture, what would you do first?",
    "Ooh, I love that! What sounds do you think we would hear in this place?",
    "What a wonderful idea! What do you think they will play with after this?",
)

BACKGROUND_COLORS: tuple[str, ...] = ("#0f172a", "#1e293b", "#312e81", "#134e4a")
STICKERS: tuple[str, ...] = ("star", "unicorn", "trophy")

# Tool roll ranges: [0, 0.25) background, [0.25, 0.35) sticker, rest none.
BACKGROUND_CHANGE_CUTOFF = 0.25
STICKER_CUTOFF = 0.35

OPENING = "opening"
LISTENING = "listening"
FOLLOW_UP = "follow_up"


def _pick_index(rng: Any, count: int) -> int:
    return min(int(rng.random() * count), count - 1)


def _pick(rng: Any, options: Sequence[str]) -> str:
    return options[_pick_index(rng, len(options))]


def tool_call_for_roll(roll: float, rng: Any) -> Optional[ToolInvocation]:
    """Map one tool roll in [0, 1) to a background change, a sticker or nothing."""
    if roll < BACKGROUND_CHANGE_CUTOFF:
        return ToolInvocation(
            name=CHANGE_BACKGROUND_COLOR.name,
            arguments={"color": _pick(rng, BACKGROUND_COLORS)},
        )
    if roll < STICKER_CUTOFF:
        return ToolInvocation(
            name=SHOW_REWARD_STICKER.name,
            arguments={"sticker": _pick(rng, STICKERS)},
        )
    return None


class FallbackGenerator:
    """Canned but varied storyteller replies driven by an injectable random source."""

    mode = "local"
    uses_prompt = False

    def __init__(self, rng: Any = None, logger: Optional[InteractionLogger] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.logger: Optional[InteractionLogger] = logger

    def choose_text(self, history: list[Turn]) -> tuple[str, str]:
        """Return ``(branch, text)`` for the next reply."""
        last_assistant = last_turn_with_role(history, "assistant")
        if last_assistant is None:
            return OPENING, _pick(self.rng, OPENERS)

        last_user = last_turn_with_role(history, "user")
        if last_user is None or not last_user.content:
            return LISTENING, LISTENING_PROMPT

        index = _pick_index(self.rng, len(FOLLOW_UPS))
        if FOLLOW_UPS[index] == last_assistant.content:
            index = (index + 1) % len(FOLLOW_UPS)
        return FOLLOW_UP, FOLLOW_UPS[index]

    def generate(self, history: list[Turn]) -> Reply:
        """Generate the next reply from the raw conversation history."""
        branch, text = self.choose_text(history)
        roll = self.rng.random()
        tool_call = tool_call_for_roll(roll, self.rng)

        if self.logger:
            self.logger.log_fallback_reply(
                branch=branch,
                content=text,
                tool_call=tool_call.model_dump() if tool_call else None,
                tool_roll=roll,
                history_length=len(history),
            )

        return Reply(content=text, tool_call=tool_call)
