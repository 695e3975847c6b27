"""Builds the prompt handed to the language model."""

from typing import Any

from ..config import PROMPTS_DIR
from ..prompt_loader import load_prompt
from ..state.conversation import Turn, coerce_history

SYSTEM_PROMPT_FILE = PROMPTS_DIR / "storyteller.system.md"


def build_system_prompt(scene_description: Any = "") -> str:
    """Persona instructions with the scene description filled in."""
    if scene_description is None:
        scene_description = ""
    elif not isinstance(scene_description, str):
        scene_description = str(scene_description)
    return load_prompt(SYSTEM_PROMPT_FILE, scene_description=scene_description)


def assemble(history: Any, scene_description: Any = "") -> list[Turn]:
    """Return the persona system turn followed by the conversation so far.

    The caller's history is never modified; anything that is not a list of
    turns is treated as an empty conversation.
    """
    system_turn = Turn(role="system", content=build_system_prompt(scene_description))
    return [system_turn, *coerce_history(history)]
