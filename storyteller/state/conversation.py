"""Conversation data passed through a single reply generation.

Nothing here is persisted: the caller sends the whole history with every
request and gets back one ``Reply``.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]

ROLES: tuple[str, ...] = ("system", "user", "assistant")


class Turn(BaseModel):
    """One message in the conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who said it: system, user or assistant")
    content: str = Field(default="", description="The message text")

    def to_message(self) -> dict[str, str]:
        """Render as a chat completion message."""
        return {"role": self.role, "content": self.content}


class ToolInvocation(BaseModel):
    """A UI side effect requested alongside a reply."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Name of a declared tool")
    arguments: dict[str, Any] = Field(default_factory=dict, description="Parameter name -> value")


class Reply(BaseModel):
    """The complete output of one generation call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: Literal["assistant"] = "assistant"
    content: str = ""
    tool_call: ToolInvocation | None = Field(default=None, alias="toolCall")

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the HTTP response body."""
        return self.model_dump(by_alias=True)


def coerce_history(raw: Any) -> list[Turn]:
    """Turn whatever the caller sent as history into a list of Turns.

    A value that is not a list becomes an empty history. Entries that are not
    mappings or have an unknown role are skipped, and missing content becomes
    an empty string.
    """
    if not isinstance(raw, list):
        return []

    turns = []
    for entry in raw:
        if isinstance(entry, Turn):
            turns.append(entry)
            continue
        if not isinstance(entry, dict):
            continue
        role = entry.get("role")
        if role not in ROLES:
            continue
        content = entry.get("content")
        if content is None:
            content = ""
        elif not isinstance(content, str):
            content = str(content)
        turns.append(Turn(role=role, content=content))
    return turns


def last_turn_with_role(history: list[Turn], role: str) -> Turn | None:
    """Return the most recent turn spoken by ``role``, if any."""
    for turn in reversed(history):
        if turn.role == role:
            return turn
    return None
