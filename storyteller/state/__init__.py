"""Conversation state and tool definitions."""

from .conversation import Reply, ToolInvocation, Turn, coerce_history
from .tools import TOOL_SPECIFICATIONS, ToolSpec

__all__ = ["Reply", "ToolInvocation", "Turn", "coerce_history", "TOOL_SPECIFICATIONS", "ToolSpec"]
