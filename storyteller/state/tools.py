"""UI tools the storyteller may ask the front end to run.

The tool set is static and shared read-only by every request.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .conversation import ToolInvocation


class ToolParameter(BaseModel):
    """A single string parameter of a tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    type: str = "string"
    required: bool = True


class ToolSpec(BaseModel):
    """A named capability with a description and parameter schema."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Function name exposed to the model")
    description: str = Field(description="What the tool does, shown to the model")
    parameters: tuple[ToolParameter, ...] = Field(default_factory=tuple)

    @property
    def required_parameters(self) -> list[str]:
        return [p.name for p in self.parameters if p.required]

    def to_openai(self) -> dict[str, Any]:
        """Render in the chat completions ``tools`` format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": {
                        p.name: {"type": p.type, "description": p.description}
                        for p in self.parameters
                    },
                    "required": self.required_parameters,
                },
            },
        }

    def accepts(self, arguments: dict[str, Any]) -> bool:
        """Check that every required parameter has a non-empty string value."""
        for name in self.required_parameters:
            value = arguments.get(name)
            if not isinstance(value, str) or not value.strip():
                return False
        return True


CHANGE_BACKGROUND_COLOR = ToolSpec(
    name="changeBackgroundColor",
    description="Change the background color of the app to match the mood of the story.",
    parameters=(
        ToolParameter(
            name="color",
            description='Any valid CSS color name or hex code, e.g. "#ffcc00" or "skyblue".',
        ),
    ),
)

SHOW_REWARD_STICKER = ToolSpec(
    name="showRewardSticker",
    description="Show a fun reward sticker on the screen.",
    parameters=(
        ToolParameter(
            name="sticker",
            description='A short name for the sticker, e.g. "star", "unicorn", "trophy".',
        ),
    ),
)

TOOL_SPECIFICATIONS: tuple[ToolSpec, ...] = (CHANGE_BACKGROUND_COLOR, SHOW_REWARD_STICKER)

_TOOLS_BY_NAME = {spec.name: spec for spec in TOOL_SPECIFICATIONS}


def get_tool(name: str) -> ToolSpec | None:
    """Get a tool specification by name."""
    return _TOOLS_BY_NAME.get(name)


def openai_tools() -> list[dict[str, Any]]:
    """All tool specifications in the chat completions format."""
    return [spec.to_openai() for spec in TOOL_SPECIFICATIONS]


def build_invocation(name: Any, arguments: Any) -> ToolInvocation | None:
    """Build a tool invocation, or None if it does not fit a declared tool."""
    spec = get_tool(name) if isinstance(name, str) else None
    if spec is None or not isinstance(arguments, dict):
        return None
    if not spec.accepts(arguments):
        return None
    return ToolInvocation(name=spec.name, arguments=arguments)
