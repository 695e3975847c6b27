"""Reply generation through the OpenAI chat completions API."""

from typing import Any, Optional

from openai import OpenAI

from .. import config
from ..config import Settings
from ..json_sanitizer import parse_json_object
from ..logging.interaction_logger import InteractionLogger
from ..state.conversation import Reply, ToolInvocation, Turn
from ..state.tools import build_invocation, openai_tools


class RemoteGenerator:
    """Asks the language model for the next line, with the UI tools attached.

    Only the first tool call of a response is used; any further calls are
    dropped. A tool call whose arguments do not parse, or that does not match
    a declared tool, is dropped while the reply text is kept. Errors from the
    API itself are not handled here.
    """

    mode = "remote"
    uses_prompt = True

    def __init__(
        self,
        client: Any,
        model: str = config.LLM_MODEL,
        temperature: float = config.LLM_TEMPERATURE,
        max_tokens: int = config.LLM_MAX_TOKENS,
        logger: Optional[InteractionLogger] = None,
    ) -> None:
        self.client = client
        self.model: str = model
        self.temperature: float = temperature
        self.max_tokens: int = max_tokens
        self.logger: Optional[InteractionLogger] = logger

    @classmethod
    def from_settings(
        cls, settings: Settings, logger: Optional[InteractionLogger] = None
    ) -> "RemoteGenerator":
        client_kwargs: dict[str, Any] = {"api_key": settings.openai_api_key}
        if settings.openai_max_retries is not None:
            client_kwargs["max_retries"] = settings.openai_max_retries
        return cls(client=OpenAI(**client_kwargs), model=settings.llm_model, logger=logger)

    def generate(self, prompt_turns: list[Turn]) -> Reply:
        """Generate the next reply from the assembled prompt."""
        messages = [turn.to_message() for turn in prompt_turns]

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            tools=openai_tools(),
            tool_choice=config.LLM_TOOL_CHOICE,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        message = response.choices[0].message
        content = message.content or ""

        raw_tool_call = self._first_tool_call(message)
        tool_call = self._parse_tool_call(raw_tool_call)

        if self.logger:
            self.logger.log_remote_reply(
                messages=messages,
                content=content,
                raw_tool_call=raw_tool_call,
                tool_call=tool_call.model_dump() if tool_call else None,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )

        return Reply(content=content, tool_call=tool_call)

    @staticmethod
    def _first_tool_call(message: Any) -> Optional[dict[str, Any]]:
        """Name and argument text of the first function tool call, if any."""
        tool_calls = getattr(message, "tool_calls", None)
        if not tool_calls:
            return None
        function = getattr(tool_calls[0], "function", None)
        if function is None:
            return None
        return {
            "name": getattr(function, "name", None),
            "arguments": getattr(function, "arguments", None),
        }

    @staticmethod
    def _parse_tool_call(raw_tool_call: Optional[dict[str, Any]]) -> Optional[ToolInvocation]:
        if raw_tool_call is None:
            return None
        arguments = parse_json_object(raw_tool_call["arguments"])
        if arguments is None:
            return None
        return build_invocation(raw_tool_call["name"], arguments)
