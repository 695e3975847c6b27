"""The storyteller: picks how replies are generated and produces them.

Classes:
    Storyteller: Routes each turn to the generator chosen at startup.
"""

from typing import Any, Optional

from ..config import Settings
from ..logging.interaction_logger import InteractionLogger
from ..state.conversation import Reply, coerce_history
from .assembler import assemble
from .fallback import FallbackGenerator
from .remote import RemoteGenerator


class Storyteller:
    """Produces the next assistant reply for a picture conversation.

    The generator is fixed when the storyteller is built and used for every
    request afterwards. Errors raised by the generator are passed on to the
    caller.
    """

    def __init__(self, generator: Any) -> None:
        self.generator = generator

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: Any = None,
        rng: Any = None,
        logger: Optional[InteractionLogger] = None,
    ) -> "Storyteller":
        """Use the language model when a credential is configured, else the local fallback.

        ``client`` replaces the OpenAI client built from the settings.
        """
        if not settings.remote_enabled:
            return cls(FallbackGenerator(rng=rng, logger=logger))
        if client is not None:
            return cls(RemoteGenerator(client=client, model=settings.llm_model, logger=logger))
        return cls(RemoteGenerator.from_settings(settings, logger=logger))

    @property
    def mode(self) -> str:
        return self.generator.mode

    def respond(self, history: Any, scene_description: Any = "") -> Reply:
        """Generate the reply to the conversation so far."""
        if self.generator.uses_prompt:
            return self.generator.generate(assemble(history, scene_description))
        return self.generator.generate(coerce_history(history))
