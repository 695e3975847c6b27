"""Reply generation: prompt assembly, remote and local generators."""

from .assembler import assemble
from .fallback import FallbackGenerator
from .remote import RemoteGenerator
from .storyteller import Storyteller

__all__ = ["assemble", "FallbackGenerator", "RemoteGenerator", "Storyteller"]
