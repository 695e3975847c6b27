"""Central configuration for all technical settings.

Model parameters and paths are defined here as constants. Environment-driven
settings are read once at startup by ``load_settings``.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# LLM Settings (Remote Generation)
# =============================================================================
LLM_MODEL = "gpt-4.1-mini"
LLM_TEMPERATURE = 0.8
LLM_MAX_TOKENS = 150
LLM_TOOL_CHOICE = "auto"

# =============================================================================
# Paths
# =============================================================================
PACKAGE_DIR = Path(__file__).resolve().parent
PROMPTS_DIR = PACKAGE_DIR / "prompts"
PUBLIC_DIR = PACKAGE_DIR.parent / "public"

# =============================================================================
# Server
# =============================================================================
DEFAULT_PORT = 3000
DEFAULT_ALLOWED_ORIGINS = "*"


class Settings(BaseModel):
    """Process-wide settings, fixed for the lifetime of the process."""

    model_config = ConfigDict(frozen=True)

    openai_api_key: str | None = Field(default=None, description="Credential that enables remote generation")
    llm_model: str = Field(default=LLM_MODEL, description="Chat completion model identifier")
    openai_max_retries: int | None = Field(default=None, description="Retry count passed to the OpenAI client")
    port: int = Field(default=DEFAULT_PORT, description="HTTP port for the web server")
    allowed_origins: list[str] = Field(default_factory=lambda: [DEFAULT_ALLOWED_ORIGINS])
    interaction_log_dir: str | None = Field(default=None, description="Directory for JSON interaction logs")

    @property
    def remote_enabled(self) -> bool:
        return bool(self.openai_api_key)


def _env(name: str) -> str | None:
    """Read an environment variable, treating empty strings as unset."""
    value = os.getenv(name, "").strip()
    return value or None


def _env_int(name: str) -> int | None:
    value = _env(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_settings(use_dotenv: bool = True) -> Settings:
    """Build ``Settings`` from the environment (and a ``.env`` file if present)."""
    if use_dotenv:
        load_dotenv()

    origins = [o.strip() for o in (_env("ALLOWED_ORIGINS") or "").split(",") if o.strip()]
    port = _env_int("PORT")

    return Settings(
        openai_api_key=_env("OPENAI_API_KEY"),
        llm_model=_env("STORYTELLER_MODEL") or LLM_MODEL,
        openai_max_retries=_env_int("OPENAI_MAX_RETRIES"),
        port=port if port is not None else DEFAULT_PORT,
        allowed_origins=origins or [DEFAULT_ALLOWED_ORIGINS],
        interaction_log_dir=_env("INTERACTION_LOG_DIR"),
    )
