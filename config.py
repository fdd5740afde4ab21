import os
from dataclasses import dataclass

DEFAULT_MODEL = "gemini-2.5-flash"
DIAGRAM_MODES = ("positional", "named")


class ConfigurationError(RuntimeError):
    """Raised when a generation call cannot run because configuration is missing."""


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    model_name: str = DEFAULT_MODEL
    diagram_mode: str = "positional"
    log_level: str = "INFO"


def load_settings(environ=None):
    """Read Gemini settings from the process environment (or the given mapping)."""
    env = os.environ if environ is None else environ

    api_key = env.get("GEMINI_API_KEY") or env.get("API_KEY") or None
    model_name = env.get("GEMINI_MODEL") or DEFAULT_MODEL

    diagram_mode = (env.get("DIAGRAM_MODE") or "positional").strip().lower()
    if diagram_mode not in DIAGRAM_MODES:
        raise ConfigurationError(
            f"DIAGRAM_MODE must be one of {', '.join(DIAGRAM_MODES)}, got {diagram_mode!r}"
        )

    log_level = (env.get("LOG_LEVEL") or "INFO").upper()
    return Settings(
        api_key=api_key,
        model_name=model_name,
        diagram_mode=diagram_mode,
        log_level=log_level,
    )
