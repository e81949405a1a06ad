"""Typed runtime settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_USER_KEYWORDS: tuple[str, ...] = ("user", "you", "me", "human", "prompter")
DEFAULT_AI_KEYWORDS: tuple[str, ...] = (
    "ai",
    "chatgpt",
    "claude",
    "gemini",
    "grok",
    "llama",
    "copilot",
    "assistant",
    "model",
    "bot",
)
MAX_LABEL_LENGTH = 100
DEFAULT_MAX_INPUT_BYTES = 5 * 1024 * 1024

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class ParserSettings:
    """Speaker-label detection controls."""

    user_keywords: tuple[str, ...] = DEFAULT_USER_KEYWORDS
    ai_keywords: tuple[str, ...] = DEFAULT_AI_KEYWORDS
    max_label_length: int = MAX_LABEL_LENGTH


@dataclass(frozen=True)
class PipelineSettings:
    """Segmentation cascade controls."""

    use_classifier: bool = True


@dataclass(frozen=True)
class OutputSettings:
    """CLI input limits and export locations."""

    max_input_bytes: int = DEFAULT_MAX_INPUT_BYTES
    folder: Path = Path("./turnsplit/output")


@dataclass(frozen=True)
class AppConfig:
    """Top-level application settings."""

    parser: ParserSettings = field(default_factory=ParserSettings)
    pipeline: PipelineSettings = field(default_factory=PipelineSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    log_level: str = "INFO"


def _read_keywords(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    keywords = tuple(
        item.strip().lower() for item in raw.split(",") if item.strip()
    )
    return keywords or default


def _read_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def _read_int(name: str, default: int, *, minimum: int, maximum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from err
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}.")
    if maximum is not None and value > maximum:
        raise ValueError(f"{name} must be at most {maximum}, got {value}.")
    return value


def load_settings() -> AppConfig:
    """Builds settings from the current process environment."""
    return AppConfig(
        parser=ParserSettings(
            user_keywords=_read_keywords("TURNSPLIT_USER_KEYWORDS", DEFAULT_USER_KEYWORDS),
            ai_keywords=_read_keywords("TURNSPLIT_AI_KEYWORDS", DEFAULT_AI_KEYWORDS),
            max_label_length=_read_int(
                "TURNSPLIT_MAX_LABEL_LENGTH",
                MAX_LABEL_LENGTH,
                minimum=1,
                maximum=MAX_LABEL_LENGTH,
            ),
        ),
        pipeline=PipelineSettings(
            use_classifier=_read_bool("TURNSPLIT_USE_CLASSIFIER", True),
        ),
        output=OutputSettings(
            max_input_bytes=_read_int(
                "TURNSPLIT_MAX_INPUT_BYTES", DEFAULT_MAX_INPUT_BYTES, minimum=1
            ),
            folder=Path(os.getenv("TURNSPLIT_OUTPUT_DIR", "./turnsplit/output")),
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


_SETTINGS: AppConfig | None = None


def get_settings() -> AppConfig:
    """Returns cached settings, loading them on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def reload_settings() -> AppConfig:
    """Re-reads the environment and replaces the cached settings."""
    global _SETTINGS
    _SETTINGS = load_settings()
    return _SETTINGS
