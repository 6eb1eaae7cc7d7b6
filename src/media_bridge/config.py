from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Optional

from dotenv import load_dotenv

load_dotenv()

__all__ = ["Provider", "Settings", "get_api_key"]


class Provider(StrEnum):
    GEMINI = "gemini"


_ENV_VARS: Final[dict[Provider, tuple[str, ...]]] = {
    Provider.GEMINI: ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

DEFAULT_MODEL: Final = "gemini-2.5-flash"
DEFAULT_TEMPERATURE: Final = 0.5
DEFAULT_POLL_INTERVAL: Final = 5.0


def get_api_key(provider: Provider) -> str:
    """Return the API key for *provider* or raise RuntimeError."""
    try:
        env_vars = _ENV_VARS[provider]
    except KeyError:
        raise RuntimeError(f"No config for {provider!s}") from None

    for env_var in env_vars:
        key = os.environ.get(env_var)
        if key:
            return key
    raise RuntimeError(f"{' or '.join(env_vars)} missing")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {raw!r}")
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Runtime settings, read once at startup.

    Polling is unbounded unless ``poll_max_attempts`` or
    ``poll_max_duration`` is set.
    """

    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    poll_interval: float = DEFAULT_POLL_INTERVAL
    poll_max_attempts: Optional[int] = None
    poll_max_duration: Optional[float] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``MEDIA_BRIDGE_*`` environment variables."""
        return cls(
            model=os.environ.get("MEDIA_BRIDGE_MODEL") or DEFAULT_MODEL,
            temperature=_env_float("MEDIA_BRIDGE_TEMPERATURE", DEFAULT_TEMPERATURE),
            poll_interval=_env_float("MEDIA_BRIDGE_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            poll_max_attempts=_env_int("MEDIA_BRIDGE_POLL_MAX_ATTEMPTS"),
            poll_max_duration=_env_float("MEDIA_BRIDGE_POLL_MAX_DURATION", None),
        )
