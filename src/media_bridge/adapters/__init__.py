"""Pure transformation adapters for remote media services."""

from .gemini import GeminiRequestAdapter

__all__ = ["GeminiRequestAdapter"]
