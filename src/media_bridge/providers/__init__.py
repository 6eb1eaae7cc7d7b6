from .base import BaseMediaService
from .gemini import GeminiMediaService

__all__ = ["BaseMediaService", "GeminiMediaService"]
