from __future__ import annotations

import logging
from typing import Type

from google import genai

from media_bridge.config import Provider, get_api_key
from media_bridge.providers import BaseMediaService, GeminiMediaService

# map Provider enum to its service implementation
_SERVICE_REGISTRY: dict[Provider, Type[GeminiMediaService]] = {
    Provider.GEMINI: GeminiMediaService,
}


def create_service(
    provider: Provider,
    model: str,
    *,
    api_key: str | None = None,
    client: genai.Client | None = None,
    logger: logging.Logger | None = None,
    **provider_kwargs: object,
) -> BaseMediaService:
    """
    Factory for creating a remote media service.

    Args:
        provider: Which provider to use (GEMINI).
        model: Model identifier (e.g. "gemini-2.5-flash").
        api_key: Overrides automatic lookup; if omitted, pulled from env.
        client: Optional pre-configured ``genai.Client`` to use verbatim.
        logger: Optional custom logger.
        **provider_kwargs: Any extra args to pass through (timeout).
    """
    try:
        service_cls = _SERVICE_REGISTRY[provider]
    except KeyError as exc:
        raise ValueError(f"Unsupported provider: {provider}") from exc

    if client is not None:  # use caller-supplied client verbatim
        return service_cls.from_client(model, client, logger=logger)

    key = api_key or get_api_key(provider)
    return service_cls(model, api_key=key, logger=logger, **provider_kwargs)
