"""
Exception taxonomy for media-bridge.

Noisy SDK and network tracebacks are translated into a `TransportError`, while
the original exception is preserved for full tracebacks.
"""

from __future__ import annotations

import logging
from typing import Final, Optional, Type

import httpx
from google.genai import errors as genai_errors

__all__: tuple[str, ...] = (
    "MediaBridgeError",
    "InvalidInputError",
    "TransportError",
    "ProcessingFailedError",
    "ContractViolationError",
    "DuplicateToolError",
    "InvalidToolArgumentsError",
    "AssetNotReadyError",
    "PollTimeoutError",
    "PipelineCancelledError",
    "TRANSPORT_ERRORS",
    "classify_error",
)


class MediaBridgeError(Exception):
    """Base class for every error raised by media-bridge."""


class InvalidInputError(MediaBridgeError, ValueError):
    """The asset was rejected before any remote call (e.g. not a video)."""


class TransportError(MediaBridgeError):
    """A request to the remote service could not be completed.

    Attributes:
        original_exc: The underlying SDK or network exception.
    """

    original_exc: Exception

    def __init__(self, message: str, original_exc: Exception) -> None:
        super().__init__(message)
        self.original_exc = original_exc
        self.__cause__ = original_exc


class ProcessingFailedError(MediaBridgeError):
    """The remote service reported a terminal FAILED state for an asset."""

    def __init__(self, handle_name: str) -> None:
        super().__init__(f"Processing failed for asset {handle_name!r}")
        self.handle_name = handle_name


class ContractViolationError(MediaBridgeError, RuntimeError):
    """The declared tool set and the dispatch table disagree."""


class DuplicateToolError(ContractViolationError):
    """Two handlers were declared under the same tool name."""


class InvalidToolArgumentsError(MediaBridgeError, ValueError):
    """A tool call carried arguments a handler cannot turn into results."""


class AssetNotReadyError(MediaBridgeError, RuntimeError):
    """A handle was used for generation before reaching the READY state."""


class PollTimeoutError(MediaBridgeError, TimeoutError):
    """The configured polling bound was exhausted before a terminal state."""


class PipelineCancelledError(MediaBridgeError):
    """A superseded pipeline run stopped before issuing further requests."""


TRANSPORT_ERRORS: Final[tuple[Type[Exception], ...]] = (
    genai_errors.APIError,
    httpx.HTTPError,
    ConnectionError,
    TimeoutError,
)

_CONN_ERRORS: Final[tuple[Type[Exception], ...]] = (
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
)

_RATE_LIMIT_STATUS: Final = 429


def classify_error(
    exc: Exception,
    logger: Optional[logging.Logger] = None,
) -> TransportError:
    """Wrap an SDK exception in TransportError with a friendly, concise message."""
    log = logger or logging.getLogger("media_bridge.exceptions")

    if isinstance(exc, genai_errors.APIError) and exc.code == _RATE_LIMIT_STATUS:
        msg = "Rate-limit exceeded, please retry later"
    elif isinstance(exc, _CONN_ERRORS):
        msg = "Connection problem, unable to reach the media service"
    elif isinstance(exc, genai_errors.ClientError):
        msg = f"Request rejected by the media service ({exc.code})"
    elif isinstance(exc, genai_errors.APIError):
        msg = f"Media service reported an internal error ({exc.code})"
    else:
        msg = exc.__class__.__name__

    log.warning("Wrapping transport exception", extra={"exc": exc})
    return TransportError(f"{msg}: {exc}", exc)
