"""
Readiness polling for uploaded assets.

The remote service gives no completion estimate, so polling runs at a fixed
interval. By default it is unbounded: a stuck asset is polled until the run is
cancelled. `PollPolicy` can cap the number of queries or the elapsed time.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from media_bridge._exceptions import (
    TRANSPORT_ERRORS,
    PipelineCancelledError,
    PollTimeoutError,
    ProcessingFailedError,
    classify_error,
)
from media_bridge.config import DEFAULT_POLL_INTERVAL, Settings
from media_bridge.providers import BaseMediaService
from media_bridge.types import AssetHandle, ProcessingState

__all__ = ["AssetReadinessPoller", "CancellationToken", "PollPolicy"]


class CancellationToken:
    """Cooperative cancellation flag, checked before every status query."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise PipelineCancelledError("Run was superseded")


@dataclass(frozen=True, slots=True)
class PollPolicy:
    interval: float = DEFAULT_POLL_INTERVAL
    max_attempts: Optional[int] = None
    max_duration: Optional[float] = None

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError("interval must not be negative")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.max_duration is not None and self.max_duration < 0:
            raise ValueError("max_duration must not be negative")

    @classmethod
    def from_settings(cls, settings: Settings) -> "PollPolicy":
        return cls(
            interval=settings.poll_interval,
            max_attempts=settings.poll_max_attempts,
            max_duration=settings.poll_max_duration,
        )


class AssetReadinessPoller:
    """Queries an asset's status until it is READY or FAILED."""

    def __init__(
        self,
        service: BaseMediaService,
        *,
        policy: Optional[PollPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.service = service
        self.policy = policy or PollPolicy()
        self._sleep = sleep
        self._clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or self.__class__.__name__

    async def await_ready(
        self,
        handle: AssetHandle,
        *,
        token: Optional[CancellationToken] = None,
    ) -> AssetHandle:
        """
        Poll until ``handle`` reaches a terminal state.

        Queries are strictly sequential: the next one is only issued after the
        previous response was observed and the interval has elapsed.

        Returns:
            The same handle, with ``state`` set to READY.

        Raises:
            ProcessingFailedError: The remote reported FAILED.
            PollTimeoutError: A PollPolicy bound was exhausted.
            PipelineCancelledError: ``token`` was cancelled; no query follows.
            TransportError: A status query could not be made.
        """
        started = self._clock()
        attempts = 0

        while True:
            if token is not None:
                token.raise_if_cancelled()

            try:
                state = await self.service.query_asset_status(handle)
            except TRANSPORT_ERRORS as exc:
                raise classify_error(exc, self.logger) from exc
            attempts += 1
            handle.state = state

            if state is ProcessingState.READY:
                self._log(f"{handle.name} ready after {attempts} queries")
                return handle
            if state is ProcessingState.FAILED:
                self._log(f"{handle.name} processing failed", logging.ERROR)
                raise ProcessingFailedError(handle.name)

            self._check_bounds(handle, attempts, started)
            self._log(
                f"{handle.name} still processing, retrying in {self.policy.interval:g}s"
            )
            await self._sleep(self.policy.interval)

    def _check_bounds(self, handle: AssetHandle, attempts: int, started: float) -> None:
        policy = self.policy
        if policy.max_attempts is not None and attempts >= policy.max_attempts:
            raise PollTimeoutError(
                f"{handle.name} not ready after {attempts} status queries"
            )
        if policy.max_duration is not None:
            elapsed = self._clock() - started
            if elapsed + policy.interval > policy.max_duration:
                raise PollTimeoutError(
                    f"{handle.name} not ready within {policy.max_duration:g}s"
                )

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
