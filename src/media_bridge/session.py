"""
The analysis session: an explicit state machine over one current asset handle
and one current result list.

Every user action (loading an asset, running a mode) takes a fresh generation
token and cancels the token of the run before it. A run applies its effects
only while its token is still the current one, so the newest action always
wins and an abandoned run can never overwrite newer state.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Awaitable, Callable, Mapping, Optional, Union

from media_bridge._exceptions import (
    AssetNotReadyError,
    InvalidInputError,
    MediaBridgeError,
    PipelineCancelledError,
)
from media_bridge.client import GenerationClient
from media_bridge.config import Settings
from media_bridge.dispatcher import ToolCallDispatcher
from media_bridge.modes import DEFAULT_MODES, get_mode
from media_bridge.params import GenerationParams
from media_bridge.poller import AssetReadinessPoller, CancellationToken, PollPolicy
from media_bridge.prompts import PromptCompiler, UserInput
from media_bridge.providers import BaseMediaService
from media_bridge.registry import ToolRegistry
from media_bridge.tools import DEFAULT_HANDLERS
from media_bridge.types import Asset, AssetHandle, Mode, ResultItem, ToolHandler, ToolName
from media_bridge.uploader import AssetUploader, validate_asset

__all__ = ["AnalysisSession", "PipelineState", "PipelineStatus"]


class PipelineState(StrEnum):
    IDLE = "idle"
    UPLOADING_ASSET = "uploading_asset"
    WAITING_FOR_PROCESSING = "waiting_for_processing"
    AWAITING_GENERATION = "awaiting_generation"
    READY = "ready"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class PipelineStatus:
    state: PipelineState
    reason: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.state is PipelineState.ERRORED


@dataclass(slots=True)
class _Run:
    generation: int
    token: CancellationToken


class AnalysisSession:
    """
    Sequential upload -> poll -> generate -> dispatch pipeline for one user.

    Use ``load_asset`` once per dropped file, then ``analyze`` per mode.
    Both return None when a newer action superseded them.
    """

    def __init__(
        self,
        service: BaseMediaService,
        *,
        settings: Optional[Settings] = None,
        modes: Mapping[str, Mode] = DEFAULT_MODES,
        handlers: Mapping[ToolName, ToolHandler] = DEFAULT_HANDLERS,
        poll_policy: Optional[PollPolicy] = None,
        params: Optional[GenerationParams] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        settings = settings or Settings(model=service.model)
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or self.__class__.__name__
        self.modes = modes
        self.handlers = handlers

        self.uploader = AssetUploader(service, logger=self.logger)
        self.poller = AssetReadinessPoller(
            service,
            policy=poll_policy or PollPolicy.from_settings(settings),
            sleep=sleep,
            logger=self.logger,
        )
        self.compiler = PromptCompiler()
        self.registry = ToolRegistry(logger=self.logger)
        self.client = GenerationClient(
            service,
            params=params or GenerationParams.from_settings(settings),
            logger=self.logger,
        )
        self.dispatcher = ToolCallDispatcher(logger=self.logger)

        self._status = PipelineStatus(PipelineState.IDLE)
        self._handle: Optional[AssetHandle] = None
        self._results: Optional[list[ResultItem]] = None
        self._generation = 0
        self._current: Optional[_Run] = None

    # --- read-only views ---------------------------------------------------
    @property
    def status(self) -> PipelineStatus:
        return self._status

    @property
    def state(self) -> PipelineState:
        return self._status.state

    @property
    def handle(self) -> Optional[AssetHandle]:
        return self._handle

    @property
    def results(self) -> Optional[list[ResultItem]]:
        return list(self._results) if self._results is not None else None

    @property
    def generation(self) -> int:
        return self._generation

    # --- actions -----------------------------------------------------------
    async def load_asset(self, asset: Asset) -> Optional[AssetHandle]:
        """
        Upload ``asset`` and wait until it is ready for analysis.

        A rejected asset never starts a run: the current handle and any
        in-flight upload are left alone. Otherwise this supersedes any
        in-flight run. The previous handle is dropped as soon as the new
        upload starts; earlier results stay until the next successful
        analysis replaces them.

        Raises:
            InvalidInputError, TransportError, ProcessingFailedError,
            PollTimeoutError: the session is left ERRORED with the reason.
        """
        try:
            validate_asset(asset)
        except InvalidInputError as exc:
            self._status = PipelineStatus(PipelineState.ERRORED, str(exc))
            self._log(f"Rejected asset: {exc}", logging.ERROR)
            raise

        run = self._begin()
        self._handle = None
        try:
            self._transition(run, PipelineState.UPLOADING_ASSET)
            handle = await self.uploader.submit(asset)
            run.token.raise_if_cancelled()

            self._transition(run, PipelineState.WAITING_FOR_PROCESSING)
            handle = await self.poller.await_ready(handle, token=run.token)
        except PipelineCancelledError:
            self._log(f"Upload run {run.generation} superseded", logging.DEBUG)
            return None
        except MediaBridgeError as exc:
            if self._record_failure(run, exc):
                raise
            return None
        except BaseException as exc:
            self._record_failure(run, exc)
            raise

        if not self._is_current(run):
            self._log(f"Discarding handle from superseded run {run.generation}", logging.DEBUG)
            return None
        self._handle = handle
        self._transition(run, PipelineState.READY)
        return handle

    async def analyze(
        self,
        mode: Union[str, Mode],
        user_input: UserInput = None,
    ) -> Optional[list[ResultItem]]:
        """
        Run one mode against the current asset.

        Returns:
            The new result list, or None when the model called no tool (the
            previous results are kept) or the run was superseded.

        Raises:
            AssetNotReadyError: No ready asset is loaded; state is untouched.
            ValueError: The prompt cannot be compiled; state is untouched.
            TransportError, ContractViolationError, InvalidToolArgumentsError:
                the session is left ERRORED with the reason.
        """
        if isinstance(mode, str):
            mode = get_mode(mode, self.modes)
        handle = self._handle
        if handle is None or not handle.is_ready:
            raise AssetNotReadyError("No ready asset loaded; call load_asset first")

        prompt = self.compiler.compile(mode, user_input)
        tools = self.registry.declare(self.handlers)

        run = self._begin()
        self._transition(run, PipelineState.AWAITING_GENERATION)
        self._log(f"Run {run.generation}: mode {mode.name!r}, expecting {mode.tool.value}")
        try:
            response = await self.client.generate(prompt, tools, handle)
            if not self._is_current(run):
                self._log(f"Discarding response from superseded run {run.generation}", logging.DEBUG)
                return None
            results = self.dispatcher.dispatch(response, tools)
        except MediaBridgeError as exc:
            if self._record_failure(run, exc):
                raise
            return None
        except BaseException as exc:
            self._record_failure(run, exc)
            raise

        if results is not None:
            self._results = results
        self._transition(run, PipelineState.READY)
        return results

    # --- run bookkeeping ---------------------------------------------------
    def _begin(self) -> _Run:
        if self._current is not None:
            self._current.token.cancel()
        self._generation += 1
        self._current = _Run(generation=self._generation, token=CancellationToken())
        return self._current

    def _is_current(self, run: _Run) -> bool:
        return self._current is run

    def _transition(self, run: _Run, state: PipelineState) -> None:
        if self._is_current(run):
            self._status = PipelineStatus(state)

    def _record_failure(self, run: _Run, exc: BaseException) -> bool:
        """Mark the session ERRORED if ``run`` is current; report whether it was."""
        reason = str(exc) or exc.__class__.__name__
        if not self._is_current(run):
            self._log(f"Dropping error from superseded run {run.generation}: {reason}", logging.DEBUG)
            return False
        self._status = PipelineStatus(PipelineState.ERRORED, reason)
        self._log(f"Run {run.generation} failed: {reason}", logging.ERROR)
        return True

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
