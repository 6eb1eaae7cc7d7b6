"""
Routes the model's tool call to its local handler.

The response is untrusted: the selected call's name is checked against the
declared tool set before anything runs.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Optional, Sequence

from media_bridge._exceptions import ContractViolationError
from media_bridge.response import GenerationResponse
from media_bridge.types import ResultItem, ToolCallRequest, ToolDeclaration, ToolName

__all__ = ["SELECTION_POLICY", "SelectionPolicy", "ToolCallDispatcher"]


class SelectionPolicy(Enum):
    # Only the first requested call runs; the rest are ignored
    FIRST_ONLY = "first_only"


SELECTION_POLICY: Final = SelectionPolicy.FIRST_ONLY


class ToolCallDispatcher:
    def __init__(
        self,
        *,
        policy: SelectionPolicy = SELECTION_POLICY,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.policy = policy
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or self.__class__.__name__

    def dispatch(
        self,
        response: GenerationResponse,
        tools: Sequence[ToolDeclaration],
    ) -> Optional[list[ResultItem]]:
        """
        Invoke the handler for the selected tool call.

        Returns:
            The handler's result list, or None when the model called no tool.

        Raises:
            ContractViolationError: The call names a tool that was not declared.
            InvalidToolArgumentsError: The handler rejected the arguments.
        """
        call = self._select(response.tool_calls)
        if call is None:
            # TODO: decide with product whether a declined call should clear results
            self._log("Model called no tool; leaving results unchanged", logging.WARNING)
            return None

        declaration = self._resolve(call, tools)
        self._log(f"Dispatching {declaration.name.value}")
        return declaration.handler(call.arguments)

    def _select(self, calls: Sequence[ToolCallRequest]) -> Optional[ToolCallRequest]:
        if not calls:
            return None
        if self.policy is SelectionPolicy.FIRST_ONLY:
            if len(calls) > 1:
                ignored = ", ".join(c.name for c in calls[1:])
                self._log(f"Ignoring {len(calls) - 1} extra tool calls: {ignored}", logging.DEBUG)
            return calls[0]
        raise ValueError(f"Unsupported selection policy: {self.policy}")

    def _resolve(
        self, call: ToolCallRequest, tools: Sequence[ToolDeclaration]
    ) -> ToolDeclaration:
        declared = {decl.name: decl for decl in tools}
        try:
            declaration = declared[ToolName(call.name)]
        except (ValueError, KeyError):
            msg = (
                f"Model called {call.name!r}, which is not among the declared tools "
                f"({', '.join(name.value for name in declared)})"
            )
            self._log(msg, logging.ERROR)
            raise ContractViolationError(msg) from None
        return declaration

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
