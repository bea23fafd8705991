"""Tool Dispatch — explicit routing from tool_name to handler, with protocol error mapping.

Invariants:
    - Every tool->handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown tools return "Unknown tool: <name>" before any operation runs
    - Argument validation failures map through map_parse_error (never raise)
    - Anything a handler raises becomes a cause tree, reduced by map_cause
    - CancelledError of the calling task is NOT caught (only Exception subclasses)
    - Every call logged; recorded as a ToolCall row when a DB session is given

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
    - Full exception detail goes to the server log only; callers get the reduced message
    - Tool call recording wrapped in try/except: never fails the tool call
"""

import logging
import time
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.cause_tree import (
    Cause, Defect, Empty, Fail, Interrupted, Parallel, Sequential,
    cause_from_exception, die,
)
from app.core.domain_errors import McpErrorCode, is_domain_error
from app.core.domain_types import ToolCallStatus
from app.core.map_errors import map_parse_error
from app.core.reduce_cause import map_cause, select_leaf
from app.core.repository_protocols import WorkspaceClient
from app.core.tool_responses import (
    ErrorResponse, ToolResponse, success_response, unknown_tool_response,
)
from app.services.handle_threads import ThreadHandlers
from app.services.tools_registry import get_tool

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[Any]]


def leaf_tag(cause: Cause) -> str:
    """Short classification of the selected leaf, for logs and audit rows."""
    match select_leaf(cause):
        case Fail(error=error) if is_domain_error(error):
            return error.tag
        case Fail(error=ValidationError()):
            return "ValidationError"
        case Fail():
            return "UnknownFailure"
        case Defect():
            return "Defect"
        case Interrupted():
            return "Interrupted"
        case Empty():
            return "Empty"


def _defect_payloads(cause: Cause) -> list[BaseException]:
    payloads = []
    stack = [cause]
    while stack:
        match stack.pop():
            case Defect(payload=BaseException() as exc):
                payloads.append(exc)
            case Sequential(left=left, right=right) | Parallel(left=left, right=right):
                stack.extend((right, left))
    return payloads


class ToolDispatch:
    """Routes tool_name -> handler. Explicit registration, no auto-discovery."""

    def __init__(
        self, workspace: WorkspaceClient,
        db: AsyncSession | None = None,
        record_calls: bool = True,
    ):
        self._db = db
        self._record_calls = record_calls
        threads = ThreadHandlers(workspace)

        # Every mapping explicit: adding a tool requires editing this dict
        self._handlers: dict[str, Handler] = {
            "list_thread_replies": threads.list_thread_replies,
            "add_thread_reply": threads.add_thread_reply,
            "update_thread_reply": threads.update_thread_reply,
            "delete_thread_reply": threads.delete_thread_reply,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    async def execute(self, tool_name: str, arguments: dict) -> dict:
        """Route tool_name to handler. Returns the wire result object. Logs every call."""
        started = time.perf_counter()
        response, tag = await self._run(tool_name, arguments)
        duration_ms = (time.perf_counter() - started) * 1000
        self._log_tool_call(tool_name, response, tag, duration_ms)
        return response.to_wire()

    async def _run(
        self, tool_name: str, arguments: dict,
    ) -> tuple[ToolResponse, str | None]:
        tool = get_tool(tool_name)
        handler = self._handlers.get(tool_name)
        if tool is None or handler is None:
            return unknown_tool_response(tool_name), "UnknownTool"

        try:
            params: BaseModel = tool.params_model.model_validate(arguments)
        except ValidationError as e:
            return map_parse_error(e, tool_name), "ValidationError"

        try:
            result = await handler(params)
        except Exception as exc:
            cause = cause_from_exception(exc)
            self._log_defects(tool_name, cause)
            return map_cause(cause, tool_name), leaf_tag(cause)

        try:
            return success_response(result), None
        except (TypeError, ValueError) as exc:
            logger.error(
                f"Tool '{tool_name}' returned a non-serializable result",
                exc_info=exc, extra={"tool_name": tool_name},
            )
            cause = die(exc)
            return map_cause(cause, tool_name), leaf_tag(cause)

    def _log_defects(self, tool_name: str, cause: Cause) -> None:
        for payload in _defect_payloads(cause):
            logger.error(
                f"Unexpected failure in tool '{tool_name}': {payload!r}",
                exc_info=payload, extra={"tool_name": tool_name},
            )

    def _log_tool_call(
        self, tool_name: str, response: ToolResponse,
        tag: str | None, duration_ms: float,
    ) -> None:
        """Log the call and stage a ToolCall row. No flush — batched with next commit."""
        is_error = isinstance(response, ErrorResponse)
        error_code: McpErrorCode | None = response.error_code if is_error else None
        extra = {
            "tool_name": tool_name,
            "error_code": int(error_code) if error_code is not None else None,
            "error_tag": tag,
            "duration_ms": round(duration_ms, 2),
        }
        if is_error:
            logger.warning(f"Tool '{tool_name}' failed: {tag}", extra=extra)
        else:
            logger.info(f"Tool '{tool_name}' succeeded", extra=extra)

        if self._db is None or not self._record_calls:
            return
        try:
            from app.models.tool_call import ToolCall
            self._db.add(ToolCall(
                tool_name=tool_name,
                status=(ToolCallStatus.ERROR if is_error else ToolCallStatus.SUCCESS).value,
                error_code=extra["error_code"],
                error_tag=tag,
                duration_ms=duration_ms,
            ))
        except Exception as e:
            logger.warning(f"Failed to record tool call '{tool_name}': {e}")
