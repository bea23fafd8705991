"""Tool Responses — the two terminal shapes returned to tool callers.

Invariants:
    - ErrorResponse.message is already sanitized by whoever built it
    - Success text is 2-space indented JSON; json.loads(text) == value
    - Wire shape: content = [{"type": "text", "text": ...}]; isError + _meta.errorCode
      only on errors
    - unknown_tool_response is a pure lookup miss, built before any operation runs

Design Decisions:
    - Frozen dataclasses in core, dict only at to_wire(): transport owns the wire format
    - success_response lets serialization errors propagate (a programmer error upstream);
      NaN / Infinity are rejected since they are not JSON text
"""

import json
from dataclasses import dataclass
from typing import Any

from app.core.domain_errors import McpErrorCode


@dataclass(frozen=True)
class ErrorResponse:
    """Protocol error: code for branching, short sanitized message for humans."""
    error_code: McpErrorCode
    message: str

    @property
    def is_error(self) -> bool:
        return True

    def to_wire(self) -> dict:
        return {
            "content": [{"type": "text", "text": self.message}],
            "isError": True,
            "_meta": {"errorCode": int(self.error_code)},
        }


@dataclass(frozen=True)
class SuccessResponse:
    text: str

    @property
    def is_error(self) -> None:
        return None

    def to_wire(self) -> dict:
        return {"content": [{"type": "text", "text": self.text}]}


ToolResponse = ErrorResponse | SuccessResponse


def success_response(value: Any) -> SuccessResponse:
    return SuccessResponse(
        json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False),
    )


def unknown_tool_response(name: str) -> ErrorResponse:
    return ErrorResponse(McpErrorCode.INVALID_PARAMS, f"Unknown tool: {name}")
