"""Cause Reduction — pick one leaf from a failure tree and render it as an ErrorResponse.

Invariants:
    - Pure, synchronous, single depth-first left-to-right pass
    - Leaf preference: first Fail > first Defect/Interrupted > Empty
    - Left branch wins ties in both Sequential and Parallel nodes
    - Defect payloads are never read: the message is a fixed string
    - Total over every Cause variant (assert_never on fallthrough)

Design Decisions:
    - Explicit worklist instead of recursion: no depth limit on long sequential chains
    - One reducer for domain and validation failures; the Fail payload's type picks
      the flat mapper, so map_domain_cause / map_parse_cause are thin aliases
"""

from typing import assert_never

from pydantic import ValidationError

from app.core.cause_tree import (
    Cause, Defect, Empty, Fail, Interrupted, Parallel, Sequential,
)
from app.core.domain_errors import McpErrorCode, is_domain_error
from app.core.map_errors import map_domain_error, map_parse_error
from app.core.tool_responses import ErrorResponse

INTERNAL_SERVER_ERROR = ErrorResponse(McpErrorCode.INTERNAL_ERROR, "Internal server error")
OPERATION_INTERRUPTED = ErrorResponse(
    McpErrorCode.INTERNAL_ERROR, "Operation was interrupted",
)
UNEXPECTED_ERROR = ErrorResponse(McpErrorCode.INTERNAL_ERROR, "An unexpected error occurred")


def select_leaf(cause: Cause) -> Fail | Defect | Interrupted | Empty:
    """Most meaningful leaf of the tree, scanning depth-first, left-to-right."""
    fallback: Defect | Interrupted | None = None
    stack: list[Cause] = [cause]
    while stack:
        node = stack.pop()
        match node:
            case Fail():
                return node
            case Defect() | Interrupted():
                if fallback is None:
                    fallback = node
            case Empty():
                pass
            case Sequential(left=left, right=right) | Parallel(left=left, right=right):
                stack.append(right)
                stack.append(left)
            case _:
                assert_never(node)
    return fallback if fallback is not None else Empty()


def _map_failure(error: object, tool_name: str | None) -> ErrorResponse:
    if isinstance(error, ValidationError):
        return map_parse_error(error, tool_name)
    if is_domain_error(error):
        return map_domain_error(error)
    # Fail carrying something outside both unions is treated like a defect
    return INTERNAL_SERVER_ERROR


def map_cause(cause: Cause, tool_name: str | None = None) -> ErrorResponse:
    """Reduce a cause tree holding domain and/or validation failures."""
    leaf = select_leaf(cause)
    match leaf:
        case Fail(error=error):
            return _map_failure(error, tool_name)
        case Defect():
            return INTERNAL_SERVER_ERROR
        case Interrupted():
            return OPERATION_INTERRUPTED
        case Empty():
            return UNEXPECTED_ERROR
        case _:
            assert_never(leaf)


def map_domain_cause(cause: Cause) -> ErrorResponse:
    return map_cause(cause)


def map_parse_cause(cause: Cause, tool_name: str | None = None) -> ErrorResponse:
    return map_cause(cause, tool_name)
