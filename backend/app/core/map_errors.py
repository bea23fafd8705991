"""Flat Error Mapping — one domain error or one validation error → ErrorResponse.

Invariants:
    - Domain errors: code and message come only from classify() (already sanitized)
    - Validation errors: always INVALID_PARAMS
    - Validation detail is built from location + message of each item; the raw
      `input` value pydantic attaches is never read
    - Detail is bounded to MAX_DETAIL_LENGTH characters

Design Decisions:
    - describe_validation_error over str(ValidationError): pydantic's str() embeds
      input_value=..., which may be a secret the caller sent in the wrong field
    - Validation detail is not sanitized: it describes shape, not content
"""

from pydantic import ValidationError

from app.core.domain_errors import HulyDomainError, McpErrorCode, classify
from app.core.tool_responses import ErrorResponse

MAX_DETAIL_LENGTH = 500
_ELLIPSIS = "..."


def _format_location(loc: tuple) -> str:
    if not loc:
        return "(root)"
    return ".".join(str(part) for part in loc)


def describe_validation_error(error: ValidationError) -> str:
    """Structural, value-free description: 'path: message; path: message'."""
    items = error.errors(include_url=False, include_input=False, include_context=False)
    parts = [f"{_format_location(item['loc'])}: {item['msg']}" for item in items]
    detail = "; ".join(parts) or "input does not match the expected shape"
    if len(detail) > MAX_DETAIL_LENGTH:
        detail = detail[: MAX_DETAIL_LENGTH - len(_ELLIPSIS)] + _ELLIPSIS
    return detail


def map_domain_error(error: HulyDomainError) -> ErrorResponse:
    code, message = classify(error)
    return ErrorResponse(code, message)


def map_parse_error(
    error: ValidationError, tool_name: str | None = None,
) -> ErrorResponse:
    detail = describe_validation_error(error)
    if tool_name:
        message = f"Invalid parameters for {tool_name}: {detail}"
    else:
        message = f"Invalid parameters: {detail}"
    return ErrorResponse(McpErrorCode.INVALID_PARAMS, message)
