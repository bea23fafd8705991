"""Domain Errors — closed set of Huly failure values and their protocol classification.

Invariants:
    - HulyDomainError is a closed union: every variant is listed in the alias below
    - Variant identity alone decides caller-fault vs server-fault, never message content
    - Not-found / invalid-status messages interpolate only the carried identifiers
    - Connection / auth / generic messages always pass through sanitize() before leaving
    - classify() is exhaustive: a new variant without a case fails the type checker

Design Decisions:
    - Frozen dataclasses over an Exception hierarchy: errors are values that can sit
      inside a cause tree; OperationFailed carries one across await boundaries
    - match + assert_never: the closed union is checked structurally, no runtime fallback
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import assert_never, get_args

from app.core.sanitize_message import sanitize


class McpErrorCode(IntEnum):
    """Protocol error codes — JSON-RPC reserved range."""
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


@dataclass(frozen=True)
class _Tagged:
    @property
    def tag(self) -> str:
        """Stable variant name, used for audit records."""
        return type(self).__name__


# ─── Server-fault variants ──────────────────────────────────────

@dataclass(frozen=True)
class HulyError(_Tagged):
    """Generic server-side failure."""
    message: str


@dataclass(frozen=True)
class HulyConnectionError(_Tagged):
    """Workspace transport could not be reached or dropped mid-call."""
    message: str


@dataclass(frozen=True)
class HulyAuthError(_Tagged):
    """Workspace rejected the configured credentials."""
    message: str


# ─── Caller-fault variants ──────────────────────────────────────

@dataclass(frozen=True)
class IssueNotFoundError(_Tagged):
    identifier: str
    project: str


@dataclass(frozen=True)
class ProjectNotFoundError(_Tagged):
    identifier: str


@dataclass(frozen=True)
class PersonNotFoundError(_Tagged):
    identifier: str


@dataclass(frozen=True)
class ChannelNotFoundError(_Tagged):
    identifier: str


@dataclass(frozen=True)
class MessageNotFoundError(_Tagged):
    message_id: str
    channel: str


@dataclass(frozen=True)
class ThreadReplyNotFoundError(_Tagged):
    reply_id: str
    message_id: str


@dataclass(frozen=True)
class InvalidStatusError(_Tagged):
    status: str
    project: str


HulyDomainError = (
    HulyError
    | HulyConnectionError
    | HulyAuthError
    | IssueNotFoundError
    | ProjectNotFoundError
    | PersonNotFoundError
    | ChannelNotFoundError
    | MessageNotFoundError
    | ThreadReplyNotFoundError
    | InvalidStatusError
)

DOMAIN_ERROR_TYPES: tuple[type, ...] = get_args(HulyDomainError)


class OperationFailed(Exception):
    """Carrier raised by operations so a domain error can cross task boundaries."""

    def __init__(self, error: HulyDomainError):
        super().__init__(error.tag)
        self.error = error


def is_domain_error(value: object) -> bool:
    return isinstance(value, DOMAIN_ERROR_TYPES)


def classify(error: HulyDomainError) -> tuple[McpErrorCode, str]:
    """Map a domain error to (protocol code, safe user-facing message)."""
    match error:
        case IssueNotFoundError(identifier=identifier, project=project):
            return McpErrorCode.INVALID_PARAMS, (
                f"Issue '{identifier}' not found in project '{project}'"
            )
        case ProjectNotFoundError(identifier=identifier):
            return McpErrorCode.INVALID_PARAMS, f"Project '{identifier}' not found"
        case PersonNotFoundError(identifier=identifier):
            return McpErrorCode.INVALID_PARAMS, f"Person '{identifier}' not found"
        case ChannelNotFoundError(identifier=identifier):
            return McpErrorCode.INVALID_PARAMS, f"Channel '{identifier}' not found"
        case MessageNotFoundError(message_id=message_id, channel=channel):
            return McpErrorCode.INVALID_PARAMS, (
                f"Message '{message_id}' not found in channel '{channel}'"
            )
        case ThreadReplyNotFoundError(reply_id=reply_id, message_id=message_id):
            return McpErrorCode.INVALID_PARAMS, (
                f"Thread reply '{reply_id}' not found on message '{message_id}'"
            )
        case InvalidStatusError(status=status, project=project):
            return McpErrorCode.INVALID_PARAMS, (
                f"Invalid status '{status}' for project '{project}'"
            )
        case HulyConnectionError(message=message):
            return McpErrorCode.INTERNAL_ERROR, sanitize(f"Connection error: {message}")
        case HulyAuthError(message=message):
            return McpErrorCode.INTERNAL_ERROR, sanitize(f"Authentication error: {message}")
        case HulyError(message=message):
            return McpErrorCode.INTERNAL_ERROR, sanitize(message)
        case _:
            assert_never(error)
