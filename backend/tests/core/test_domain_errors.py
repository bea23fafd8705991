"""Domain error classification tests — pure tests for classify / map_domain_error.

Tests cover:
    - Every not-found / invalid-status variant maps to INVALID_PARAMS (-32602)
    - Not-found messages interpolate the carried identifiers verbatim
    - Connection / auth / generic variants map to INTERNAL_ERROR (-32603)
    - Internal messages are prefixed and then sanitized as a whole
    - The union is closed: DOMAIN_ERROR_TYPES lists exactly the declared variants
    - OperationFailed carries the error value unchanged
"""

import pytest

from app.core.domain_errors import (
    DOMAIN_ERROR_TYPES, ChannelNotFoundError, HulyAuthError,
    HulyConnectionError, HulyError, InvalidStatusError, IssueNotFoundError,
    McpErrorCode, MessageNotFoundError, OperationFailed, PersonNotFoundError,
    ProjectNotFoundError, ThreadReplyNotFoundError, classify, is_domain_error,
)
from app.core.map_errors import map_domain_error
from app.core.sanitize_message import SANITIZED_FALLBACK


def _text(response) -> str:
    return response.to_wire()["content"][0]["text"]


# ─── InvalidParams variants ─────────────────────────────────────

@pytest.mark.parametrize("error, expected", [
    (
        IssueNotFoundError(identifier="HULY-123", project="HULY"),
        "Issue 'HULY-123' not found in project 'HULY'",
    ),
    (ProjectNotFoundError(identifier="NOPE"), "Project 'NOPE' not found"),
    (PersonNotFoundError(identifier="jane@example.com"), "Person 'jane@example.com' not found"),
    (ChannelNotFoundError(identifier="random"), "Channel 'random' not found"),
    (
        MessageNotFoundError(message_id="m-9", channel="general"),
        "Message 'm-9' not found in channel 'general'",
    ),
    (
        ThreadReplyNotFoundError(reply_id="r-4", message_id="m-9"),
        "Thread reply 'r-4' not found on message 'm-9'",
    ),
    (
        InvalidStatusError(status="Bogus", project="HULY"),
        "Invalid status 'Bogus' for project 'HULY'",
    ),
])
def test_caller_fault_variants_map_to_invalid_params(error, expected):
    response = map_domain_error(error)
    wire = response.to_wire()
    assert wire["isError"] is True
    assert wire["_meta"]["errorCode"] == McpErrorCode.INVALID_PARAMS == -32602
    assert _text(response) == expected


def test_not_found_identifiers_are_not_sanitized():
    """Identifiers are the caller's own input and pass through as-is."""
    code, message = classify(IssueNotFoundError(identifier="token-42", project="AUTH"))
    assert code is McpErrorCode.INVALID_PARAMS
    assert message == "Issue 'token-42' not found in project 'AUTH'"


# ─── InternalError variants ─────────────────────────────────────

def test_connection_error_is_prefixed():
    response = map_domain_error(HulyConnectionError(message="Network timeout"))
    assert response.error_code is McpErrorCode.INTERNAL_ERROR
    assert _text(response) == "Connection error: Network timeout"


def test_auth_error_prefix_survives_sanitizer():
    """'Authentication' is not the standalone word 'auth'."""
    response = map_domain_error(HulyAuthError(message="Login failed"))
    assert response.error_code is McpErrorCode.INTERNAL_ERROR
    assert _text(response) == "Authentication error: Login failed"


def test_auth_error_with_credentials_is_sanitized():
    response = map_domain_error(HulyAuthError(message="Invalid credentials"))
    assert response.error_code is McpErrorCode.INTERNAL_ERROR
    assert _text(response) == SANITIZED_FALLBACK


def test_generic_error_message_passes_through():
    response = map_domain_error(HulyError(message="Something went wrong"))
    assert response.error_code == -32603
    assert _text(response) == "Something went wrong"


@pytest.mark.parametrize("error", [
    HulyError(message="Invalid password for user"),
    HulyConnectionError(message="Token expired: abc123"),
    HulyAuthError(message="api_key invalid: sk-xxx"),
    HulyError(message="client_secret mismatch"),
    HulyError(message="BEARER token invalid"),
])
def test_sensitive_internal_messages_are_replaced(error):
    response = map_domain_error(error)
    assert response.error_code is McpErrorCode.INTERNAL_ERROR
    assert _text(response) == SANITIZED_FALLBACK


# ─── Union shape ────────────────────────────────────────────────

def test_domain_union_is_closed():
    assert set(DOMAIN_ERROR_TYPES) == {
        HulyError, HulyConnectionError, HulyAuthError, IssueNotFoundError,
        ProjectNotFoundError, PersonNotFoundError, ChannelNotFoundError,
        MessageNotFoundError, ThreadReplyNotFoundError, InvalidStatusError,
    }


def test_is_domain_error_rejects_plain_exceptions():
    assert is_domain_error(HulyError(message="x"))
    assert not is_domain_error(RuntimeError("x"))
    assert not is_domain_error("HulyError")


def test_tag_is_variant_name():
    assert ChannelNotFoundError(identifier="c").tag == "ChannelNotFoundError"


def test_operation_failed_carries_error_value():
    error = ProjectNotFoundError(identifier="HULY")
    exc = OperationFailed(error)
    assert exc.error is error
    assert str(exc) == "ProjectNotFoundError"
