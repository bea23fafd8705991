"""Tool Schemas — Pydantic models for tool arguments and the tool-call envelope.

Invariants:
    - Tool arguments are camelCase on the wire (messageId, replyId); snake_case in Python
    - Unknown argument keys are rejected (extra="forbid")
    - Identifiers and bodies are non-empty after stripping
    - limit is >= 1, default DEFAULT_REPLY_LIMIT; larger values are accepted and
      capped at MAX_REPLY_LIMIT by the list handler

Design Decisions:
    - alias_generator=to_camel: validation error locations use the caller's key names
    - ToolCallRequest.arguments is a plain dict: tool-level validation happens in
      ToolDispatch so failures map to protocol errors, not HTTP 400s
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from app.core.domain_types import DEFAULT_REPLY_LIMIT, MAX_REPLY_LIMIT

NonEmptyString = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ToolArguments(BaseModel):
    """Base for tool argument models."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True,
    )


class ListThreadRepliesParams(ToolArguments):
    channel: NonEmptyString = Field(description="Channel name or ID")
    message_id: NonEmptyString = Field(description="Parent message ID")
    limit: int = Field(
        DEFAULT_REPLY_LIMIT, ge=1,
        description=f"Maximum number of replies to return (capped at {MAX_REPLY_LIMIT})",
    )


class AddThreadReplyParams(ToolArguments):
    channel: NonEmptyString = Field(description="Channel name or ID")
    message_id: NonEmptyString = Field(description="Parent message ID")
    body: NonEmptyString = Field(description="Reply body (markdown)")


class UpdateThreadReplyParams(ToolArguments):
    channel: NonEmptyString = Field(description="Channel name or ID")
    message_id: NonEmptyString = Field(description="Parent message ID")
    reply_id: NonEmptyString = Field(description="Thread reply ID")
    body: NonEmptyString = Field(description="New reply body (markdown)")


class DeleteThreadReplyParams(ToolArguments):
    channel: NonEmptyString = Field(description="Channel name or ID")
    message_id: NonEmptyString = Field(description="Parent message ID")
    reply_id: NonEmptyString = Field(description="Thread reply ID")


# ─── HTTP envelope ───────────────────────────────────────────────

class ToolCallRequest(BaseModel):
    """POST /api/v1/tools/call body."""
    name: str = Field(min_length=1, max_length=100)
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolDefinition(BaseModel):
    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")


class ToolListResponse(BaseModel):
    tools: list[ToolDefinition]
