"""Domain Types — identity wrappers and workspace records shared by core and shell.

Invariants:
    - ChannelId, MessageId, ThreadReplyId, PersonId wrap str — never mix them up
    - Records are frozen: operations build new ones instead of mutating
    - Timestamps are epoch milliseconds (workspace convention)

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ChannelId = NewType("ChannelId", str)
MessageId = NewType("MessageId", str)
ThreadReplyId = NewType("ThreadReplyId", str)
PersonId = NewType("PersonId", str)


# ─── Limits ──────────────────────────────────────────────────────

DEFAULT_REPLY_LIMIT = 50
MAX_REPLY_LIMIT = 200


# ─── Enums ───────────────────────────────────────────────────────

class ToolCallStatus(str, Enum):
    """Outcome of one tool invocation — maps to ToolCall.status column."""
    SUCCESS = "success"
    ERROR = "error"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Channel:
    id: ChannelId
    name: str


@dataclass(frozen=True)
class ChatMessage:
    id: MessageId
    channel_id: ChannelId
    body: str


@dataclass(frozen=True)
class ThreadReply:
    id: ThreadReplyId
    message_id: MessageId
    channel_id: ChannelId
    body: str
    created_on: int
    modified_by: PersonId | None = None
    modified_on: int | None = None
    edited_on: int | None = None
