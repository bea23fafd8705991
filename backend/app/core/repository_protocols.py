"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All workspace IO goes through WorkspaceClient
    - Lookups return None for "absent"; the operation decides which domain error that is
    - Transport failures surface as OperationFailed(HulyConnectionError | HulyAuthError)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, pure core functions never await
"""

from typing import Protocol

from app.core.domain_types import (
    Channel, ChannelId, ChatMessage, MessageId, PersonId, ThreadReply, ThreadReplyId,
)


class WorkspaceClient(Protocol):
    """Contract for channel / thread data in one workspace — implemented by shell."""
    async def find_channel(self, identifier: str) -> Channel | None: ...
    async def find_message(
        self, channel_id: ChannelId, message_id: str,
    ) -> ChatMessage | None: ...
    async def find_replies(
        self, channel_id: ChannelId, message_id: MessageId, limit: int,
    ) -> tuple[list[ThreadReply], int]: ...
    async def find_reply(
        self, channel_id: ChannelId, message_id: MessageId, reply_id: str,
    ) -> ThreadReply | None: ...
    async def add_reply(
        self, channel_id: ChannelId, message_id: MessageId, body: str,
    ) -> ThreadReplyId: ...
    async def update_reply(
        self, channel_id: ChannelId, reply_id: ThreadReplyId, body: str, edited_on: int,
    ) -> None: ...
    async def remove_reply(
        self, channel_id: ChannelId, reply_id: ThreadReplyId,
    ) -> None: ...
    async def get_person_name(self, person_id: PersonId) -> str | None: ...
