"""In-Memory Workspace — WorkspaceClient implementation for local runs and tests.

Invariants:
    - Implements core/repository_protocols.WorkspaceClient structurally
    - Channel lookup matches ID first, then exact name
    - find_replies returns (page, total) where total counts all replies of the message
    - fault (when set) is raised as OperationFailed on every call, like a dropped transport

Design Decisions:
    - Plain dicts keyed by ID: single-process server, state lost on restart
    - person_faults lets tests fail individual name lookups inside a TaskGroup
"""

import uuid
from dataclasses import replace

from app.core.domain_errors import HulyDomainError, OperationFailed
from app.core.domain_types import (
    Channel, ChannelId, ChatMessage, MessageId, PersonId, ThreadReply, ThreadReplyId,
)


class InMemoryWorkspace:
    """Dict-backed workspace: channels, messages, thread replies, persons."""

    def __init__(self) -> None:
        self.channels: dict[ChannelId, Channel] = {}
        self.messages: dict[MessageId, ChatMessage] = {}
        self.replies: dict[ThreadReplyId, ThreadReply] = {}
        self.persons: dict[PersonId, str] = {}
        self.fault: HulyDomainError | None = None
        self.person_faults: dict[PersonId, HulyDomainError] = {}
        self._tick = 0

    def _check(self) -> None:
        if self.fault is not None:
            raise OperationFailed(self.fault)

    def _next_timestamp(self) -> int:
        self._tick += 1
        return self._tick

    # ─── Seeding ─────────────────────────────────────────────────

    def add_channel(self, name: str, channel_id: str | None = None) -> Channel:
        channel = Channel(id=ChannelId(channel_id or uuid.uuid4().hex), name=name)
        self.channels[channel.id] = channel
        return channel

    def add_message(
        self, channel_id: ChannelId, body: str, message_id: str | None = None,
    ) -> ChatMessage:
        message = ChatMessage(
            id=MessageId(message_id or uuid.uuid4().hex),
            channel_id=channel_id,
            body=body,
        )
        self.messages[message.id] = message
        return message

    def add_person(self, person_id: str, name: str) -> PersonId:
        pid = PersonId(person_id)
        self.persons[pid] = name
        return pid

    def seed_reply(
        self, channel_id: ChannelId, message_id: MessageId, body: str,
        sender: PersonId | None = None, created_on: int | None = None,
    ) -> ThreadReply:
        reply = ThreadReply(
            id=ThreadReplyId(uuid.uuid4().hex),
            message_id=message_id,
            channel_id=channel_id,
            body=body,
            created_on=created_on if created_on is not None else self._next_timestamp(),
            modified_by=sender,
        )
        self.replies[reply.id] = reply
        return reply

    # ─── WorkspaceClient ─────────────────────────────────────────

    async def find_channel(self, identifier: str) -> Channel | None:
        self._check()
        by_id = self.channels.get(ChannelId(identifier))
        if by_id is not None:
            return by_id
        return next((c for c in self.channels.values() if c.name == identifier), None)

    async def find_message(
        self, channel_id: ChannelId, message_id: str,
    ) -> ChatMessage | None:
        self._check()
        message = self.messages.get(MessageId(message_id))
        if message is None or message.channel_id != channel_id:
            return None
        return message

    async def find_replies(
        self, channel_id: ChannelId, message_id: MessageId, limit: int,
    ) -> tuple[list[ThreadReply], int]:
        self._check()
        attached = sorted(
            (
                r for r in self.replies.values()
                if r.message_id == message_id and r.channel_id == channel_id
            ),
            key=lambda r: r.created_on,
        )
        return attached[:limit], len(attached)

    async def find_reply(
        self, channel_id: ChannelId, message_id: MessageId, reply_id: str,
    ) -> ThreadReply | None:
        self._check()
        reply = self.replies.get(ThreadReplyId(reply_id))
        if reply is None or reply.message_id != message_id or reply.channel_id != channel_id:
            return None
        return reply

    async def add_reply(
        self, channel_id: ChannelId, message_id: MessageId, body: str,
    ) -> ThreadReplyId:
        self._check()
        return self.seed_reply(channel_id, message_id, body).id

    async def update_reply(
        self, channel_id: ChannelId, reply_id: ThreadReplyId, body: str, edited_on: int,
    ) -> None:
        self._check()
        reply = self.replies[reply_id]
        self.replies[reply_id] = replace(
            reply, body=body, edited_on=edited_on, modified_on=edited_on,
        )

    async def remove_reply(
        self, channel_id: ChannelId, reply_id: ThreadReplyId,
    ) -> None:
        self._check()
        self.replies.pop(reply_id, None)

    async def get_person_name(self, person_id: PersonId) -> str | None:
        self._check()
        fault = self.person_faults.get(person_id)
        if fault is not None:
            raise OperationFailed(fault)
        return self.persons.get(person_id)
