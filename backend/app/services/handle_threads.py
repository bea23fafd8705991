"""Thread Handlers — list, add, update and delete replies under a channel message.

Invariants:
    - Channel resolved by ID or name; missing → ChannelNotFoundError
    - Parent message must belong to the channel; missing → MessageNotFoundError
    - Reply must be attached to that message; missing → ThreadReplyNotFoundError
    - list limit capped at MAX_REPLY_LIMIT; replies ordered by created_on ascending
    - Sender names resolved concurrently, one lookup per unique sender
    - Reply dicts omit optional keys (sender, senderId, modifiedOn, editedOn) when absent

Design Decisions:
    - Failures raised as OperationFailed(domain error): ToolDispatch turns whatever
      escapes (including TaskGroup ExceptionGroups) into a cause tree
    - Result dicts use the wire's camelCase keys so success_response needs no mapping
"""

import asyncio
import logging
import time

from app.core.domain_errors import (
    ChannelNotFoundError, MessageNotFoundError, OperationFailed,
    ThreadReplyNotFoundError,
)
from app.core.domain_types import (
    MAX_REPLY_LIMIT, Channel, ChatMessage, PersonId, ThreadReply,
)
from app.core.repository_protocols import WorkspaceClient
from app.schemas.tools import (
    AddThreadReplyParams, DeleteThreadReplyParams, ListThreadRepliesParams,
    UpdateThreadReplyParams,
)

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _unique_senders(replies: list[ThreadReply]) -> list[PersonId]:
    return list(dict.fromkeys(r.modified_by for r in replies if r.modified_by is not None))


def _reply_to_dict(reply: ThreadReply, names: dict[PersonId, str | None]) -> dict:
    """Wire dict for one reply; absent optional fields are left out, not null."""
    fields = {
        "id": reply.id,
        "body": reply.body,
        "sender": names.get(reply.modified_by) if reply.modified_by else None,
        "senderId": reply.modified_by,
        "createdOn": reply.created_on,
        "modifiedOn": reply.modified_on,
        "editedOn": reply.edited_on,
    }
    return {key: value for key, value in fields.items() if value is not None}


class ThreadHandlers:
    """Thread-reply tool handlers over one workspace."""

    def __init__(self, workspace: WorkspaceClient, clock=_now_ms):
        self.workspace = workspace
        self._clock = clock

    async def _find_message(
        self, channel_identifier: str, message_id: str,
    ) -> tuple[Channel, ChatMessage]:
        channel = await self.workspace.find_channel(channel_identifier)
        if channel is None:
            raise OperationFailed(ChannelNotFoundError(identifier=channel_identifier))
        message = await self.workspace.find_message(channel.id, message_id)
        if message is None:
            raise OperationFailed(
                MessageNotFoundError(message_id=message_id, channel=channel_identifier),
            )
        return channel, message

    async def _find_reply(
        self, channel: Channel, message: ChatMessage, reply_id: str, message_id: str,
    ) -> ThreadReply:
        reply = await self.workspace.find_reply(channel.id, message.id, reply_id)
        if reply is None:
            raise OperationFailed(
                ThreadReplyNotFoundError(reply_id=reply_id, message_id=message_id),
            )
        return reply

    async def _resolve_names(
        self, person_ids: list[PersonId],
    ) -> dict[PersonId, str | None]:
        async with asyncio.TaskGroup() as group:
            tasks = {
                pid: group.create_task(self.workspace.get_person_name(pid))
                for pid in person_ids
            }
        return {pid: task.result() for pid, task in tasks.items()}

    async def list_thread_replies(self, params: ListThreadRepliesParams) -> dict:
        channel, message = await self._find_message(params.channel, params.message_id)
        limit = min(params.limit, MAX_REPLY_LIMIT)
        replies, total = await self.workspace.find_replies(channel.id, message.id, limit)
        replies = sorted(replies, key=lambda r: r.created_on)
        names = await self._resolve_names(_unique_senders(replies))
        return {
            "replies": [_reply_to_dict(r, names) for r in replies],
            "total": total,
        }

    async def add_thread_reply(self, params: AddThreadReplyParams) -> dict:
        channel, message = await self._find_message(params.channel, params.message_id)
        reply_id = await self.workspace.add_reply(channel.id, message.id, params.body)
        logger.info(
            f"Thread reply {reply_id} added to message {message.id}",
            extra={"tool_name": "add_thread_reply"},
        )
        return {"id": reply_id, "messageId": message.id, "channelId": channel.id}

    async def update_thread_reply(self, params: UpdateThreadReplyParams) -> dict:
        channel, message = await self._find_message(params.channel, params.message_id)
        reply = await self._find_reply(
            channel, message, params.reply_id, params.message_id,
        )
        await self.workspace.update_reply(
            channel.id, reply.id, params.body, self._clock(),
        )
        return {"id": reply.id, "updated": True}

    async def delete_thread_reply(self, params: DeleteThreadReplyParams) -> dict:
        channel, message = await self._find_message(params.channel, params.message_id)
        reply = await self._find_reply(
            channel, message, params.reply_id, params.message_id,
        )
        await self.workspace.remove_reply(channel.id, reply.id)
        return {"id": reply.id, "deleted": True}
