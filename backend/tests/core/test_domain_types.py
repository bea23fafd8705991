"""Domain Types — verifies identity wrappers, limits and records.

Tests:
    - NewType wrappers are plain str at runtime
    - Reply limits are ordered (default within max)
    - ToolCallStatus serializes to string
    - Records are frozen
"""

import dataclasses

import pytest

from app.core.domain_types import (
    DEFAULT_REPLY_LIMIT, MAX_REPLY_LIMIT, Channel, ChannelId, MessageId,
    PersonId, ThreadReply, ThreadReplyId, ToolCallStatus,
)


def test_identity_types_wrap_str():
    assert ChannelId("c1") == "c1"
    assert MessageId("m1") == "m1"
    assert ThreadReplyId("r1") == "r1"
    assert PersonId("p1") == "p1"


def test_reply_limits():
    assert 1 <= DEFAULT_REPLY_LIMIT <= MAX_REPLY_LIMIT == 200


def test_tool_call_status_values():
    assert ToolCallStatus.SUCCESS.value == "success"
    assert ToolCallStatus.ERROR == "error"


def test_records_are_frozen():
    channel = Channel(id=ChannelId("c1"), name="general")
    with pytest.raises(dataclasses.FrozenInstanceError):
        channel.name = "random"


def test_thread_reply_optional_fields_default_to_none():
    reply = ThreadReply(
        id=ThreadReplyId("r1"), message_id=MessageId("m1"),
        channel_id=ChannelId("c1"), body="hi", created_on=1,
    )
    assert reply.modified_by is None
    assert reply.edited_on is None
