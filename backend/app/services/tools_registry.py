"""Tools Registry — name, description and argument model for every exposed tool.

Invariants:
    - Tool names are unique; lookup by exact name only
    - inputSchema is generated from the argument model (by_alias → camelCase keys)
    - Registry order is the listing order

Design Decisions:
    - Explicit tuple of ToolSpec: every tool visible in one place, no auto-discovery
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from app.schemas.tools import (
    AddThreadReplyParams, DeleteThreadReplyParams, ListThreadRepliesParams,
    UpdateThreadReplyParams,
)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    params_model: type[BaseModel]

    def definition(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.params_model.model_json_schema(by_alias=True),
        }


THREAD_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        "list_thread_replies",
        "List replies in a message thread, oldest first. Returns replies with "
        "sender names and the total reply count.",
        ListThreadRepliesParams,
    ),
    ToolSpec(
        "add_thread_reply",
        "Reply to a message in a channel thread. Body is markdown.",
        AddThreadReplyParams,
    ),
    ToolSpec(
        "update_thread_reply",
        "Edit the body of an existing thread reply.",
        UpdateThreadReplyParams,
    ),
    ToolSpec(
        "delete_thread_reply",
        "Permanently delete a thread reply.",
        DeleteThreadReplyParams,
    ),
)

ALL_TOOLS: tuple[ToolSpec, ...] = THREAD_TOOLS

_BY_NAME: dict[str, ToolSpec] = {tool.name: tool for tool in ALL_TOOLS}


def get_tool(name: str) -> ToolSpec | None:
    return _BY_NAME.get(name)


def list_tool_definitions() -> list[dict[str, Any]]:
    return [tool.definition() for tool in ALL_TOOLS]
