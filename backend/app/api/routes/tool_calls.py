"""Tool Calls — list tools and invoke one by name.

Invariants:
    - POST /api/v1/tools/call always answers 200 for tool-level outcomes; the body is
      the wire result object ({content, isError?, _meta?})
    - Tool arguments are validated by ToolDispatch, not by FastAPI
    - The workspace is taken from app.state (set in lifespan), overridable in tests
    - ToolCall audit rows committed after the call; commit failures never change the result

Design Decisions:
    - One ToolDispatch per request: it holds the request's DB session
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.repository_protocols import WorkspaceClient
from app.infrastructure.database import get_db
from app.schemas.tools import ToolCallRequest, ToolListResponse
from app.services.tool_dispatch import ToolDispatch
from app.services.tools_registry import list_tool_definitions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


def get_workspace(request: Request) -> WorkspaceClient:
    """FastAPI dependency for the configured workspace client."""
    return request.app.state.workspace


@router.get("", response_model=ToolListResponse)
async def list_tools():
    return {"tools": list_tool_definitions()}


@router.post("/call")
async def call_tool(
    body: ToolCallRequest,
    workspace: WorkspaceClient = Depends(get_workspace),
    db: AsyncSession = Depends(get_db),
):
    """Invoke a tool and return its protocol result object."""
    settings = get_settings()
    dispatch = ToolDispatch(
        workspace, db=db, record_calls=settings.tool_call_recording,
    )
    result = await dispatch.execute(body.name, body.arguments)
    if settings.tool_call_recording:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning(f"Tool call audit not saved: {type(e).__name__}")
    return result
