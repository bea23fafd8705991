"""ToolCall ORM — audit table for tool invocations.

Invariants:
    - One row per ToolDispatch.execute call (success or error) when recording is on
    - error_code holds the numeric protocol code; NULL on success
    - Arguments and messages are NOT stored: they may carry user secrets

Design Decisions:
    - Audit table, not enforcement: no business logic reads it
    - error_tag stores the domain variant / leaf kind for grouping failures
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ToolCall(Base):
    """ToolCall log entry — observability for tool usage."""
    __tablename__ = "tool_calls"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    tool_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    error_code: Mapped[int | None] = mapped_column(Integer, nullable=True)
    error_tag: Mapped[str | None] = mapped_column(String(100), nullable=True)
    duration_ms: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
