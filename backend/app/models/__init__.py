"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Tool server state lives in the workspace; the DB only holds the audit trail

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from app.models.tool_call import ToolCall  # noqa: F401
