"""Services Layer — tool handlers, registry, and tool dispatch.

Invariants:
    - Handlers raise OperationFailed for domain failures; dispatch maps everything
    - Tool dispatch uses explicit dict mapping (no auto-discovery)

Design Decisions:
    - One handler class per resource (handle_threads.py)
"""
