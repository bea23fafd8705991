"""Core Layer — pure domain logic, no IO, no DB, no logging.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Error mapping (classify, sanitize, map_*, reduce) is pure and synchronous

Design Decisions:
    - Functional core separated from imperative shell: the shell logs and records,
      the core only decides what a caller is allowed to see
"""
