"""Cause Tree — immutable record of how a (possibly concurrent) computation failed.

Invariants:
    - Closed union: Fail | Defect | Interrupted | Empty | Sequential | Parallel
    - Nodes are frozen; a tree never changes after construction
    - Defect.payload is excluded from repr/eq so it cannot leak through formatting
    - cause_from_exception is total: every BaseException maps to some tree

Design Decisions:
    - Explicit tree over caught-exception chains: reduction is deterministic and
      independent of whether the caller used threads, tasks or TaskGroups
    - ExceptionGroup members → Parallel (TaskGroup children run concurrently)
    - Exception chains are not folded: the raised exception alone is the outcome,
      Sequential is for callers composing ordered failures explicitly
"""

import asyncio
from dataclasses import dataclass, field
from functools import reduce
from typing import Generic, TypeVar

from pydantic import ValidationError

from app.core.domain_errors import OperationFailed

E = TypeVar("E")


@dataclass(frozen=True)
class Fail(Generic[E]):
    """Terminal domain or validation error."""
    error: E


@dataclass(frozen=True)
class Defect:
    """Unmodeled internal fault. The payload is kept for the shell's logs only."""
    payload: object = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class Interrupted:
    fiber_id: str | None = None


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Sequential:
    """`left` completed before `right` began."""
    left: "Cause"
    right: "Cause"


@dataclass(frozen=True)
class Parallel:
    """`left` and `right` ran concurrently."""
    left: "Cause"
    right: "Cause"


Cause = Fail | Defect | Interrupted | Empty | Sequential | Parallel

EMPTY = Empty()


# ─── Constructors ────────────────────────────────────────────────

def fail(error: E) -> Fail[E]:
    return Fail(error)


def die(payload: object) -> Defect:
    return Defect(payload)


def interrupt(fiber_id: str | None = None) -> Interrupted:
    return Interrupted(fiber_id)


def sequential(*causes: Cause) -> Cause:
    """Left fold into Sequential nodes. No causes → Empty, one → itself."""
    if not causes:
        return EMPTY
    return reduce(Sequential, causes)


def parallel(*causes: Cause) -> Cause:
    """Left fold into Parallel nodes. No causes → Empty, one → itself."""
    if not causes:
        return EMPTY
    return reduce(Parallel, causes)


# ─── From Python exceptions ──────────────────────────────────────

def cause_from_exception(exc: BaseException) -> Cause:
    """Failure tree for the exception actually raised.

    __cause__ / __context__ are not folded in: an earlier exception was either
    translated (raise ... from) or handled, so only the raised one describes the outcome.
    The chain stays on the exception for the server log.
    """
    match exc:
        case OperationFailed(error=error):
            return Fail(error)
        case ValidationError():
            return Fail(exc)
        case asyncio.CancelledError() | KeyboardInterrupt():
            return Interrupted()
        case BaseExceptionGroup(exceptions=members):
            return parallel(*(cause_from_exception(member) for member in members))
        case _:
            return Defect(exc)
