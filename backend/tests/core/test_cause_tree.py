"""Cause tree tests — constructors and conversion from Python exceptions.

Tests cover:
    - sequential / parallel fold left; zero causes → Empty, one → itself
    - Defect payload hidden from repr and equality
    - OperationFailed → Fail(domain error); ValidationError → Fail(validation error)
    - CancelledError / KeyboardInterrupt → Interrupted
    - Other exceptions → Defect
    - ExceptionGroup → Parallel in member order
    - Exception chains (from / implicit context) are not folded: the raised
      exception alone decides the reduced response
"""

import asyncio

import pytest
from pydantic import BaseModel, ValidationError

from app.core.cause_tree import (
    EMPTY, Defect, Fail, Interrupted, Parallel, Sequential,
    cause_from_exception, die, fail, interrupt, parallel, sequential,
)
from app.core.domain_errors import (
    HulyConnectionError, McpErrorCode, OperationFailed, ProjectNotFoundError,
)
from app.core.reduce_cause import map_cause


# ─── Constructors ───────────────────────────────────────────────

def test_sequential_folds_left():
    a, b, c = fail("a"), fail("b"), fail("c")
    assert sequential(a, b, c) == Sequential(Sequential(a, b), c)


def test_parallel_folds_left():
    a, b, c = fail("a"), die("b"), interrupt()
    assert parallel(a, b, c) == Parallel(Parallel(a, b), c)


def test_combinators_with_zero_or_one_cause():
    assert sequential() is EMPTY
    assert parallel() is EMPTY
    assert sequential(fail("x")) == Fail("x")


def test_defect_payload_hidden():
    defect = die(RuntimeError("/srv/app/secret.py line 9"))
    assert "/srv/app" not in repr(defect)
    assert defect == Defect(ValueError("other"))


# ─── From exceptions ────────────────────────────────────────────

def test_operation_failed_becomes_fail():
    error = ProjectNotFoundError(identifier="HULY")
    assert cause_from_exception(OperationFailed(error)) == Fail(error)


def test_validation_error_becomes_fail():
    class _Args(BaseModel):
        limit: int

    with pytest.raises(ValidationError) as info:
        _Args.model_validate({})
    cause = cause_from_exception(info.value)
    assert isinstance(cause, Fail)
    assert cause.error is info.value


@pytest.mark.parametrize("exc", [asyncio.CancelledError(), KeyboardInterrupt()])
def test_cancellation_becomes_interrupted(exc):
    assert isinstance(cause_from_exception(exc), Interrupted)


def test_unknown_exception_becomes_defect():
    exc = ZeroDivisionError("division by zero")
    cause = cause_from_exception(exc)
    assert isinstance(cause, Defect)
    assert cause.payload is exc


def test_exception_group_becomes_parallel():
    first = HulyConnectionError(message="reset")
    group = ExceptionGroup("lookups", [OperationFailed(first), RuntimeError("boom")])
    cause = cause_from_exception(group)
    assert isinstance(cause, Parallel)
    assert cause.left == Fail(first)
    assert isinstance(cause.right, Defect)


def test_translated_error_is_reported():
    """raise ... from: the translated domain error reaches the caller."""
    try:
        try:
            raise OperationFailed(HulyConnectionError(message="timeout"))
        except OperationFailed as e:
            raise OperationFailed(ProjectNotFoundError(identifier="P")) from e
    except OperationFailed as exc:
        cause = cause_from_exception(exc)
    assert cause == Fail(ProjectNotFoundError(identifier="P"))
    response = map_cause(cause)
    assert response.error_code is McpErrorCode.INVALID_PARAMS
    assert response.message == "Project 'P' not found"


def test_defect_while_handling_domain_error_is_internal():
    """A bug inside an except block is not hidden by the error it handled."""
    try:
        try:
            raise OperationFailed(ProjectNotFoundError(identifier="P"))
        except OperationFailed:
            {}["x"]
    except KeyError as exc:
        cause = cause_from_exception(exc)
    assert isinstance(cause, Defect)
    response = map_cause(cause)
    assert response.error_code is McpErrorCode.INTERNAL_ERROR
    assert response.message == "Internal server error"


def test_wrapped_domain_error_is_a_defect():
    """Wrapping a domain error in a plain exception drops its domain meaning."""
    try:
        try:
            raise OperationFailed(ProjectNotFoundError(identifier="A"))
        except OperationFailed as e:
            raise RuntimeError("wrapped") from e
    except RuntimeError as exc:
        cause = cause_from_exception(exc)
    assert isinstance(cause, Defect)
    assert cause.payload.__cause__.error == ProjectNotFoundError(identifier="A")
    assert map_cause(cause).message == "Internal server error"


def test_group_member_chains_are_not_folded():
    try:
        raise KeyError("lookup")
    except KeyError as e:
        member = OperationFailed(HulyConnectionError(message="reset"))
        member.__context__ = e
    cause = cause_from_exception(ExceptionGroup("lookups", [member]))
    assert cause == Fail(HulyConnectionError(message="reset"))
