"""Tool response tests — success and unknown-tool shapes.

Tests cover:
    - Success text is 2-space indented JSON that round-trips to the value
    - Success wire object has no isError / _meta keys
    - Non-ASCII text kept literal
    - NaN / Infinity rejected with ValueError (not valid JSON text)
    - Unknown tool response is INVALID_PARAMS with the tool name
"""

import json

import pytest

from app.core.domain_errors import McpErrorCode
from app.core.tool_responses import success_response, unknown_tool_response


def test_success_response_contains_json():
    value = {"issues": [{"id": 1, "title": "Test"}]}
    wire = success_response(value).to_wire()
    assert wire["content"][0]["type"] == "text"
    assert json.loads(wire["content"][0]["text"]) == value


def test_success_response_is_indented():
    response = success_response({"a": 1, "b": 2})
    assert response.text == '{\n  "a": 1,\n  "b": 2\n}'


def test_success_wire_has_no_error_keys():
    response = success_response([])
    assert response.is_error is None
    assert set(response.to_wire()) == {"content"}


def test_success_keeps_non_ascii():
    response = success_response({"body": "Olá, café"})
    assert "Olá, café" in response.text


def test_unknown_tool_response():
    wire = unknown_tool_response("bogus_tool").to_wire()
    assert wire["isError"] is True
    assert wire["_meta"] == {"errorCode": McpErrorCode.INVALID_PARAMS}
    assert wire["content"] == [{"type": "text", "text": "Unknown tool: bogus_tool"}]


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_success_rejects_non_json_floats(value):
    with pytest.raises(ValueError):
        success_response({"x": value})
