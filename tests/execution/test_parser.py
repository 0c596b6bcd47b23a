"""Tests for query envelope parsing."""

import json

import pytest
from pydantic import ValidationError

from src.exceptions import ErrorKind, MalformedRequestError
from src.execution.parser import parse_query_request
from src.models.query import QueryRequest


def test_parse_query_only() -> None:
    """Test that operationName and variables default when omitted."""
    request = parse_query_request('{"query": "{ me { id } }"}')

    assert request.query == "{ me { id } }"
    assert request.operation_name is None
    assert request.variables == {}


def test_parse_full_request() -> None:
    """Test that all three fields are read from the wire names."""
    request = parse_query_request(
        json.dumps(
            {
                "query": "query Me($id: ID) { user(id: $id) { id } }",
                "operationName": "Me",
                "variables": {"id": "42", "nested": {"list": [1, 2]}},
            }
        )
    )

    assert request.operation_name == "Me"
    assert request.variables == {"id": "42", "nested": {"list": [1, 2]}}


def test_parse_null_variables() -> None:
    """Test that null variables become an empty mapping."""
    request = parse_query_request('{"query": "{ me { id } }", "variables": null}')

    assert request.variables == {}


def test_parse_ignores_unknown_fields() -> None:
    """Test that extension fields such as persisted query hashes are ignored."""
    request = parse_query_request(
        '{"query": "{ me { id } }", "extensions": {"persistedQuery": {}}}'
    )

    assert request.query == "{ me { id } }"


@pytest.mark.parametrize(
    "body",
    [
        None,
        "",
        "   ",
        "not-json",
        "[]",
        '"just a string"',
        "{}",
        '{"operationName": "Me"}',
        '{"query": 42}',
        '{"query": "{ me }", "variables": [1, 2]}',
    ],
)
def test_parse_malformed_bodies(body) -> None:
    """Test that unusable bodies raise MalformedRequestError."""
    with pytest.raises(MalformedRequestError) as exc_info:
        parse_query_request(body)

    assert exc_info.value.kind is ErrorKind.MALFORMED_REQUEST


def test_parse_error_chains_validation_error() -> None:
    """Test that the pydantic error is kept as the cause."""
    with pytest.raises(MalformedRequestError) as exc_info:
        parse_query_request('{"operationName": "Me"}')

    assert isinstance(exc_info.value.__cause__, ValidationError)
    fields = [e["field"] for e in exc_info.value.details["validation_errors"]]
    assert "query" in fields


def test_round_trip() -> None:
    """Test that serializing and re-parsing yields an equal request."""
    original = QueryRequest(
        query="query Q($a: Int) { field(a: $a) }",
        operation_name="Q",
        variables={"a": 1, "b": [True, None, "x"]},
    )

    reparsed = parse_query_request(original.to_json())

    assert reparsed == original


def test_to_json_uses_wire_names() -> None:
    """Test that operation_name serializes as operationName."""
    data = json.loads(QueryRequest(query="{ a }", operationName="A").to_json())

    assert data == {"query": "{ a }", "operationName": "A", "variables": {}}


def test_query_request_is_immutable() -> None:
    """Test that a parsed request cannot be modified."""
    request = parse_query_request('{"query": "{ me { id } }"}')

    with pytest.raises(ValidationError):
        request.query = "{ other }"
