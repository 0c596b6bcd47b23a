"""Decoding of invocation bodies into GraphQL query requests."""

from pydantic import ValidationError

from src.exceptions import MalformedRequestError
from src.models.query import QueryRequest


def parse_query_request(body: str | None) -> QueryRequest:
    """
    Decode an invocation body into a QueryRequest.

    Args:
        body: Raw JSON body of the invocation

    Returns:
        Parsed, immutable query request

    Raises:
        MalformedRequestError: If the body is missing, is not a JSON object
            or lacks a string ``query`` field
    """
    if body is None or not body.strip():
        raise MalformedRequestError(message="Request body is empty")

    try:
        return QueryRequest.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedRequestError(
            details={
                "validation_errors": [
                    {
                        "field": ".".join(str(loc) for loc in error["loc"])
                        or "body",
                        "type": error["type"],
                    }
                    for error in exc.errors()
                ]
            }
        ) from exc
