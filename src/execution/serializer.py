"""Conversion of execution results into response documents."""

import json
from typing import Any, Dict

from graphql import ExecutionResult, GraphQLError

from src.exceptions import AccessDeniedError, SerializationFailureError

GRAPHQL_ERRORS_FIELD = "errors"


def serialize_result(result: ExecutionResult) -> Dict[str, Any]:
    """
    Convert an execution result to its response document.

    An empty ``errors`` list is dropped so clients never see
    ``"errors": []``; non-empty errors are kept in engine order.
    """
    document = dict(result.formatted)
    if GRAPHQL_ERRORS_FIELD in document and not document[GRAPHQL_ERRORS_FIELD]:
        del document[GRAPHQL_ERRORS_FIELD]
    return document


def access_denied_document(exc: AccessDeniedError) -> Dict[str, Any]:
    """Build a response document holding a single access denied error."""
    error = GraphQLError(
        exc.message,
        original_error=exc,
        extensions={"code": exc.error_code},
    )
    return {GRAPHQL_ERRORS_FIELD: [error.formatted]}


def dump_json(document: Dict[str, Any]) -> str:
    """
    Encode a response document as compact JSON.

    Raises:
        SerializationFailureError: If a value is not JSON serializable
    """
    try:
        return json.dumps(document, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationFailureError(
            details={"reason": str(exc)}
        ) from exc
