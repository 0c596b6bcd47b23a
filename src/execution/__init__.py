"""Query parsing, execution context and result serialization."""

from src.execution.context import ContextState, GraphQLContext
from src.execution.parser import parse_query_request
from src.execution.serializer import (
    access_denied_document,
    dump_json,
    serialize_result,
)

__all__ = [
    "ContextState",
    "GraphQLContext",
    "access_denied_document",
    "dump_json",
    "parse_query_request",
    "serialize_result",
]
