"""Shared fixtures: a small schema and a configurable adapter."""

import json
from collections.abc import Awaitable, Callable
from typing import Any, Dict, List, Optional

import pytest
from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLID,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
)

from src.exceptions import AccessDeniedError
from src.execution.context import GraphQLContext
from src.handlers.graphql_handler import LambdaGraphQL
from src.models.query import QueryRequest
from src.utils.invocation_cache import InvocationCache

VALID_TOKEN = "Bearer valid-token"


class RecordingContext(GraphQLContext[str]):
    """Context that records how its lifecycle hook was called."""

    def __init__(self, user: str, query: QueryRequest, cache: InvocationCache) -> None:
        super().__init__(user, query, cache=cache)
        self.start_calls = 0
        self.done_at_start: Optional[bool] = None

    def on_start(self, execution: Any) -> None:
        self.start_calls += 1
        self.done_at_start = execution.done()


def _resolve_me(root: Any, info: Any) -> Dict[str, str]:
    info.context.cache.set(("user", info.context.user), True)
    return {"id": info.context.user}


def _resolve_echo(root: Any, info: Any, value: str) -> str:
    return value


def _resolve_boom(root: Any, info: Any) -> str:
    raise RuntimeError("resolver exploded")


def _resolve_secret(root: Any, info: Any) -> str:
    raise AccessDeniedError()


def build_test_schema() -> GraphQLSchema:
    user_type = GraphQLObjectType(
        "User", {"id": GraphQLField(GraphQLNonNull(GraphQLID))}
    )
    query_type = GraphQLObjectType(
        "Query",
        {
            "me": GraphQLField(user_type, resolve=_resolve_me),
            "echo": GraphQLField(
                GraphQLString,
                args={"value": GraphQLArgument(GraphQLNonNull(GraphQLString))},
                resolve=_resolve_echo,
            ),
            "boom": GraphQLField(GraphQLString, resolve=_resolve_boom),
            "secret": GraphQLField(GraphQLString, resolve=_resolve_secret),
        },
    )
    return GraphQLSchema(query=query_type)


async def default_validator(auth_header: Optional[str]) -> str:
    if auth_header != VALID_TOKEN:
        raise AccessDeniedError()
    return "123"


class StubGraphQL(LambdaGraphQL[str, RecordingContext]):
    """Adapter with a pluggable validator and switch overrides."""

    def __init__(
        self,
        validator: Callable[[Optional[str]], Awaitable[str]] = default_validator,
        cache: Optional[InvocationCache] = None,
        access_log: bool = False,
        gzip: bool = False,
        failure_cause: bool = False,
    ) -> None:
        super().__init__(schema=build_test_schema(), cache=cache if cache is not None else InvocationCache())
        self.validator = validator
        self.access_log = access_log
        self.gzip = gzip
        self.failure_cause = failure_cause
        self.contexts: List[RecordingContext] = []
        self.seen_auth_headers: List[Optional[str]] = []

    async def validate(self, auth_header: Optional[str]) -> str:
        self.seen_auth_headers.append(auth_header)
        return await self.validator(auth_header)

    def build_context(self, user: str, query: QueryRequest) -> RecordingContext:
        context = RecordingContext(user, query, cache=self.cache)
        self.contexts.append(context)
        return context

    def enable_access_log(self) -> bool:
        return self.access_log

    def enable_gzip_compression(self) -> bool:
        return self.gzip

    def show_failure_cause(self) -> bool:
        return self.failure_cause


def make_event(
    body: Any,
    headers: Optional[Dict[str, str]] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Build an API Gateway proxy event; dict bodies are JSON encoded."""
    if not isinstance(body, str) and body is not None:
        body = json.dumps(body)
    event: Dict[str, Any] = {
        "body": body,
        "headers": {"Authorization": VALID_TOKEN} if headers is None else headers,
        "requestContext": {"requestId": "req-test-1"},
    }
    event.update(extra)
    return event


@pytest.fixture
def cache() -> InvocationCache:
    return InvocationCache()


@pytest.fixture
def adapter(cache: InvocationCache) -> StubGraphQL:
    return StubGraphQL(cache=cache)
