"""
Lambda request adapter running GraphQL queries against a prebuilt schema.

A deployment subclasses :class:`LambdaGraphQL`, supplies the schema, a user
validator and a context builder, and exposes the instance as its Lambda
handler::

    class Api(LambdaGraphQL[ApiUser, ApiContext]):
        def build_schema(self) -> GraphQLSchema: ...
        async def validate(self, auth_header): ...
        def build_context(self, user, query): ...

    lambda_handler = Api()
"""

import asyncio
import base64
import binascii
import time
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

from graphql import ExecutionResult, GraphQLSchema, graphql
from pydantic import ValidationError

from src.config import settings
from src.exceptions import (
    ExecutionFailureError,
    GraphQLLambdaError,
    MalformedRequestError,
    ValidationInfrastructureError,
)
from src.execution.context import GraphQLContext
from src.execution.parser import parse_query_request
from src.execution.serializer import dump_json, serialize_result
from src.handlers.exception_handler import build_error_response
from src.logging.config import get_logger, log_extra
from src.models.proxy import ProxyRequestEvent, ProxyResponseEvent
from src.models.query import QueryRequest
from src.utils.compression import accepts_gzip, gzip_body
from src.utils.headers import AUTHORIZATION, get_header, response_headers
from src.utils.invocation_cache import InvocationCache, invocation_cache

logger = get_logger(__name__)

U = TypeVar("U")
C = TypeVar("C", bound=GraphQLContext)


def _get_or_generate_correlation_id(lambda_context: Any) -> str:
    """Use the Lambda request id when available, else a fresh UUID."""
    return getattr(lambda_context, "aws_request_id", None) or str(uuid.uuid4())


class LambdaGraphQL(ABC, Generic[U, C]):
    """
    Adapts API Gateway proxy invocations to GraphQL executions.

    Type parameters:
        U: Identity type returned by :meth:`validate`
        C: Execution context type returned by :meth:`build_context`
    """

    def __init__(
        self,
        schema: Optional[GraphQLSchema] = None,
        cache: Optional[InvocationCache] = None,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            schema: Prebuilt schema; :meth:`build_schema` is used when None
            cache: Invocation cache to evict after every invocation,
                defaults to the process-wide instance
        """
        self.schema = schema if schema is not None else self.build_schema()
        self.cache = cache if cache is not None else invocation_cache

    def build_schema(self) -> GraphQLSchema:
        """Build the schema served by this deployment."""
        raise NotImplementedError(
            f"{type(self).__name__} must pass a schema or override build_schema()"
        )

    @abstractmethod
    async def validate(self, auth_header: Optional[str]) -> U:
        """
        Resolve the Authorization header to a user.

        Args:
            auth_header: Header value, None when the header is absent

        Raises:
            AccessDeniedError: If the caller may not use the API
        """

    @abstractmethod
    def build_context(self, user: U, query: QueryRequest) -> C:
        """Create the execution context for one invocation."""

    def enable_access_log(self) -> bool:
        """Log operation name and user before each execution."""
        return settings.enable_access_log

    def enable_gzip_compression(self) -> bool:
        """Gzip responses for clients that accept it."""
        return settings.enable_gzip_compression

    def show_failure_cause(self) -> bool:
        """Return the failure traceback in 500 responses instead of a generic message."""
        return settings.show_failure_cause

    def __call__(self, event: Dict[str, Any], lambda_context: Any) -> Dict[str, Any]:
        return self.handle_request(event, lambda_context)

    def handle_request(
        self, event: Dict[str, Any], lambda_context: Any = None
    ) -> Dict[str, Any]:
        """
        Synchronous Lambda entry point.

        Args:
            event: API Gateway proxy event
            lambda_context: Lambda context object with runtime information

        Returns:
            API Gateway response dict with statusCode, headers, body and
            isBase64Encoded
        """
        response = asyncio.run(self.handle(event, lambda_context))
        return response.to_event()

    async def handle(
        self, event: Any, lambda_context: Any = None
    ) -> ProxyResponseEvent:
        """
        Run one invocation end to end.

        Never raises: every failure is turned into a response. The
        invocation cache is evicted on every path before returning.

        Args:
            event: API Gateway proxy event (dict or ProxyRequestEvent)
            lambda_context: Lambda context object, optional

        Returns:
            Fully built proxy response
        """
        correlation_id = _get_or_generate_correlation_id(lambda_context)
        start_time = time.time()
        show_failure_cause = False
        context: Optional[C] = None
        execution: Optional["asyncio.Future[ExecutionResult]"] = None
        try:
            show_failure_cause = self.show_failure_cause()
            request = self._parse_event(event)
            correlation_id = request.request_id or correlation_id
            query = parse_query_request(self._decode_body(request))

            user = await self._validate_user(
                get_header(request.headers, AUTHORIZATION)
            )

            if self.enable_access_log():
                logger.info(
                    f"Executing query {query.operation_name}, for user {user}",
                    extra=log_extra(
                        correlation_id,
                        operation_name=query.operation_name,
                        user=str(user),
                    ),
                )

            context = self.build_context(user, query)
            execution = self._dispatch(query, context)
            context.start(execution)

            result = await self._await_result(execution)
            body = dump_json(serialize_result(result))
            response = self._build_response(request.headers, body)

            logger.debug(
                "Query executed",
                extra=log_extra(
                    correlation_id,
                    operation_name=query.operation_name,
                    error_count=len(result.errors or ()),
                    response_time_ms=round((time.time() - start_time) * 1000, 2),
                ),
            )
            return response
        except Exception as exc:
            return build_error_response(
                exc,
                show_failure_cause=show_failure_cause,
                correlation_id=correlation_id,
            )
        finally:
            # A task left unawaited by a failure must not write to the
            # cache after eviction
            if execution is not None and not execution.done():
                execution.cancel()
            if context is not None and not context.started:
                logger.warning(
                    "Execution context dropped before it was started",
                    extra=log_extra(
                        correlation_id, context_type=type(context).__name__
                    ),
                )
            self.cache.evict()

    def _parse_event(self, event: Any) -> ProxyRequestEvent:
        try:
            return ProxyRequestEvent.from_event(event)
        except ValidationError as exc:
            raise MalformedRequestError(
                message="Invalid proxy event",
                details={"error_count": exc.error_count()},
            ) from exc

    def _decode_body(self, request: ProxyRequestEvent) -> Optional[str]:
        if not request.is_base64_encoded or request.body is None:
            return request.body
        try:
            return base64.b64decode(request.body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise MalformedRequestError(
                message="Request body is not valid base64 UTF-8"
            ) from exc

    async def _validate_user(self, auth_header: Optional[str]) -> U:
        try:
            return await self.validate(auth_header)
        except GraphQLLambdaError:
            raise
        except Exception as exc:
            raise ValidationInfrastructureError(
                details={"exception_type": type(exc).__name__}
            ) from exc

    def _dispatch(
        self, query: QueryRequest, context: C
    ) -> "asyncio.Task[ExecutionResult]":
        """Start execution without waiting for it."""
        return asyncio.ensure_future(
            graphql(
                self.schema,
                source=query.query,
                operation_name=query.operation_name,
                variable_values=query.variables,
                context_value=context,
            )
        )

    async def _await_result(
        self, execution: "asyncio.Future[ExecutionResult]"
    ) -> ExecutionResult:
        try:
            return await execution
        except GraphQLLambdaError:
            raise
        except Exception as exc:
            raise ExecutionFailureError(
                details={"exception_type": type(exc).__name__}
            ) from exc

    def _build_response(
        self, request_headers: Mapping[str, str], body: str
    ) -> ProxyResponseEvent:
        if self.enable_gzip_compression() and accepts_gzip(request_headers):
            return ProxyResponseEvent(
                status_code=200,
                headers=response_headers(compressed=True),
                body=gzip_body(body),
                is_base64_encoded=True,
            )

        return ProxyResponseEvent(
            status_code=200,
            headers=response_headers(),
            body=body,
        )
