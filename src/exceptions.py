"""Custom exception classes for the GraphQL Lambda adapter.

Every failure the adapter can surface carries an explicit ``kind`` so that
the error classifier can pick a response shape without walking exception
chains.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure categories recognised by the error classifier."""

    MALFORMED_REQUEST = "malformed_request"
    ACCESS_DENIED = "access_denied"
    VALIDATION_INFRASTRUCTURE_FAILURE = "validation_infrastructure_failure"
    EXECUTION_FAILURE = "execution_failure"
    SERIALIZATION_FAILURE = "serialization_failure"
    INTERNAL = "internal"


class GraphQLLambdaError(Exception):
    """Base exception for the GraphQL Lambda adapter."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.INTERNAL,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            kind: Failure category used for classification
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.error_code = error_code
        self.details = details or {}


class MalformedRequestError(GraphQLLambdaError):
    """Raised when the invocation body cannot be decoded into a query."""

    def __init__(
        self,
        message: str = "Malformed GraphQL request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            kind=ErrorKind.MALFORMED_REQUEST,
            error_code="MALFORMED_REQUEST",
            details=details,
        )


class AccessDeniedError(GraphQLLambdaError):
    """
    Raised when the caller is not allowed to run the query.

    Raised by validators for unknown or missing credentials and by resolvers
    or contexts for authorization checks made during execution. Reported to
    the client as a GraphQL error rather than an HTTP failure.
    """

    def __init__(
        self,
        message: str = "AccessDeniedError",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            kind=ErrorKind.ACCESS_DENIED,
            error_code="ACCESS_DENIED",
            details=details,
        )


class ValidationInfrastructureError(GraphQLLambdaError):
    """Raised when the user validator fails for a reason other than denial."""

    def __init__(
        self,
        message: str = "User validation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            kind=ErrorKind.VALIDATION_INFRASTRUCTURE_FAILURE,
            error_code="VALIDATION_FAILURE",
            details=details,
        )


class ExecutionFailureError(GraphQLLambdaError):
    """Raised when the GraphQL engine itself fails."""

    def __init__(
        self,
        message: str = "GraphQL execution failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            kind=ErrorKind.EXECUTION_FAILURE,
            error_code="EXECUTION_FAILURE",
            details=details,
        )


class SerializationFailureError(GraphQLLambdaError):
    """Raised when an execution result cannot be encoded as JSON."""

    def __init__(
        self,
        message: str = "Failed to serialize execution result",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            kind=ErrorKind.SERIALIZATION_FAILURE,
            error_code="SERIALIZATION_FAILURE",
            details=details,
        )


class ContextLifecycleError(GraphQLLambdaError):
    """Raised when an execution context is started more than once."""

    def __init__(
        self,
        message: str = "Execution context already started",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            kind=ErrorKind.INTERNAL,
            error_code="CONTEXT_LIFECYCLE",
            details=details,
        )
