"""Classification of invocation failures into proxy responses."""

import traceback

from src.exceptions import AccessDeniedError, ErrorKind
from src.execution.serializer import access_denied_document, dump_json
from src.logging.config import get_logger, log_extra
from src.models.proxy import ProxyResponseEvent
from src.utils.headers import response_headers

logger = get_logger(__name__)

INTERNAL_SERVER_ERROR_BODY = "Internal Server Error"


def classify_error(exc: BaseException) -> ErrorKind:
    """
    Return the failure category of an exception.

    Adapter errors carry their ``kind``; anything else is an unexpected
    internal failure.
    """
    return getattr(exc, "kind", ErrorKind.INTERNAL)


def create_access_denied_response(exc: AccessDeniedError) -> ProxyResponseEvent:
    """
    Build the response for an access denied failure.

    Access denial is part of the query's own authorization model, so it
    is reported as a GraphQL error with status 200.
    """
    return ProxyResponseEvent(
        status_code=200,
        headers=response_headers(),
        body=dump_json(access_denied_document(exc)),
    )


def create_failure_response(
    exc: BaseException, show_failure_cause: bool = False
) -> ProxyResponseEvent:
    """
    Build the 500 response for any failure other than access denial.

    Args:
        exc: The failure
        show_failure_cause: Return the traceback text instead of the
            generic message. For debugging only.

    Returns:
        Proxy response with status 500
    """
    if show_failure_cause:
        body = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    else:
        body = INTERNAL_SERVER_ERROR_BODY

    return ProxyResponseEvent(
        status_code=500,
        headers=response_headers(),
        body=body,
    )


def build_error_response(
    exc: BaseException,
    show_failure_cause: bool = False,
    correlation_id: str | None = None,
) -> ProxyResponseEvent:
    """
    Log a failure and turn it into a proxy response.

    Args:
        exc: Failure raised while handling the invocation
        show_failure_cause: Include failure detail in 500 responses
        correlation_id: Invocation request id for the log record

    Returns:
        Fully built proxy response
    """
    kind = classify_error(exc)

    if kind is ErrorKind.ACCESS_DENIED:
        logger.warning(
            "Access denied",
            extra=log_extra(
                correlation_id,
                error_code=getattr(exc, "error_code", None),
                reason=getattr(exc, "message", str(exc)),
            ),
        )
        return create_access_denied_response(exc)

    logger.error(
        f"Failed to invoke graph: {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra=log_extra(
            correlation_id,
            error_kind=kind.value,
            exception_type=type(exc).__name__,
        ),
    )
    return create_failure_response(exc, show_failure_cause)
