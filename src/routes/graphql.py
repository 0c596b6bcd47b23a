"""GraphQL endpoint that runs requests through a Lambda adapter."""

import base64

from fastapi import APIRouter, Request, Response

from src.handlers.graphql_handler import LambdaGraphQL
from src.models.proxy import ProxyRequestEvent


def build_router(adapter: LambdaGraphQL) -> APIRouter:
    """
    Create a router serving ``POST /graphql`` with ``adapter``.

    The HTTP request is translated into the proxy event API Gateway would
    send, so the adapter runs exactly as it does on Lambda.

    Args:
        adapter: Deployment to serve

    Returns:
        Router to include in a FastAPI app
    """
    router = APIRouter(tags=["GraphQL"])

    @router.post("/graphql")
    async def post_graphql(request: Request) -> Response:
        raw_body = await request.body()
        event = ProxyRequestEvent(
            body=raw_body.decode("utf-8", errors="replace"),
            headers=dict(request.headers),
            request_context={
                "requestId": request.headers.get("X-Request-ID"),
            },
        )
        result = await adapter.handle(event)

        content: bytes | str = result.body
        if result.is_base64_encoded:
            content = base64.b64decode(result.body)

        return Response(
            content=content,
            status_code=result.status_code,
            headers=result.headers,
        )

    return router
