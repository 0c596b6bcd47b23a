"""Health check endpoint for the local development server."""

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.config import settings
from src.utils.invocation_cache import InvocationCache, invocation_cache

_app_start_time = time.time()


def build_router(cache: InvocationCache = invocation_cache) -> APIRouter:
    """
    Create a router serving ``GET /status``.

    Args:
        cache: Invocation cache of the adapter being served

    Returns:
        Router to include in a FastAPI app
    """
    router = APIRouter(tags=["Health"])

    @router.get("/status")
    async def get_status() -> JSONResponse:
        """
        Report server status.

        ``invocation_cache_entries`` should always be 0 between requests;
        anything else means a request leaked state.

        Returns:
            JSONResponse with status, version, uptime_seconds and
            invocation_cache_entries
        """
        return JSONResponse(
            status_code=200,
            content={
                "status": "ok",
                "version": settings.api_version,
                "uptime_seconds": int(time.time() - _app_start_time),
                "invocation_cache_entries": len(cache),
            },
        )

    return router
