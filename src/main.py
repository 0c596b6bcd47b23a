"""FastAPI application for running a GraphQL Lambda deployment locally."""

from fastapi import FastAPI

from src.config import settings
from src.handlers.graphql_handler import LambdaGraphQL
from src.logging.config import configure_logging
from src.routes import graphql, status


def create_app(adapter: LambdaGraphQL) -> FastAPI:
    """
    Create a development server for ``adapter``.

    Serves ``POST /graphql`` through the adapter and ``GET /status``.
    Run with e.g. ``uvicorn --factory``.

    Args:
        adapter: Concrete LambdaGraphQL deployment

    Returns:
        FastAPI application
    """
    configure_logging()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="Local GraphQL endpoint backed by the Lambda adapter.",
        docs_url="/docs",
        redoc_url=None,
    )
    app.include_router(graphql.build_router(adapter))
    app.include_router(status.build_router(adapter.cache))
    return app
