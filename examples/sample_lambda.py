"""
Sample GraphQL Lambda deployment.

Serves a single ``me`` query for callers holding an API key from the
API_KEYS setting. Deploy with the handler ``examples.sample_lambda.lambda_handler``
or run locally::

    uvicorn --factory examples.sample_lambda:create_local_app

Requirements:
    pip install -e .[dev] uvicorn
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI
from graphql import (
    GraphQLField,
    GraphQLID,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
)

from src.auth.validators import ApiKeyValidator
from src.execution.context import GraphQLContext
from src.handlers.graphql_handler import LambdaGraphQL
from src.logging.config import configure_logging
from src.main import create_app
from src.models.api_key import ApiUser
from src.models.query import QueryRequest


class SampleContext(GraphQLContext[ApiUser]):
    """Context that memoizes profile lookups for the current invocation."""

    def load_profile(self) -> Dict[str, Any]:
        return self.cache.get_or_set(
            ("profile", self.user.user_id),
            lambda: {"id": self.user.user_id, "keyId": self.user.key_id},
        )


def resolve_me(root: Any, info: Any) -> Dict[str, Any]:
    return info.context.load_profile()


def build_sample_schema() -> GraphQLSchema:
    user_type = GraphQLObjectType(
        "User",
        {
            "id": GraphQLField(GraphQLNonNull(GraphQLID)),
            "keyId": GraphQLField(GraphQLString),
        },
    )
    query_type = GraphQLObjectType(
        "Query", {"me": GraphQLField(user_type, resolve=resolve_me)}
    )
    return GraphQLSchema(query=query_type)


class SampleGraphQL(LambdaGraphQL[ApiUser, SampleContext]):
    def __init__(self, validator: Optional[ApiKeyValidator] = None) -> None:
        super().__init__()
        self.validator = validator or ApiKeyValidator.from_settings()

    def build_schema(self) -> GraphQLSchema:
        return build_sample_schema()

    async def validate(self, auth_header: Optional[str]) -> ApiUser:
        return await self.validator(auth_header)

    def build_context(self, user: ApiUser, query: QueryRequest) -> SampleContext:
        return SampleContext(user, query, cache=self.cache)


def create_local_app() -> FastAPI:
    return create_app(SampleGraphQL())


configure_logging()
lambda_handler = SampleGraphQL()
