"""Data models for the GraphQL Lambda adapter."""

from src.models.api_key import ApiKey, ApiUser
from src.models.proxy import ProxyRequestEvent, ProxyResponseEvent
from src.models.query import QueryRequest

__all__ = [
    "ApiKey",
    "ApiUser",
    "ProxyRequestEvent",
    "ProxyResponseEvent",
    "QueryRequest",
]
