"""API Gateway HTTP proxy event models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProxyRequestEvent(BaseModel):
    """
    Inbound API Gateway proxy event.

    Only the fields the adapter reads are modelled; everything else the
    gateway sends is ignored.

    Attributes:
        body: Raw request body
        headers: Request headers as sent by the client
        is_base64_encoded: Whether ``body`` is base64 encoded
        request_context: Gateway request metadata (request id etc.)
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    body: Optional[str] = Field(None, description="Raw request body")
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Request headers"
    )
    is_base64_encoded: bool = Field(False, alias="isBase64Encoded")
    request_context: Dict[str, Any] = Field(
        default_factory=dict, alias="requestContext"
    )

    @field_validator("headers", "request_context", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        """API Gateway sends null instead of an empty object."""
        if v is None:
            return {}
        return v

    @classmethod
    def from_event(cls, event: Any) -> "ProxyRequestEvent":
        """Build from a raw Lambda event dict or pass an instance through."""
        if isinstance(event, cls):
            return event
        return cls.model_validate(event or {})

    @property
    def request_id(self) -> Optional[str]:
        """Gateway request id, used as the logging correlation id."""
        return self.request_context.get("requestId")


class ProxyResponseEvent(BaseModel):
    """
    Outbound API Gateway proxy response.

    Attributes:
        status_code: HTTP status code
        headers: Response headers
        body: Response body (base64 text when compressed)
        is_base64_encoded: Whether ``body`` is base64 encoded
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    status_code: int = Field(..., alias="statusCode")
    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = Field(...)
    is_base64_encoded: bool = Field(False, alias="isBase64Encoded")

    def to_event(self) -> Dict[str, Any]:
        """Dump with the field names API Gateway expects."""
        return self.model_dump(by_alias=True)
