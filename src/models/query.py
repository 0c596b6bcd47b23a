"""GraphQL query request model."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QueryRequest(BaseModel):
    """
    A GraphQL request as sent in the invocation body.

    Attributes:
        query: GraphQL document text
        operation_name: Operation to run when the document holds several
        variables: Variable values keyed by name
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "query": "query Me { me { id } }",
                "operationName": "Me",
                "variables": {},
            }
        },
    )

    query: str = Field(..., description="GraphQL document text")
    operation_name: Optional[str] = Field(
        None, alias="operationName", description="Operation to execute"
    )
    variables: Dict[str, Any] = Field(
        default_factory=dict, description="Variable values"
    )

    @field_validator("variables", mode="before")
    @classmethod
    def null_variables_to_empty(cls, v: Any) -> Any:
        """Clients commonly send ``"variables": null``."""
        if v is None:
            return {}
        return v

    def to_json(self) -> str:
        """Serialize back to the wire form (``operationName`` alias)."""
        return self.model_dump_json(by_alias=True)
