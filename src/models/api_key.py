"""API key record model."""

from typing import Optional

from pydantic import BaseModel, Field


class ApiKey(BaseModel):
    """
    API key record used by the bundled validator.

    Attributes:
        key_id: Unique identifier (UUID v4)
        key_hash: Bcrypt hash of the API key
        user_id: Identity the key authenticates as
        status: Key status (active, inactive, revoked)
        created_at: ISO 8601 timestamp of key creation
        description: Optional human-readable description
    """

    key_id: str = Field(..., description="Unique key identifier (UUID)")
    key_hash: str = Field(..., description="Bcrypt hash of API key")
    user_id: str = Field(..., description="User the key belongs to")
    status: str = Field(
        "active", description="Key status: active, inactive, revoked"
    )
    created_at: Optional[str] = Field(
        None, description="ISO 8601 creation timestamp"
    )
    description: Optional[str] = Field(
        None, description="Human-readable description"
    )

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "key_id": "660e9500-f39c-52e5-b827-557766551111",
                "key_hash": "$2b$12$...",  # Bcrypt hash
                "user_id": "123",
                "status": "active",
                "created_at": "2025-11-11T12:00:00Z",
                "description": "Mobile app key",
            }
        }


class ApiUser(BaseModel):
    """Identity returned by the API key validator."""

    model_config = {"frozen": True}

    user_id: str
    key_id: str

    def __str__(self) -> str:
        return self.user_id
