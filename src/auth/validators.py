"""Ready-made user validator for bearer API key deployments."""

from collections.abc import Iterable
from typing import List

from src.auth.api_key import extract_bearer_token, verify_api_key
from src.config import settings
from src.exceptions import AccessDeniedError
from src.logging.config import get_logger
from src.models.api_key import ApiKey, ApiUser

logger = get_logger(__name__)


class ApiKeyValidator:
    """
    Resolve ``Authorization: Bearer <key>`` headers to API users.

    Keys are verified against every configured bcrypt hash. Intended for a
    handful of keys held in configuration; deployments with many keys
    should supply their own validator.
    """

    def __init__(self, keys: Iterable[ApiKey]) -> None:
        self.keys: List[ApiKey] = list(keys)

    @classmethod
    def from_settings(cls) -> "ApiKeyValidator":
        """Build a validator from the API_KEYS setting."""
        return cls(ApiKey(**record) for record in settings.api_keys)

    def find_key(self, api_key: str) -> ApiKey | None:
        """Return the record whose hash matches ``api_key``."""
        for record in self.keys:
            if verify_api_key(api_key, record.key_hash):
                return record
        return None

    async def __call__(self, authorization: str | None) -> ApiUser:
        """
        Validate an Authorization header value.

        Args:
            authorization: Raw header value, None when absent

        Returns:
            The user the key belongs to

        Raises:
            AccessDeniedError: If the key is missing, unknown, inactive
                or revoked
        """
        token = extract_bearer_token(authorization)

        found_key = self.find_key(token)
        if found_key is None:
            raise AccessDeniedError(details={"reason": "Invalid API key"})

        if found_key.status != "active":
            logger.info(
                "Rejected non-active API key",
                extra={
                    "context": {
                        "key_id": found_key.key_id,
                        "status": found_key.status,
                    }
                },
            )
            raise AccessDeniedError(
                details={
                    "reason": f"API key is {found_key.status}",
                    "key_id": found_key.key_id,
                }
            )

        return ApiUser(user_id=found_key.user_id, key_id=found_key.key_id)
