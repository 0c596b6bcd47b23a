"""End-to-end tests for the sample deployment with API key auth."""

import json
import logging
from typing import Any, Dict, Iterator

import pytest

from src.auth.api_key import hash_api_key
from src.auth.validators import ApiKeyValidator
from src.models.api_key import ApiKey
from src.utils.invocation_cache import invocation_cache

API_KEY = "sample-integration-key"


class FakeLambdaContext:
    aws_request_id = "lambda-req-1"


@pytest.fixture(scope="module")
def sample_module() -> Iterator[Any]:
    root_logger = logging.getLogger()
    saved = root_logger.handlers[:]
    from examples import sample_lambda

    yield sample_lambda
    root_logger.handlers = saved


@pytest.fixture(scope="module")
def deployment(sample_module: Any) -> Any:
    validator = ApiKeyValidator(
        [ApiKey(key_id="k1", key_hash=hash_api_key(API_KEY), user_id="123")]
    )
    return sample_module.SampleGraphQL(validator=validator)


def _event(headers: Dict[str, str]) -> Dict[str, Any]:
    return {
        "version": "2.0",
        "routeKey": "POST /graphql",
        "body": json.dumps({"query": "{ me { id keyId } }"}),
        "headers": headers,
        "isBase64Encoded": False,
        "requestContext": {"requestId": "gw-req-1"},
    }


def test_sample_me_query(deployment: Any) -> None:
    """Test a full invocation through the Lambda entry point."""
    response = deployment(
        _event({"authorization": f"Bearer {API_KEY}"}), FakeLambdaContext()
    )

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"data": {"me": {"id": "123", "keyId": "k1"}}}
    assert len(invocation_cache) == 0


def test_sample_unknown_key(deployment: Any) -> None:
    response = deployment(_event({"Authorization": "Bearer nope"}), FakeLambdaContext())

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["errors"][0]["message"] == "AccessDeniedError"


def test_sample_handler_module_level(sample_module: Any) -> None:
    """Test that the exported handler denies callers when no keys are set."""
    response = sample_module.lambda_handler(_event({}), None)

    assert response["statusCode"] == 200
    assert "errors" in json.loads(response["body"])
