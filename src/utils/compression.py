"""Gzip negotiation and encoding for response bodies."""

import base64
import gzip
from collections.abc import Mapping

from src.utils.headers import ACCEPT_ENCODING, get_header


def _parse_coding(item: str) -> tuple[str, float]:
    """Split ``gzip;q=0.8`` into its coding name and quality value."""
    name, _, params = item.partition(";")
    quality = 1.0
    for param in params.split(";"):
        key, _, value = param.strip().partition("=")
        if key.strip().lower() == "q":
            try:
                quality = float(value.strip())
            except ValueError:
                quality = 1.0
    return name.strip().lower(), quality


def accepts_gzip(headers: Mapping[str, str] | None) -> bool:
    """
    Check whether the client accepts a gzip encoded response.

    The ``Accept-Encoding`` header name is matched case-insensitively and
    its comma separated codings are compared to ``gzip`` ignoring case and
    surrounding whitespace. Quality parameters are ignored except that a
    coding sent with ``q=0`` counts as refused.

    Args:
        headers: Request headers

    Returns:
        True if gzip is acceptable
    """
    accept_encoding = get_header(headers, ACCEPT_ENCODING)
    if accept_encoding is None:
        return False

    for item in accept_encoding.strip().split(","):
        name, quality = _parse_coding(item)
        if name == "gzip" and quality > 0:
            return True
    return False


def gzip_body(body: str) -> str:
    """
    Gzip the UTF-8 bytes of a body and return them as base64 text.

    API Gateway only carries text, so the response must also be flagged
    with ``isBase64Encoded``.

    Args:
        body: Serialized response body

    Returns:
        Base64 encoded gzip stream
    """
    compressed = gzip.compress(body.encode("utf-8"))
    return base64.b64encode(compressed).decode("ascii")
