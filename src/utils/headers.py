"""HTTP header helpers for proxy events."""

from collections.abc import Mapping

ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
CONTENT_TYPE = "Content-Type"
CONTENT_ENCODING = "Content-Encoding"
ACCEPT_ENCODING = "Accept-Encoding"
AUTHORIZATION = "Authorization"

# Sent with every response, success or failure
GRAPHQL_RESPONSE_HEADERS: Mapping[str, str] = {
    ACCESS_CONTROL_ALLOW_ORIGIN: "*",
    CONTENT_TYPE: "application/json; charset=utf-8",
}


def get_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    """
    Look up a header value ignoring the case of the header name.

    API Gateway passes header names through as the client sent them
    (HTTP/2 clients send them lower-cased), so exact lookups are unreliable.

    Args:
        headers: Request headers, may be None
        name: Header name to find

    Returns:
        The header value, or None when the header is absent
    """
    if not headers:
        return None

    if name in headers:
        return headers[name]

    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def response_headers(compressed: bool = False) -> dict[str, str]:
    """
    Build a fresh response header dict.

    Args:
        compressed: Add ``Content-Encoding: gzip`` to the standard set

    Returns:
        New dict; callers may mutate it freely
    """
    headers = dict(GRAPHQL_RESPONSE_HEADERS)
    if compressed:
        headers[CONTENT_ENCODING] = "gzip"
    return headers
