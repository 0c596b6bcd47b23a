"""Tests for gzip negotiation and encoding."""

import base64
import gzip

import pytest

from src.utils.compression import accepts_gzip, gzip_body


@pytest.mark.parametrize(
    "headers",
    [
        {"Accept-Encoding": "gzip"},
        {"accept-encoding": "gzip"},
        {"ACCEPT-ENCODING": "GZIP"},
        {"Accept-Encoding": "br, gzip;q=0.8"},
        {"Accept-Encoding": "deflate,  gzip , br"},
        {"Accept-Encoding": " gzip "},
    ],
)
def test_accepts_gzip(headers) -> None:
    """Test header name and value matching ignores case and spacing."""
    assert accepts_gzip(headers) is True


@pytest.mark.parametrize(
    "headers",
    [
        None,
        {},
        {"Authorization": "Bearer x"},
        {"Accept-Encoding": "br"},
        {"Accept-Encoding": "deflate, br"},
        {"Accept-Encoding": "x-gzip"},
        {"Accept-Encoding": "gzip;q=0"},
        {"Accept-Encoding": ""},
    ],
)
def test_does_not_accept_gzip(headers) -> None:
    """Test that gzip is only chosen when the client lists it."""
    assert accepts_gzip(headers) is False


def test_gzip_body_round_trip() -> None:
    """Test that the body decodes back to the original UTF-8 text."""
    body = '{"data":{"name":"Zoë"}}'

    encoded = gzip_body(body)

    assert gzip.decompress(base64.b64decode(encoded)).decode("utf-8") == body


def test_gzip_body_is_ascii_base64() -> None:
    """Test that the encoded body is plain base64 text of a gzip stream."""
    raw = base64.b64decode(gzip_body("x" * 1000), validate=True)

    assert raw[:2] == b"\x1f\x8b"
    assert len(raw) < 1000
