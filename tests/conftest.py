"""
pytest configuration and fixtures.
"""

import gzip
from typing import Generator

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpeditor.http import HTTPMessage, parse_request, parse_response
from httpeditor import messages


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /api/users?page=1&limit=10 HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: application/json\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with a body using mixed line endings."""
    body = b"name=John\r\nemail=john@example.com\nok"
    return (
        b"POST /api/users HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: application/x-www-form-urlencoded\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"\r\n"
    ) + body


@pytest.fixture
def gzip_body_text() -> str:
    return '{"message": "café", "items": [1, 2, 3]}\r\n'


@pytest.fixture
def sample_gzip_response(gzip_body_text: str) -> bytes:
    """Sample gzip-encoded HTTP response with a UTF-8 JSON body."""
    body = gzip.compress(gzip_body_text.encode("utf-8"), compresslevel=6, mtime=0)
    return (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: application/json; charset=UTF-8\r\n"
        b"Content-Encoding: gzip\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"\r\n"
    ) + body


@pytest.fixture
def post_message(sample_post_request: bytes) -> HTTPMessage:
    return parse_request(sample_post_request)


@pytest.fixture
def gzip_message(sample_gzip_response: bytes) -> HTTPMessage:
    return parse_response(sample_gzip_response)


@pytest.fixture(autouse=True)
def default_messages() -> Generator[None, None, None]:
    """Restore the message catalog after tests that override it."""
    yield
    messages.reset_messages()
