"""
=============================================================================
HTTP MESSAGE
=============================================================================

An HTTP exchange as seen by an intercepting proxy: the request the client
sent and, once it arrived, the response the server returned.

    ┌──────────────────────────────────────────────────────────────────┐
    │                         HTTPMessage                              │
    ├────────────────────────────────┬─────────────────────────────────┤
    │  request_header                │  response_header                │
    │  HTTPRequestHeader             │  HTTPResponseHeader             │
    ├────────────────────────────────┼─────────────────────────────────┤
    │  request_body                  │  response_body                  │
    │  HTTPBody                      │  HTTPBody                       │
    └────────────────────────────────┴─────────────────────────────────┘

=============================================================================
PARSING RAW BYTES
=============================================================================

parse_request() and parse_response() split stored wire bytes at the first
blank line (\\r\\n\\r\\n):

    GET /path HTTP/1.1\\r\\n
    Host: example.com\\r\\n
    \\r\\n                    <-- Header/body separator
    {"data": "body"}        <-- Body starts here, kept byte for byte

The header section is decoded as ISO-8859-1 so no byte is ever lost. The
body is NOT truncated to Content-Length: an editor shows what was stored.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .base import DEFAULT_CHARSET, HTTPMalformedHeaderError
from .body import HTTPBody
from .header import HTTPHeader, HTTPRequestHeader, HTTPResponseHeader

HEADER_ENCODING = "ISO-8859-1"


@dataclass
class HTTPMessage:
    """Request and response halves of one HTTP exchange."""

    request_header: HTTPRequestHeader = field(default_factory=HTTPRequestHeader)
    request_body: HTTPBody = field(default_factory=HTTPBody)
    response_header: HTTPResponseHeader = field(default_factory=HTTPResponseHeader)
    response_body: HTTPBody = field(default_factory=HTTPBody)

    def request_bytes(self) -> bytes:
        return to_bytes(self.request_header, self.request_body)

    def response_bytes(self) -> bytes:
        return to_bytes(self.response_header, self.response_body)


# =============================================================================
# PARSING
# =============================================================================

def _split_message(data: bytes) -> Tuple[str, bytes]:
    """
    Split raw message bytes into header text and body bytes.

    Raises:
        HTTPMalformedHeaderError: If there is no header terminator.
    """
    header_end = data.find(b"\r\n\r\n")
    if header_end == -1:
        raise HTTPMalformedHeaderError("Incomplete message: no header terminator")

    # Body starts 4 bytes after header_end (\r\n\r\n = 4 bytes)
    header_text = data[:header_end].decode(HEADER_ENCODING)
    return header_text, data[header_end + 4:]


def _build_body(header: HTTPHeader, content: bytes, default_charset: str) -> HTTPBody:
    return HTTPBody(content, charset=header.charset or default_charset)


def parse_request(
    data: bytes,
    default_charset: str = DEFAULT_CHARSET,
    message: Optional[HTTPMessage] = None,
) -> HTTPMessage:
    """
    Parse raw request bytes into the request half of a message.

    Args:
        data: Raw request as stored or captured.
        default_charset: Body charset when Content-Type declares none.
        message: Existing message to fill in; a new one is created if None.

    Returns:
        The message holding the parsed request.

    Raises:
        HTTPMalformedHeaderError: If the request header is not valid.
    """
    header_text, content = _split_message(data)
    header = HTTPRequestHeader(header_text)

    message = message if message is not None else HTTPMessage()
    message.request_header = header
    message.request_body = _build_body(header, content, default_charset)
    return message


def parse_response(
    data: bytes,
    default_charset: str = DEFAULT_CHARSET,
    message: Optional[HTTPMessage] = None,
) -> HTTPMessage:
    """Parse raw response bytes into the response half of a message."""
    header_text, content = _split_message(data)
    header = HTTPResponseHeader(header_text)

    message = message if message is not None else HTTPMessage()
    message.response_header = header
    message.response_body = _build_body(header, content, default_charset)
    return message


def to_bytes(header: HTTPHeader, body: HTTPBody) -> bytes:
    """
    Serialize a header and body pair as wire bytes.

    Content-Length is written exactly as the header holds it.
    """
    return header.raw_text().encode(HEADER_ENCODING, errors="replace") + body.get_bytes()
