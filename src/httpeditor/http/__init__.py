"""
HTTP message components.

This package provides the header and body units the text codec works on,
plus the message container and raw-bytes parsers.
"""

from .base import (
    CONTENT_ENCODING,
    CONTENT_LENGTH,
    CONTENT_TYPE,
    CRLF,
    DEFAULT_CHARSET,
    GZIP,
    LF,
    BodyUnit,
    HeaderUnit,
    HTTPMalformedHeaderError,
)
from .body import HTTPBody
from .header import HTTPHeader, HTTPRequestHeader, HTTPResponseHeader
from .message import HTTPMessage, parse_request, parse_response, to_bytes

__all__ = [
    # Interfaces
    "HeaderUnit",
    "BodyUnit",
    "HTTPMalformedHeaderError",
    # Implementations
    "HTTPHeader",
    "HTTPRequestHeader",
    "HTTPResponseHeader",
    "HTTPBody",
    "HTTPMessage",
    # Parsing
    "parse_request",
    "parse_response",
    "to_bytes",
    # Constants
    "CRLF",
    "LF",
    "CONTENT_ENCODING",
    "CONTENT_LENGTH",
    "CONTENT_TYPE",
    "DEFAULT_CHARSET",
    "GZIP",
]
