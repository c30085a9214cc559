"""
=============================================================================
HTTPEDITOR - Editable Text Form for HTTP Messages
=============================================================================

Renders the header and body of an HTTP request or response as one
human-editable text, and applies edited text back onto the message.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpeditor/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httpeditor)
    ├── config.py            # CodecConfig dataclass
    ├── messages.py          # User-facing message catalog
    ├── http/                # HTTP message components
    │   ├── base.py          # HeaderUnit / BodyUnit interfaces
    │   ├── header.py        # Request and response headers
    │   ├── body.py          # Body bytes and charset
    │   └── message.py       # HTTPMessage and raw-bytes parsing
    └── codec/               # Text codec
        ├── compression.py   # gzip content-encoding
        └── text.py          # MessageTextCodec

=============================================================================
QUICK START
=============================================================================

    from httpeditor import RequestTextCodec, parse_request

    message = parse_request(raw_bytes)
    codec = RequestTextCodec(message=message)

    text = codec.render()
    # ... user edits text ...
    codec.apply(edited_text)

    new_raw_bytes = message.request_bytes()

=============================================================================
"""

__version__ = "1.0.0"

from .codec import (
    InvalidMessageDataError,
    MessageTextCodec,
    RequestTextCodec,
    ResponseTextCodec,
    UnreadableContentError,
)
from .config import CodecConfig
from .http import HTTPMessage, parse_request, parse_response

__all__ = [
    "MessageTextCodec",
    "RequestTextCodec",
    "ResponseTextCodec",
    "InvalidMessageDataError",
    "UnreadableContentError",
    "HTTPMessage",
    "parse_request",
    "parse_response",
    "CodecConfig",
    "__version__",
]
