"""
Text and content-encoding codecs for editable HTTP messages.
"""

from .compression import CompressionCodec, CompressionError, GzipCodec, is_gzip_encoded
from .text import (
    REQUEST,
    RESPONSE,
    InvalidMessageDataError,
    MessageDataError,
    MessagePart,
    MessageTextCodec,
    RequestPart,
    RequestTextCodec,
    ResponsePart,
    ResponseTextCodec,
    UnreadableContentError,
)

__all__ = [
    "MessageTextCodec",
    "RequestTextCodec",
    "ResponseTextCodec",
    "MessagePart",
    "RequestPart",
    "ResponsePart",
    "REQUEST",
    "RESPONSE",
    "MessageDataError",
    "InvalidMessageDataError",
    "UnreadableContentError",
    "CompressionCodec",
    "CompressionError",
    "GzipCodec",
    "is_gzip_encoded",
]
