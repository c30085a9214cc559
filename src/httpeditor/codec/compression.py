"""
=============================================================================
CONTENT-ENCODING CODECS
=============================================================================

Undoes a body's transport compression for display and reapplies it when
the edited body is saved.

=============================================================================
CONTENT-ENCODING ON THE WIRE
=============================================================================

    Response as stored by the proxy:
    ┌───────────────────────────────────────────────────────────────┐
    │ HTTP/1.1 200 OK                                               │
    │ Content-Type: application/json                                │
    │ Content-Encoding: gzip                                        │
    │              │                                                │
    │              └── body bytes are a gzip stream                 │
    │                                                               │
    │ [gzip compressed body]                                        │
    └───────────────────────────────────────────────────────────────┘

    Editing it:

        compressed ──decompress()──► plain bytes ──charset──► text
                                                                │
                                                             (edit)
                                                                │
        compressed ◄──compress()──── plain bytes ◄──charset─── text

=============================================================================
DETERMINISTIC OUTPUT
=============================================================================

A gzip stream carries a modification time in its header. GzipCodec writes
mtime=0 by default, so compressing the same text twice gives the same
bytes and an unchanged body stays unchanged after a save.

Only "gzip" is transcoded. Any other Content-Encoding (deflate, br, ...)
passes through untouched and is shown as-is.

=============================================================================
"""

import gzip
import zlib
from abc import ABC, abstractmethod
from typing import Optional

from ..http.base import GZIP


class CompressionError(Exception):
    """
    Raised when a body cannot be decoded with its content-encoding.

    Compressed payloads are not expected to be partially valid, so the
    whole operation fails instead of showing a truncated body.
    """

    def __init__(self, message: str, encoding: str = GZIP):
        super().__init__(message)
        self.encoding = encoding


class CompressionCodec(ABC):
    """Stateless transform between encoded and plain body bytes."""

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        """
        Raises:
            CompressionError: If the data is not valid for this encoding.
        """

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        ...


class GzipCodec(CompressionCodec):
    """
    gzip content-encoding (RFC 1952).

    Args:
        level: Compression level (1-9).
              1 = fastest, least compression
              6 = balanced (default)
              9 = slowest, best compression
        mtime: Modification time written in the gzip header.
    """

    def __init__(self, level: int = 6, mtime: int = 0):
        self.level = level
        self.mtime = mtime

    def decompress(self, data: bytes) -> bytes:
        try:
            return gzip.decompress(data)
        except (gzip.BadGzipFile, zlib.error, EOFError, OSError) as e:
            raise CompressionError(f"Invalid gzip content: {e}") from e

    def compress(self, data: bytes) -> bytes:
        return gzip.compress(data, compresslevel=self.level, mtime=self.mtime)


def is_gzip_encoded(content_encoding: Optional[str]) -> bool:
    """
    Check whether a Content-Encoding value selects gzip.

    Exact single-token match: "gzip" only. Missing values, other
    encodings and encoding lists ("gzip, br") mean identity.
    """
    return content_encoding == GZIP
