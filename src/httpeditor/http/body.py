"""
=============================================================================
HTTP BODY UNIT
=============================================================================

Holds the raw bytes of a message body together with the charset used to
turn them into text and back.

    ┌──────────────────────────────────────────────────────────────────┐
    │                                                                   │
    │   b"caf\\xe9"  ──get_text()──►  "café"     (charset ISO-8859-1)   │
    │               ◄──set_text()──                                     │
    │                                                                   │
    └──────────────────────────────────────────────────────────────────┘

Bytes the charset cannot decode are kept as lone surrogates
(surrogateescape), so text taken from get_text() encodes back to exactly
the same bytes. Characters typed into the text that the charset cannot
represent become "?" instead of raising, so a body can always be saved.
"""

import codecs
import logging
from typing import Optional

from .base import DEFAULT_CHARSET, BodyUnit

logger = logging.getLogger(__name__)


def decode_text(data: bytes, charset: str) -> str:
    """Decode body bytes, escaping undecodable bytes as lone surrogates."""
    return data.decode(charset, errors="surrogateescape")


def encode_text(text: str, charset: str) -> bytes:
    """
    Encode body text, restoring bytes escaped by decode_text().

    Falls back to "?" replacement when the text holds characters the
    charset cannot represent.
    """
    try:
        return text.encode(charset, errors="surrogateescape")
    except UnicodeEncodeError as e:
        logger.debug(f"Replacing characters not representable in {charset}: {e}")
        return text.encode(charset, errors="replace")


class HTTPBody(BodyUnit):
    """
    Body of an HTTP request or response.

    Args:
        content: Initial raw bytes.
        charset: Declared charset. Defaults to ISO-8859-1, which maps
                 every byte to a character and therefore never loses data.
    """

    def __init__(self, content: bytes = b"", charset: Optional[str] = None):
        self._content = bytes(content)
        self._charset = DEFAULT_CHARSET
        if charset:
            self.charset = charset

    @property
    def charset(self) -> str:
        return self._charset

    @charset.setter
    def charset(self, value: str) -> None:
        # Unknown charsets keep the previous one, bodies stay decodable
        try:
            codecs.lookup(value)
        except LookupError:
            logger.debug(f"Ignoring unsupported charset: {value}")
            return
        self._charset = value

    def get_bytes(self) -> bytes:
        return self._content

    def set_bytes(self, data: bytes) -> None:
        self._content = bytes(data) if data is not None else b""

    def get_text(self) -> str:
        return decode_text(self._content, self._charset)

    def set_text(self, text: str) -> None:
        if text is None:
            self._content = b""
            return
        self._content = encode_text(text, self._charset)

    def __len__(self) -> int:
        return len(self._content)

    def __str__(self) -> str:
        return self.get_text()

    def __repr__(self) -> str:
        return f"HTTPBody(length={len(self)}, charset={self._charset!r})"
