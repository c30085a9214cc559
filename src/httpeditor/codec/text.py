"""
=============================================================================
MESSAGE TEXT CODEC
=============================================================================

Turns one half of an HTTP message (request or response) into a single
editable text, and applies an edited text back onto the message.

=============================================================================
THE TEXT FORM
=============================================================================

    Message (wire form)                       Text (display form)
    ┌──────────────────────────────┐          ┌──────────────────────────┐
    │ POST /login HTTP/1.1\\r\\n      │          │ POST /login HTTP/1.1\\n   │
    │ Host: example.com\\r\\n         │ render() │ Host: example.com\\n      │
    │ Content-Encoding: gzip\\r\\n    │ ───────► │ Content-Encoding: gzip\\n │
    │ \\r\\n                          │          │ \\n                       │
    │ [gzip bytes]                 │ ◄─────── │ user=alice&pass=secret   │
    └──────────────────────────────┘  apply() └──────────────────────────┘

Three independent transforms sit between the two forms:

    1. LINE ENDINGS (header only)
       render: every \\r\\n becomes \\n
       apply:  every bare \\n becomes \\r\\n
       The body keeps whatever line endings it has, byte for byte.

    2. CONTENT-ENCODING (body only)
       Content-Encoding: gzip → decompress on render, compress on apply.
       Anything else passes through.

    3. CHARSET (body only)
       Bytes ⇄ text with the body's declared charset.

=============================================================================
APPLYING AN EDIT
=============================================================================

    text ──split at first "\\n\\n"──► header part, body part
                                          │
              header.set_raw_text() ◄─────┘
                     │
          malformed? ├──► InvalidMessageDataError, body untouched
                     │
                     ▼
          Content-Encoding (as just edited)
                     │
          gzip?  ────┼──► unchanged? keep the stored bytes
                     │    else body.set_bytes(compress(encode(body part)))
                     │
          other  ────┴──► body.set_text(body part)

The header is the gate: the body is only written after the header
accepted the edit, so a rejected edit changes nothing at all.

Content-Length is never touched. If the user changes the body length,
keeping Content-Length consistent is up to them (or to whatever sends
the message).

=============================================================================
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..http.base import (
    CONTENT_ENCODING,
    CRLF,
    LF,
    BodyUnit,
    HeaderUnit,
    HTTPMalformedHeaderError,
)
from ..http.body import decode_text, encode_text
from ..messages import get_message
from .compression import CompressionCodec, CompressionError, GzipCodec, is_gzip_encoded

logger = logging.getLogger(__name__)

SEPARATOR = LF + LF

# A \n not already preceded by \r
BARE_LF_PATTERN = re.compile(r"(?<!\r)\n")


class MessageDataError(Exception):
    """
    Base class for errors reported to the user editing a message.

    Attributes:
        key: Message catalog key describing the problem.
    """

    def __init__(self, message: str, key: str = ""):
        super().__init__(message)
        self.key = key


class InvalidMessageDataError(MessageDataError):
    """The edited text was rejected. The message is unchanged."""


class UnreadableContentError(MessageDataError):
    """The body could not be decoded for display."""


# =============================================================================
# MESSAGE PARTS
# =============================================================================
#
# The codec is written once and pointed at either half of a message by a
# part object. Anything with request_header/request_body (or the response
# equivalents) works as a message.
#

class MessagePart(ABC):
    """Selects the header and body a codec works on."""

    name: str = ""

    @abstractmethod
    def header(self, message: Any) -> HeaderUnit:
        ...

    @abstractmethod
    def body(self, message: Any) -> BodyUnit:
        ...


class RequestPart(MessagePart):
    name = "request"

    def header(self, message: Any) -> HeaderUnit:
        return message.request_header

    def body(self, message: Any) -> BodyUnit:
        return message.request_body


class ResponsePart(MessagePart):
    name = "response"

    def header(self, message: Any) -> HeaderUnit:
        return message.response_header

    def body(self, message: Any) -> BodyUnit:
        return message.response_body


REQUEST = RequestPart()
RESPONSE = ResponsePart()


# =============================================================================
# CODEC
# =============================================================================

class MessageTextCodec:
    """
    Render and apply the editable text of one message part.

    The codec keeps no state besides the bound message, which callers
    set and clear freely:

        codec = RequestTextCodec()
        codec.message = message
        text = codec.render()
        ...
        codec.apply(edited_text)
        codec.message = None

    Args:
        part: REQUEST or RESPONSE.
        compression: Codec for gzip bodies. Defaults to GzipCodec().
        message: Initially bound message, or None.
    """

    def __init__(
        self,
        part: MessagePart,
        compression: Optional[CompressionCodec] = None,
        message: Any = None,
    ):
        self.part = part
        self.compression = compression if compression is not None else GzipCodec()
        self.message = message

    # =========================================================================
    # RENDER (message → text)
    # =========================================================================

    def render(self) -> str:
        """
        Build the editable text of the bound message.

        Returns:
            Display header, blank line and body text; "" if no message
            is bound.

        Raises:
            UnreadableContentError: If a gzip body cannot be decompressed.
        """
        if self.message is None:
            return ""

        header = self.part.header(self.message)
        body = self.part.body(self.message)

        display_header = header.raw_text().replace(CRLF, LF)
        return _terminate_header(display_header) + self._body_text(header, body)

    def _body_text(self, header: HeaderUnit, body: BodyUnit) -> str:
        if not is_gzip_encoded(header.get_header(CONTENT_ENCODING)):
            return body.get_text()

        try:
            content = self.compression.decompress(body.get_bytes())
        except CompressionError as e:
            logger.warning(f"Cannot decode {self.part.name} body: {e}")
            key = "http.panel.model.body.warn.unreadable"
            raise UnreadableContentError(
                get_message(key, encoding=e.encoding, error=e), key=key
            ) from e

        return decode_text(content, body.charset)

    # =========================================================================
    # APPLY (text → message)
    # =========================================================================

    def apply(self, text: str) -> None:
        """
        Write edited text back into the bound message.

        Does nothing if no message is bound.

        Raises:
            InvalidMessageDataError: If the header part is malformed.
                                     Neither header nor body is changed.
        """
        if self.message is None:
            return

        header_part, _, body_part = text.partition(SEPARATOR)

        header = self.part.header(self.message)
        body = self.part.body(self.message)

        try:
            header.set_raw_text(BARE_LF_PATTERN.sub(CRLF, header_part))
        except HTTPMalformedHeaderError as e:
            logger.debug(f"Rejected {self.part.name} header edit: {e}")
            key = "http.panel.model.header.warn.malformed"
            raise InvalidMessageDataError(get_message(key, error=e), key=key) from e

        previous_length = len(body)

        if is_gzip_encoded(header.get_header(CONTENT_ENCODING)):
            content = encode_text(body_part, body.charset)
            if self._stored_content(body) == content:
                logger.debug(f"{self.part.name} body unchanged, keeping stored bytes")
            else:
                body.set_bytes(self.compression.compress(content))
        else:
            body.set_text(body_part)

        logger.debug(
            f"Applied {self.part.name} edit: body {previous_length} -> {len(body)} bytes"
        )

    def _stored_content(self, body: BodyUnit) -> Optional[bytes]:
        # Compressed output differs between encoders and levels, so an
        # unedited body is recognized by its decompressed content
        try:
            return self.compression.decompress(body.get_bytes())
        except CompressionError:
            return None


class RequestTextCodec(MessageTextCodec):
    """Text codec for the request half of a message."""

    def __init__(self, compression: Optional[CompressionCodec] = None, message: Any = None):
        super().__init__(REQUEST, compression, message)


class ResponseTextCodec(MessageTextCodec):
    """Text codec for the response half of a message."""

    def __init__(self, compression: Optional[CompressionCodec] = None, message: Any = None):
        super().__init__(RESPONSE, compression, message)


def _terminate_header(display_header: str) -> str:
    # Raw headers already end with their blank line; only complete it
    if display_header.endswith(SEPARATOR):
        return display_header
    if display_header.endswith(LF):
        return display_header + LF
    return display_header + SEPARATOR
