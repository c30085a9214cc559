"""
=============================================================================
MESSAGE UNIT INTERFACES
=============================================================================

Abstract capabilities the text codec needs from an HTTP message.

=============================================================================
WHY INTERFACES?
=============================================================================

The codec never cares HOW a header is parsed or HOW a body stores bytes.
It only needs a small set of operations on each half of a message:

    ┌──────────────────────────────────────────────────────────────────┐
    │                       CAPABILITY SET                             │
    ├──────────────────────────────────────────────────────────────────┤
    │                                                                   │
    │   HeaderUnit                      BodyUnit                       │
    │   ──────────                      ────────                       │
    │   raw_text()       → str          get_bytes()     → bytes       │
    │   set_raw_text(s)  (may raise)    set_bytes(b)                   │
    │   get_header(name) → str | None   get_text()      → str         │
    │                                   set_text(s)                    │
    │                                   charset         → str         │
    │                                   len(body)       → int         │
    │                                                                   │
    └──────────────────────────────────────────────────────────────────┘

Requests and responses both implement the same pair, so the codec is
written once. Tests substitute doubles for these interfaces.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Optional


# =============================================================================
# WIRE CONSTANTS
# =============================================================================

CRLF = "\r\n"   # Network line ending
LF = "\n"       # Display line ending

CONTENT_ENCODING = "Content-Encoding"
CONTENT_LENGTH = "Content-Length"
CONTENT_TYPE = "Content-Type"

GZIP = "gzip"

DEFAULT_CHARSET = "ISO-8859-1"


class HTTPMalformedHeaderError(Exception):
    """
    Raised when raw header text cannot be parsed as a valid header.

    The header unit that raises it keeps its previous state, so callers
    can report the problem and let the user fix the text.
    """


class HeaderUnit(ABC):
    """Raw-text view of an HTTP header (start line plus fields)."""

    @abstractmethod
    def raw_text(self) -> str:
        """Header as sent on the wire, CRLF line endings, blank line included."""

    @abstractmethod
    def set_raw_text(self, text: str) -> None:
        """
        Replace the header with the given raw text.

        Raises:
            HTTPMalformedHeaderError: If the text is not a valid header.
        """

    @abstractmethod
    def get_header(self, name: str) -> Optional[str]:
        """Value of the named field (case-insensitive) or None."""


class BodyUnit(ABC):
    """Byte container with a declared charset."""

    @property
    @abstractmethod
    def charset(self) -> str:
        ...

    @abstractmethod
    def get_bytes(self) -> bytes:
        ...

    @abstractmethod
    def set_bytes(self, data: bytes) -> None:
        ...

    @abstractmethod
    def get_text(self) -> str:
        """Content decoded with the declared charset."""

    @abstractmethod
    def set_text(self, text: str) -> None:
        """Replace the content with text encoded in the declared charset."""

    @abstractmethod
    def __len__(self) -> int:
        ...
