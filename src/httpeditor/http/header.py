"""
=============================================================================
HTTP HEADER UNITS
=============================================================================

Parses and serializes the header section of HTTP requests and responses.
Implements the message-header grammar of RFC 7230, section 3.

=============================================================================
HEADER ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        HEADER SECTION                               │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  START LINE                                                         │
    │     request:   GET /api/users HTTP/1.1\r\n                          │
    │     response:  HTTP/1.1 200 OK\r\n                                  │
    │                                                                      │
    │  FIELDS                                                             │
    │     Host: example.com\r\n                                           │
    │     Content-Type: text/html; charset=UTF-8\r\n                      │
    │     Content-Encoding: gzip\r\n                                      │
    │                                                                      │
    │  TERMINATOR                                                         │
    │     \r\n                                                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Unlike a server-side parser, an editor must give back what it was given:
field order and field-name case are preserved, and duplicate fields are
kept as separate lines instead of being merged.

=============================================================================
ATOMIC UPDATES
=============================================================================

set_raw_text() parses into local variables first and only then replaces
the header state. A malformed edit raises HTTPMalformedHeaderError and
leaves the previous header fully intact.

=============================================================================
"""

import re
from abc import abstractmethod
from typing import List, Optional, Tuple

from .base import CONTENT_TYPE, CRLF, HeaderUnit, HTTPMalformedHeaderError


class HTTPHeader(HeaderUnit):
    """
    Common field handling for request and response headers.

    Subclasses only know how to parse and build their start line.
    """

    # =========================================================================
    # COMPILED REGEX PATTERNS
    # =========================================================================
    #
    # field-name = token (RFC 7230, section 3.2.6)
    # field-value may not contain bare CR
    #
    HEADER_PATTERN = re.compile(
        r"^([!#$%&'*+\-.^_`|~0-9A-Za-z]+):[ \t]*([^\r]*?)[ \t]*$"
    )
    LINE_SPLIT_PATTERN = re.compile(r"\r?\n")
    CHARSET_PATTERN = re.compile(r"charset\s*=\s*\"?([^\";\s]+)\"?", re.IGNORECASE)

    def __init__(self, raw: Optional[str] = None):
        self._fields: List[Tuple[str, str]] = []
        if raw is None:
            self._set_default_start_line()
        else:
            self.set_raw_text(raw)

    # =========================================================================
    # START LINE - implemented per message direction
    # =========================================================================

    @property
    @abstractmethod
    def start_line(self) -> str:
        ...

    @abstractmethod
    def _set_default_start_line(self) -> None:
        ...

    @abstractmethod
    def _parse_start_line(self, line: str) -> tuple:
        """Validate the start line and return its components."""

    @abstractmethod
    def _commit_start_line(self, parts: tuple) -> None:
        ...

    # =========================================================================
    # RAW TEXT
    # =========================================================================

    def raw_text(self) -> str:
        lines = [self.start_line]
        lines.extend(f"{name}: {value}" for name, value in self._fields)
        return CRLF.join(lines) + CRLF + CRLF

    def set_raw_text(self, text: str) -> None:
        """
        Replace the whole header with the given raw text.

        =====================================================================
        ACCEPTED INPUT
        =====================================================================

            "GET / HTTP/1.1\\r\\nHost: a\\r\\n\\r\\n"   terminator included
            "GET / HTTP/1.1\\r\\nHost: a"           terminator omitted
            "GET / HTTP/1.1\\nHost: a"             bare LF tolerated

        A blank line anywhere before the end is rejected: it would end
        the header early on the wire.

        =====================================================================

        Raises:
            HTTPMalformedHeaderError: If the text is not a valid header.
        """
        if text is None:
            raise HTTPMalformedHeaderError("Header text is missing")

        lines = self.LINE_SPLIT_PATTERN.split(text)
        while lines and lines[-1] == "":
            lines.pop()

        if not lines:
            raise HTTPMalformedHeaderError("Empty header")

        parts = self._parse_start_line(lines[0])
        fields = self._parse_fields(lines[1:])

        # Everything parsed, safe to replace state now
        self._commit_start_line(parts)
        self._fields = fields

    def _parse_fields(self, lines: List[str]) -> List[Tuple[str, str]]:
        fields: List[Tuple[str, str]] = []

        for line in lines:
            if not line:
                raise HTTPMalformedHeaderError("Blank line inside header")

            # -----------------------------------------------------------------
            # Obsolete line folding (RFC 7230 obs-fold)
            # -----------------------------------------------------------------
            # "X-Long: first part\r\n"
            # "        second part"
            #
            if line[0] in (" ", "\t"):
                if not fields:
                    raise HTTPMalformedHeaderError(
                        f"Continuation line without a field: {line!r}"
                    )
                name, value = fields[-1]
                fields[-1] = (name, f"{value} {line.strip()}".strip())
                continue

            match = self.HEADER_PATTERN.match(line)
            if not match:
                raise HTTPMalformedHeaderError(f"Invalid header field: {line!r}")

            fields.append(match.groups())

        return fields

    # =========================================================================
    # FIELD ACCESS
    # =========================================================================

    def get_header(self, name: str) -> Optional[str]:
        name = name.lower()
        for field_name, value in self._fields:
            if field_name.lower() == name:
                return value
        return None

    def get_headers(self, name: str) -> List[str]:
        name = name.lower()
        return [value for field_name, value in self._fields if field_name.lower() == name]

    def set_header(self, name: str, value: Optional[str]) -> None:
        """
        Set a field, replacing existing ones in place.

        The first occurrence keeps its position, further duplicates are
        removed. None removes the field entirely; a missing field is
        appended at the end.
        """
        lowered = name.lower()
        updated: List[Tuple[str, str]] = []
        replaced = False

        for field_name, field_value in self._fields:
            if field_name.lower() != lowered:
                updated.append((field_name, field_value))
            elif value is not None and not replaced:
                updated.append((field_name, value))
                replaced = True

        if value is not None and not replaced:
            updated.append((name, value))

        self._fields = updated

    @property
    def fields(self) -> List[Tuple[str, str]]:
        return list(self._fields)

    @property
    def charset(self) -> Optional[str]:
        """
        Charset parameter of the Content-Type field.

        "text/html; charset=UTF-8" → "UTF-8"
        """
        content_type = self.get_header(CONTENT_TYPE)
        if not content_type:
            return None
        match = self.CHARSET_PATTERN.search(content_type)
        return match.group(1) if match else None

    def __str__(self) -> str:
        return self.raw_text()


class HTTPRequestHeader(HTTPHeader):
    """Header of an HTTP request: METHOD SP URI SP VERSION."""

    # =========================================================================
    # VALID HTTP METHODS
    # =========================================================================
    #
    # Standard methods from RFC 7231 plus PATCH (RFC 5789).
    #
    VALID_METHODS = {
        "GET",
        "POST",
        "PUT",
        "DELETE",
        "PATCH",
        "HEAD",
        "OPTIONS",
        "TRACE",
        "CONNECT",
    }

    REQUEST_LINE_PATTERN = re.compile(r"^([A-Z]+) ([^ ]+) (HTTP/\d\.\d)$")

    def _set_default_start_line(self) -> None:
        self.method = "GET"
        self.uri = "/"
        self.version = "HTTP/1.1"

    @property
    def start_line(self) -> str:
        return f"{self.method} {self.uri} {self.version}"

    def _parse_start_line(self, line: str) -> tuple:
        match = self.REQUEST_LINE_PATTERN.match(line)
        if not match:
            raise HTTPMalformedHeaderError(f"Invalid request line: {line!r}")

        method, uri, version = match.groups()
        if method not in self.VALID_METHODS:
            raise HTTPMalformedHeaderError(f"Invalid method: {method}")

        return method, uri, version

    def _commit_start_line(self, parts: tuple) -> None:
        self.method, self.uri, self.version = parts


class HTTPResponseHeader(HTTPHeader):
    """Header of an HTTP response: VERSION SP STATUS [SP REASON]."""

    STATUS_LINE_PATTERN = re.compile(r"^(HTTP/\d\.\d) (\d{3})(?: ([^\r\n]*))?$")

    def _set_default_start_line(self) -> None:
        self.version = "HTTP/1.1"
        self.status_code = 200
        self.reason = "OK"

    @property
    def start_line(self) -> str:
        if self.reason is None:
            return f"{self.version} {self.status_code}"
        return f"{self.version} {self.status_code} {self.reason}"

    def _parse_start_line(self, line: str) -> tuple:
        match = self.STATUS_LINE_PATTERN.match(line)
        if not match:
            raise HTTPMalformedHeaderError(f"Invalid status line: {line!r}")

        version, status, reason = match.groups()
        return version, int(status), reason

    def _commit_start_line(self, parts: tuple) -> None:
        self.version, self.status_code, self.reason = parts
