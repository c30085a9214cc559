"""
=============================================================================
CODEC CONFIGURATION
=============================================================================

Centralized settings for rendering and applying message text.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m httpeditor render --charset UTF-8 msg.http       │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTPEDITOR_DEFAULT_CHARSET=UTF-8 python -m httpeditor ...  │
    │                                                                      │
    │   3. Default values in code                                         │
    │      └── CodecConfig() dataclass defaults                           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import codecs
import logging
import os
from dataclasses import dataclass

from .http.base import DEFAULT_CHARSET


@dataclass
class CodecConfig:
    """
    Configuration for the message text codec.

    Development:
        CodecConfig(log_level="DEBUG")

    Bodies mostly UTF-8 without a declared charset:
        CodecConfig(default_charset="UTF-8")
    """

    default_charset: str = DEFAULT_CHARSET
    """
    Charset for bodies whose Content-Type declares none.
    ISO-8859-1 maps every byte to a character, so nothing is lost.
    """

    compression_level: int = 6
    """
    gzip level used when re-compressing an edited body (1-9).
    """

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    @classmethod
    def from_env(cls) -> "CodecConfig":
        """
        Create configuration from environment variables.

        HTTPEDITOR_DEFAULT_CHARSET     Body charset (default: ISO-8859-1)
        HTTPEDITOR_COMPRESSION_LEVEL   gzip level (default: 6)
        HTTPEDITOR_LOG_LEVEL           Logging level (default: INFO)
        """
        return cls(
            default_charset=os.getenv("HTTPEDITOR_DEFAULT_CHARSET", DEFAULT_CHARSET),
            compression_level=int(os.getenv("HTTPEDITOR_COMPRESSION_LEVEL", "6")),
            log_level=os.getenv("HTTPEDITOR_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """Validate configuration values, failing fast on bad input."""
        try:
            codecs.lookup(self.default_charset)
        except LookupError:
            raise ValueError(f"Unknown charset: {self.default_charset}")

        if not 1 <= self.compression_level <= 9:
            raise ValueError(
                f"Invalid compression_level: {self.compression_level}. Must be 1-9."
            )

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Invalid log_level: {self.log_level}")
