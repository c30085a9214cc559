"""
User-facing message catalog.

Messages are looked up by key so an embedding UI can swap in its own
translations with set_messages().
"""

from typing import Dict, Mapping

DEFAULT_MESSAGES: Dict[str, str] = {
    "http.panel.model.header.warn.malformed": "The header is malformed: {error}",
    "http.panel.model.body.warn.unreadable": "The body could not be decoded ({encoding}): {error}",
}

_messages: Dict[str, str] = dict(DEFAULT_MESSAGES)


def get_message(key: str, **kwargs) -> str:
    """
    Get the message for a key, formatted with kwargs.

    Unknown keys return the key itself, so a missing translation never
    hides the error it describes.
    """
    template = _messages.get(key, key)
    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError):
        return template


def set_messages(messages: Mapping[str, str]) -> None:
    """Override catalog entries, e.g. with translated strings."""
    _messages.update(messages)


def reset_messages() -> None:
    _messages.clear()
    _messages.update(DEFAULT_MESSAGES)
