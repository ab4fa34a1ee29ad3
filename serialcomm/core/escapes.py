"""Escape sequence expansion for outbound commands."""

from __future__ import annotations

from typing import Union

# (literal token as typed, character it stands for)
ESCAPE_SEQUENCES = (
    ('\\r', '\r'),
    ('\\n', '\n'),
    ('\\x02', '\x02'),
    ('\\x03', '\x03'),
    ('\\x1B', '\x1b'),
)

COMMAND_ENCODING = 'utf-8'


def expand_escapes(text: str) -> str:
    """Replace literal escape tokens with the control characters they name.

    Plain substring substitution: ``\\r``, ``\\n``, ``\\x02``, ``\\x03`` and
    ``\\x1B`` are always expanded and any other backslash sequence is left
    untouched.

    Args:
        text: Command text as typed or read from a command file.

    Returns:
        Text with control characters in place of the tokens.
    """
    for token, char in ESCAPE_SEQUENCES:
        text = text.replace(token, char)
    return text


def encode_command(text: str) -> bytes:
    """Expand escapes and encode the result for transmission."""
    return expand_escapes(text).encode(COMMAND_ENCODING)


def escape_controls(data: Union[bytes, str]) -> str:
    """Inverse of :func:`expand_escapes` for the five known characters."""
    if isinstance(data, bytes):
        data = data.decode(COMMAND_ENCODING, errors='replace')
    for token, char in ESCAPE_SEQUENCES:
        data = data.replace(char, token)
    return data
