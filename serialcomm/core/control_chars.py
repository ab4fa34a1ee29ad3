"""Control character table and plain-text formatting.

Every byte outside the printable ASCII range 32-126 that has a name in the
table (0-31 and DEL) is shown as a bracketed mnemonic such as ``[STX]``.
Everything else, including bytes 128-255, is shown as its own character.
"""

from __future__ import annotations

from typing import Dict, Iterator, Tuple, Union

_MNEMONICS = (
    'NUL', 'SOH', 'STX', 'ETX', 'EOT', 'ENQ', 'ACK', 'BEL',
    'BS', 'HT', 'LF', 'VT', 'FF', 'CR', 'SO', 'SI',
    'DLE', 'DC1', 'DC2', 'DC3', 'DC4', 'NAK', 'SYN', 'ETB',
    'CAN', 'EM', 'SUB', 'ESC', 'FS', 'GS', 'RS', 'US',
)

CONTROL_TABLE: Dict[int, str] = {code: f"[{name}]" for code, name in enumerate(_MNEMONICS)}
CONTROL_TABLE[127] = '[DEL]'

LINE_FEED_TOKEN = CONTROL_TABLE[10]


def is_control(code: int) -> bool:
    """Check if a character code has a mnemonic."""
    return code in CONTROL_TABLE


def token_for(code: int) -> str:
    """Return the display token for one character code."""
    return CONTROL_TABLE.get(code, chr(code))


def tokenize(data: Union[bytes, bytearray, str]) -> Iterator[Tuple[str, bool]]:
    """Split data into display runs.

    Consecutive printable characters are grouped into one run; each control
    character is its own run.

    Args:
        data: Raw bytes from the channel or a text string.

    Yields:
        Tuples ``(text, is_control)``.
    """
    codes = data if isinstance(data, (bytes, bytearray)) else (ord(c) for c in data)
    run = []
    for code in codes:
        if code in CONTROL_TABLE:
            if run:
                yield ''.join(run), False
                run = []
            yield CONTROL_TABLE[code], True
        else:
            run.append(chr(code))
    if run:
        yield ''.join(run), False


def format_plain(data: Union[bytes, bytearray, str]) -> str:
    """Render data as plain text for the transcript file."""
    return ''.join(text for text, _ in tokenize(data))
