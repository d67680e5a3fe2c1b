"""Scan code set 1 translation with shift, caps lock and extended-key handling."""

from __future__ import annotations

import enum
from typing import Dict, Iterable, Optional

LSHIFT = 0x2A
RSHIFT = 0x36
CAPSLOCK = 0x3A
BACKSPACE = 0x0E
UN_LSHIFT = 0xAA
UN_RSHIFT = 0xB6
UN_CAPSLOCK = 0xBA
UN_BACKSPACE = 0x8E
EXTEND = 0xE0

BACKSPACE_CHAR = "\b"


def _layout(*rows: tuple) -> Dict[int, str]:
    table: Dict[int, str] = {}
    for start, chars in rows:
        for offset, char in enumerate(chars):
            if char != "\0":
                table[start + offset] = char
    return table


_BASIC = _layout(
    (0x02, "1234567890-="),
    (0x0F, "\t"),
    (0x10, "qwertyuiop[]\n"),
    (0x1E, "asdfghjkl;'`"),
    (0x2B, "\\zxcvbnm,./"),
    (0x37, "*\0 "),
    (0x47, "789-456+1230."),
)

_SHIFTED = _layout(
    (0x02, "!@#$%^&*()_+"),
    (0x0F, "\t"),
    (0x10, "QWERTYUIOP{}\n"),
    (0x1E, 'ASDFGHJKL:"~'),
    (0x2B, "|ZXCVBNM<>?"),
    (0x37, "*\0 "),
    (0x47, "789-456+1230."),
)


class ReprState(enum.Enum):
    """Which character table the next key press is looked up in."""

    BASIC = 0
    SHIFTED = 1


def _swap_case(char: str) -> str:
    if char.isascii() and char.isalpha():
        return char.lower() if char.isupper() else char.upper()
    return char


class KeyboardState:
    """Turns a stream of scan codes into characters.

    Backspace is reported as ``"\\b"``. The byte after an extended-key prefix is
    consumed: only its action (backspace) takes effect, it yields no character.
    """

    def __init__(self) -> None:
        self.state = ReprState.BASIC
        self.capslock = False
        self._extended = False

    def feed(self, scancode: int) -> Optional[str]:
        """Process one scan code; return the character it produces, if any."""
        if not 0 <= scancode <= 0xFF:
            raise ValueError(f"scan code {scancode} is not a byte")

        if self._extended:
            self._extended = False
            return BACKSPACE_CHAR if scancode == BACKSPACE else None

        if scancode in (LSHIFT, RSHIFT):
            self.state = ReprState.SHIFTED
        elif scancode in (UN_LSHIFT, UN_RSHIFT):
            self.state = ReprState.BASIC

        if scancode == UN_CAPSLOCK:
            self.capslock = not self.capslock

        if scancode == EXTEND:
            self._extended = True
            return None
        if scancode == BACKSPACE:
            return BACKSPACE_CHAR

        table = _SHIFTED if self.state is ReprState.SHIFTED else _BASIC
        char = table.get(scancode)
        if char is None:
            return None
        return _swap_case(char) if self.capslock else char


def translate(scancodes: Iterable[int]) -> str:
    """Translate a whole scan code sequence from a fresh keyboard state."""
    kbd = KeyboardState()
    return "".join(c for c in map(kbd.feed, scancodes) if c is not None)