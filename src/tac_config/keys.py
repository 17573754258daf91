from __future__ import annotations

import os
import select
from typing import Final

UP: Final = "UP"
DOWN: Final = "DOWN"
LEFT: Final = "LEFT"
RIGHT: Final = "RIGHT"
ENTER: Final = "ENTER"
SPACE: Final = "SPACE"
ESC: Final = "ESC"
BACKSPACE: Final = "BACKSPACE"
TAB: Final = "TAB"

# How long to wait for the rest of an escape sequence before treating ESC as a key.
ESCAPE_TIMEOUT_S: Final[float] = 0.05

_CSI_KEYS: Final[dict[bytes, str]] = {
    b"A": UP,
    b"B": DOWN,
    b"C": RIGHT,
    b"D": LEFT,
}


def _ready(fd: int, timeout: float | None) -> bool:
    ready, _w, _x = select.select([fd], [], [], timeout)
    return bool(ready)


def _read_final_byte(fd: int, *, single: bool) -> bytes:
    """Consume the rest of a CSI/SS3 sequence and return its final byte.

    Parameter bytes (`ESC[3~`, `ESC[1;5A`) are swallowed. Returns b"" if the
    sequence is cut off before a final byte arrives.
    """

    while _ready(fd, ESCAPE_TIMEOUT_S):
        byte = os.read(fd, 1)
        if not byte:
            break
        if single or 0x40 <= byte[0] <= 0x7E:
            return byte
    return b""


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def read_key(fd: int, *, blocking: bool = True) -> str | None:
    """Read and decode one key press from a raw (cbreak) file descriptor.

    Returns a symbolic name (`UP`, `ENTER`, `ESC`, ...) or the typed character.
    Returns None when `blocking` is False and no input is pending, and "" for
    bytes that do not decode to a key.
    """

    if not blocking and not _ready(fd, 0.0):
        return None
    ch = os.read(fd, 1)
    if not ch:
        return ""
    if ch == b"\x03":  # Ctrl+C
        raise KeyboardInterrupt
    if ch == b"\x1b":
        if not _ready(fd, ESCAPE_TIMEOUT_S):
            return ESC
        intro = os.read(fd, 1)
        if intro not in {b"[", b"O"}:
            return ESC
        return _CSI_KEYS.get(_read_final_byte(fd, single=intro == b"O"), "")
    if ch in {b"\r", b"\n"}:
        return ENTER
    if ch in {b"\x7f", b"\x08"}:
        return BACKSPACE
    if ch == b"\t":
        return TAB
    if ch == b" ":
        return SPACE
    raw = ch
    for _ in range(_utf8_length(ch[0]) - 1):
        if not _ready(fd, ESCAPE_TIMEOUT_S):
            break
        raw += os.read(fd, 1)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def as_text(key: str) -> str | None:
    """Map a decoded key to the character it types, if any."""

    if key == SPACE:
        return " "
    if len(key) == 1 and key.isprintable():
        return key
    return None
