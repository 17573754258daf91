from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.live import Live
from rich.text import Text

from . import keys
from .render import Frame


class Display(ABC):
    """Screen capability used by the editor session."""

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Return `(width, height)` in character cells."""

    @abstractmethod
    def render(self, frame: Frame) -> None:
        """Replace the whole screen with `frame`."""

    @abstractmethod
    def read_key(self, *, blocking: bool = True) -> str | None:
        """Return the next decoded key, or None if `blocking` is False and none is pending."""


def frame_to_text(frame: Frame) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    for row in range(frame.height):
        line_text = Text(no_wrap=True, overflow="crop")
        line = frame.line_at(row)
        if line is not None:
            line_text.append(" " * line.col)
            for span in line.spans:
                line_text.append(span.text, style=span.style or None)
        line_text.truncate(frame.width)
        text.append_text(line_text)
        if row < frame.height - 1:
            text.append("\n")
    return text


@contextmanager
def raw_terminal(fd: int) -> Iterator[None]:
    if sys.platform == "win32":
        yield None
        return

    import termios  # noqa: PLC0415
    import tty  # noqa: PLC0415

    old = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        yield None
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def can_run_interactive(console: Console) -> bool:
    return (
        console.is_terminal
        and sys.stdin.isatty()
        and sys.stdout.isatty()
        and sys.platform != "win32"
    )


class RichTerminalDisplay(Display):
    """Full-screen rich `Live` output with cbreak keyboard input on stdin."""

    def __init__(self, console: Console | None = None, *, fd: int | None = None) -> None:
        self._console = console or Console()
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._live: Live | None = None

    @contextmanager
    def session(self) -> Iterator[RichTerminalDisplay]:
        with (
            Live(
                Text(""),
                console=self._console,
                transient=True,
                screen=True,
                auto_refresh=False,
            ) as live,
            raw_terminal(self._fd),
        ):
            self._live = live
            try:
                yield self
            finally:
                self._live = None

    def size(self) -> tuple[int, int]:
        size = self._console.size
        return (size.width, size.height)

    def render(self, frame: Frame) -> None:
        if self._live is None:
            raise RuntimeError("render() called outside of RichTerminalDisplay.session()")
        self._live.update(frame_to_text(frame), refresh=True)

    def read_key(self, *, blocking: bool = True) -> str | None:
        return keys.read_key(self._fd, blocking=blocking)
