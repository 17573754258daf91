from __future__ import annotations

import io
import os

import pytest
from rich.console import Console

from tac_config.display import RichTerminalDisplay, can_run_interactive, frame_to_text
from tac_config.render import Frame, Span


def test_frame_to_text_places_spans_and_styles() -> None:
    frame = Frame(width=8, height=3)
    frame.put(1, 2, Span("ab", "reverse"), Span("cdefgh", "green"))

    text = frame_to_text(frame)

    assert text.plain == "\n  abcdef\n"
    styles = {str(span.style) for span in text.spans}
    assert "reverse" in styles
    assert "green" in styles


def test_can_run_interactive_requires_terminal_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin.isatty", lambda: True)
    monkeypatch.setattr("sys.stdout", io.StringIO())
    assert can_run_interactive(Console(force_terminal=True)) is False


def test_rich_display_reads_keys_from_fd_and_reports_size() -> None:
    read_fd, write_fd = os.pipe()
    try:
        console = Console(file=io.StringIO(), width=33, height=11)
        display = RichTerminalDisplay(console, fd=read_fd)
        os.write(write_fd, b"\x1b[B")
        assert display.read_key() == "DOWN"
        assert display.read_key(blocking=False) is None
        assert display.size() == (33, 11)
        with pytest.raises(RuntimeError):
            display.render(Frame(width=33, height=11))
    finally:
        os.close(read_fd)
        os.close(write_fd)
