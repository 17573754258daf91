from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Final, assert_never

from .editors import LineEditor, visible_tail
from .model import (
    BooleanValue,
    CategoryValue,
    ChoiceValue,
    ColorValue,
    Entry,
    IntegerValue,
    TextValue,
    selected_option,
)
from .status import StatusLine

HEADER_ROWS: Final[int] = 3
FOOTER_ROWS: Final[int] = 3
KEY_WIDTH: Final[int] = 20

CATEGORY_STYLE: Final[str] = "green reverse"
SELECTED_STYLE: Final[str] = "reverse"
CURSOR_STYLE: Final[str] = "reverse"

_COLOR_STYLES: Final[dict[str, str]] = {
    "BLACK": "black on white",
    "RED": "red",
    "GREEN": "green",
    "YELLOW": "yellow",
    "BLUE": "blue",
    "MAGENTA": "magenta",
    "CYAN": "cyan",
    "WHITE": "white",
}


def color_style(name: str) -> str | None:
    return _COLOR_STYLES.get(name.upper())


@dataclass(frozen=True, slots=True)
class Span:
    text: str
    style: str = ""


@dataclass(frozen=True, slots=True)
class FrameLine:
    row: int
    col: int
    spans: tuple[Span, ...]

    @property
    def plain(self) -> str:
        return "".join(span.text for span in self.spans)


@dataclass(slots=True)
class Frame:
    """A full screen: at most one positioned line per row."""

    width: int
    height: int
    lines: list[FrameLine] = field(default_factory=list)

    def put(self, row: int, col: int, *spans: Span) -> None:
        if not (0 <= row < self.height):
            return
        self.lines = [line for line in self.lines if line.row != row]
        self.lines.append(FrameLine(row=row, col=col, spans=tuple(spans)))

    def line_at(self, row: int) -> FrameLine | None:
        for line in self.lines:
            if line.row == row:
                return line
        return None

    def rows(self) -> list[str]:
        """Plain-text rendition, one string per screen row (clipped to width)."""

        out: list[str] = []
        for row in range(self.height):
            line = self.line_at(row)
            text = "" if line is None else " " * line.col + line.plain
            out.append(text[: self.width])
        return out


def _value_repr(value: ChoiceValue | ColorValue) -> str:
    current = selected_option(value)
    return "<?>" if current is None else current


def format_entry(entry: Entry) -> str:
    value = entry.value
    match value:
        case TextValue():
            return f'{entry.key:<{KEY_WIDTH}} = "{value.value}"'
        case ChoiceValue() | ColorValue():
            return f"{entry.key:<{KEY_WIDTH}} = [{_value_repr(value)}]"
        case CategoryValue():
            return entry.key
        case IntegerValue():
            return f"{entry.key:<{KEY_WIDTH}} = {value.value}"
        case BooleanValue():
            return f"{entry.key:<{KEY_WIDTH}} = [{'true' if value.value else 'false'}]"
        case _:
            assert_never(value)


def category_bar(key: str, width: int) -> str:
    bar_width = max(width, len(key))
    left = (bar_width - len(key)) // 2
    return (" " * left + key).ljust(bar_width)


def instructions(*, autosave: bool) -> str:
    base = "↑/↓: move   Enter/e: edit text/int / next choice   ←/→: change choice/color/bool"
    if autosave:
        return f"{base}   Esc: quit"
    return f"{base}   s: save   Esc: quit"


def help_line(*, autosave: bool) -> str:
    if autosave:
        return "Press escape to quit"
    return "Press escape to quit, s to save…"


@dataclass(frozen=True, slots=True)
class ListLayout:
    top: int
    bottom: int
    center: int
    left: int
    max_width: int


class ViewRenderer:
    """Lays out the entry list around the selection and composes full frames."""

    def __init__(self, *, path: str, autosave: bool) -> None:
        self.path = path
        self.autosave = autosave

    @staticmethod
    def list_layout(lines: Sequence[str], *, width: int, height: int) -> ListLayout:
        max_width = max((len(line) for line in lines), default=0)
        left = (width - max_width) // 2 if width > max_width else 0
        top = HEADER_ROWS
        bottom = height - FOOTER_ROWS
        center = height // 2
        # The lower clamp wins on tiny screens.
        center = max(top, min(center, bottom))
        return ListLayout(top=top, bottom=bottom, center=center, left=left, max_width=max_width)

    def draw_entries(
        self,
        frame: Frame,
        entries: Sequence[Entry],
        selected: int,
    ) -> None:
        rendered = [format_entry(entry) for entry in entries]
        layout = self.list_layout(rendered, width=frame.width, height=frame.height)
        for idx, (entry, line) in enumerate(zip(entries, rendered, strict=True)):
            row = layout.center + (idx - selected)
            if row < layout.top or row > layout.bottom:
                continue
            frame.put(row, layout.left, *self._entry_spans(entry, line, idx == selected, layout))

    def _entry_spans(
        self,
        entry: Entry,
        line: str,
        is_selected: bool,
        layout: ListLayout,
    ) -> Iterable[Span]:
        value = entry.value
        frame_style = SELECTED_STYLE if is_selected else ""
        match value:
            case CategoryValue():
                return (Span(category_bar(entry.key, layout.max_width), CATEGORY_STYLE),)
            case ColorValue():
                name = _value_repr(value)
                return (
                    Span(f"{entry.key:<{KEY_WIDTH}} = [", frame_style),
                    Span(name, color_style(name) or ""),
                    Span("]", frame_style),
                )
            case TextValue() | ChoiceValue() | IntegerValue() | BooleanValue():
                return (Span(line, frame_style),)
            case _:
                assert_never(value)

    def compose(
        self,
        entries: Sequence[Entry],
        selected: int,
        *,
        width: int,
        height: int,
        status: str = "",
    ) -> Frame:
        frame = Frame(width=width, height=height)
        frame.put(0, 0, Span(f"Key/Value editor  |  file: {self.path}"))
        frame.put(1, 0, Span(instructions(autosave=self.autosave)))
        self.draw_entries(frame, entries, selected)
        if status:
            frame.put(height - 2, 0, Span(StatusLine.fit(status, width)))
        frame.put(height - 1, 0, Span(help_line(autosave=self.autosave)))
        return frame

    def overlay_editor(self, frame: Frame, editor: LineEditor) -> Frame:
        h = frame.height
        frame.put(h - 3, 0, Span(editor.prompt))
        frame.put(h - 2, 0, Span(editor.label))
        frame.put(
            h - 1,
            0,
            Span(visible_tail(editor.buffer, frame.width)),
            Span(" ", CURSOR_STYLE),
        )
        return frame
