from __future__ import annotations

from typing import Final

from .model import (
    BooleanValue,
    CategoryValue,
    ChoiceValue,
    ColorValue,
    Entry,
    IntegerValue,
    TextValue,
)

# Index order matches the terminal's basic color numbers (COLOR_BLACK == 0, ...).
COLOR_NAMES: Final[tuple[str, ...]] = (
    "BLACK",
    "RED",
    "GREEN",
    "YELLOW",
    "BLUE",
    "MAGENTA",
    "CYAN",
    "WHITE",
)

DEFAULT_CONFIG_FILENAME: Final[str] = ".tac.json"


def _color(key: str, name: str) -> Entry:
    return Entry(key, ColorValue(options=list(COLOR_NAMES), selected=COLOR_NAMES.index(name)))


def _label(key: str, text: str, maximum_size: int) -> Entry:
    return Entry(key, TextValue(value=text, maximum_size=maximum_size))


def default_entries() -> list[Entry]:
    """Return a fresh copy of the built-in clock schema."""

    return [
        Entry("Colors", CategoryValue()),
        _color("background color", "BLACK"),
        _color("circle color", "GREEN"),
        _color("seconds color", "CYAN"),
        _color("digits color", "WHITE"),
        _color("minutes color", "YELLOW"),
        _color("hours color", "RED"),
        Entry("Hand labels", CategoryValue()),
        _label("hour hand label", "HOURS", 32),
        _label("minute hand label", "minutes", 32),
        _label("second hand label", ".", 32),
        Entry("Display modes", CategoryValue()),
        Entry(
            "clock border",
            ChoiceValue(
                options=["full", "dot and hours", "hours", "no border"],
                selected=1,
            ),
        ),
        Entry(
            "display seconds",
            ChoiceValue(
                options=[
                    "no display",
                    "full each second",
                    "full continuous",
                    "end of hand each second",
                    "end of hand full continuous",
                ],
                selected=1,
            ),
        ),
        Entry("numbers", ChoiceValue(options=["no numbers", "stars", "numbers"], selected=0)),
        Entry("clock width", IntegerValue(5)),
        Entry("local time offset", IntegerValue(0)),
        Entry("continuous minutes", BooleanValue(True)),
        Entry("Keyboard shortcuts", CategoryValue()),
        _label("change clock border", "c", 1),
        _label("change number display", "n", 1),
        _label("change seconds display", "s", 1),
        _label("quit", "q", 1),
    ]
