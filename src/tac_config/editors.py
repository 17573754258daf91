"""Per-kind editing protocols.

Choice, Color and Boolean values are changed inline (cycle/toggle). Text and
Integer values are captured by a modal line editor: a small state machine fed
one decoded key at a time until the user confirms or cancels.
"""

from __future__ import annotations

from collections.abc import Callable
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, assert_never

from . import keys
from .model import (
    I64_MAX,
    I64_MIN,
    INTEGER_INPUT_LIMIT,
    BooleanValue,
    CategoryValue,
    ChoiceValue,
    ColorValue,
    IntegerValue,
    TextValue,
    Value,
)

if TYPE_CHECKING:
    from .display import Display


def cycle_forward(value: ChoiceValue | ColorValue) -> bool:
    if not value.options:
        return False
    value.selected = (value.selected + 1) % len(value.options)
    return True


def cycle_backward(value: ChoiceValue | ColorValue) -> bool:
    if not value.options:
        return False
    if value.selected == 0:
        value.selected = len(value.options) - 1
    else:
        value.selected -= 1
    return True


def toggle(value: BooleanValue) -> bool:
    value.value = not value.value
    return True


def adjust_inline(value: Value, key: str) -> bool:
    """Apply an Enter/Space/Left/Right key to an inline-editable value.

    Returns True if the value changed. Text, Integer and Category values are
    never changed here.
    """

    match value:
        case ChoiceValue() | ColorValue():
            if key == keys.LEFT:
                return cycle_backward(value)
            return cycle_forward(value)
        case BooleanValue():
            return toggle(value)
        case TextValue() | IntegerValue() | CategoryValue():
            return False
        case _:
            assert_never(value)


def edit_hint(value: Value) -> str | None:
    """Status hint for kinds that have no modal editor."""

    match value:
        case ChoiceValue():
            return "Use ←/→ or Enter to change this choice."
        case ColorValue():
            return "Use ←/→ or Enter to change this color."
        case BooleanValue():
            return "Use ←/→ or Enter to toggle this boolean."
        case CategoryValue():
            return "Category header (not editable)."
        case TextValue() | IntegerValue():
            return None
        case _:
            assert_never(value)


def visible_tail(buffer: str, width: int) -> str:
    """Slice of `buffer` that fits an edit line, anchored on the newest characters."""

    max_len = width - 1 if width > 1 else 1
    if len(buffer) > max_len:
        return buffer[len(buffer) - max_len :]
    return buffer


class EditOutcome(Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class LineEditor(ABC):
    key: str
    buffer: str
    limit: int
    outcome: EditOutcome = EditOutcome.PENDING

    @property
    def prompt(self) -> str:
        return f"Editing '{self.key}': Enter=save, Esc=cancel"

    @property
    def label(self) -> str:
        return "Current value (editable):"

    def accepts(self, ch: str) -> bool:
        return len(self.buffer) < self.limit

    @abstractmethod
    def apply(self) -> None:
        """Write the confirmed buffer back into the edited value."""

    def feed(self, key: str) -> EditOutcome:
        if self.outcome is not EditOutcome.PENDING:
            return self.outcome
        if key == keys.ENTER:
            self.apply()
            self.outcome = EditOutcome.COMMITTED
        elif key == keys.ESC:
            self.outcome = EditOutcome.CANCELLED
        elif key == keys.BACKSPACE:
            self.buffer = self.buffer[:-1]
        else:
            ch = keys.as_text(key)
            if ch is not None and self.accepts(ch):
                self.buffer += ch
        return self.outcome


@dataclass(slots=True)
class TextEditor(LineEditor):
    target: TextValue = field(kw_only=True)

    @classmethod
    def for_value(cls, key: str, value: TextValue) -> TextEditor:
        return cls(key=key, buffer=value.value, limit=value.limit, target=value)

    @property
    def prompt(self) -> str:
        base = f"Editing '{self.key}': Enter=save, Esc=cancel"
        if self.target.maximum_size is not None:
            return f"{base} (max {self.target.maximum_size} chars)"
        return base

    def apply(self) -> None:
        self.target.value = self.buffer


@dataclass(slots=True)
class IntegerEditor(LineEditor):
    target: IntegerValue = field(kw_only=True)

    @classmethod
    def for_value(cls, key: str, value: IntegerValue) -> IntegerEditor:
        return cls(key=key, buffer=str(value.value), limit=INTEGER_INPUT_LIMIT, target=value)

    @property
    def prompt(self) -> str:
        return f"Editing '{self.key}': Enter=save, Esc=cancel (integer)"

    @property
    def label(self) -> str:
        return "Current value (editable integer):"

    def accepts(self, ch: str) -> bool:
        if len(self.buffer) >= self.limit:
            return False
        return ch in "0123456789" or (ch == "-" and not self.buffer)

    def apply(self) -> None:
        if self.buffer in {"", "-"}:
            self.target.value = 0
            return
        try:
            parsed = int(self.buffer, 10)
        except ValueError:
            return
        # Overlong input keeps the previous value.
        if I64_MIN <= parsed <= I64_MAX:
            self.target.value = parsed


def modal_editor_for(key: str, value: Value) -> LineEditor | None:
    match value:
        case TextValue():
            return TextEditor.for_value(key, value)
        case IntegerValue():
            return IntegerEditor.for_value(key, value)
        case ChoiceValue() | ColorValue() | BooleanValue() | CategoryValue():
            return None
        case _:
            assert_never(value)


def run_modal(
    editor: LineEditor,
    display: Display,
    redraw: Callable[[LineEditor], None],
) -> EditOutcome:
    """Drive `editor` with blocking key reads until it is confirmed or cancelled."""

    while editor.outcome is EditOutcome.PENDING:
        redraw(editor)
        key = display.read_key(blocking=True)
        if key:
            editor.feed(key)
    return editor.outcome
