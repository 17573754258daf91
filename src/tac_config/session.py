from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, assert_never

from . import keys
from .display import Display
from .editors import (
    EditOutcome,
    LineEditor,
    adjust_inline,
    edit_hint,
    modal_editor_for,
    run_modal,
)
from .model import (
    BooleanValue,
    CategoryValue,
    ChoiceValue,
    ColorValue,
    IntegerValue,
    TextValue,
)
from .navigation import NavigationController
from .render import ViewRenderer
from .status import StatusLine
from .store import ConfigSaveError, ConfigStore

logger = logging.getLogger(__name__)

# Pause after an unrecognized key so a flood of input cannot spin the loop.
IDLE_DELAY_S: Final[float] = 0.01


class SessionState(Enum):
    BROWSING = "browsing"
    EDITING = "editing"
    CLOSED = "closed"


@dataclass(slots=True)
class EditorSession:
    """Interactive browse/edit loop over a ConfigStore.

    Inline kinds (choice, color, boolean) change in place on Enter/Space/Left/Right;
    text and integer values open a modal line editor. With `autosave` every
    committed change is written immediately, otherwise only on the save key.
    """

    store: ConfigStore
    display: Display
    autosave: bool = True
    state: SessionState = SessionState.BROWSING
    status: StatusLine = field(default_factory=StatusLine)
    navigation: NavigationController = field(init=False)
    renderer: ViewRenderer = field(init=False)

    def __post_init__(self) -> None:
        self.navigation = NavigationController.for_entries(self.store.entries)
        self.renderer = ViewRenderer(path=str(self.store.path), autosave=self.autosave)

    @property
    def selected(self) -> int:
        return self.navigation.selected

    def run(self) -> None:
        self.redraw()
        while self.state is not SessionState.CLOSED:
            key = self.display.read_key(blocking=True)
            if key is None:
                continue
            if self.handle_key(key):
                self.redraw()

    def redraw(self) -> None:
        width, height = self.display.size()
        frame = self.renderer.compose(
            self.store.entries,
            self.navigation.selected,
            width=width,
            height=height,
            status=self.status.consume(),
        )
        self.display.render(frame)

    def _redraw_editor(self, editor: LineEditor) -> None:
        width, height = self.display.size()
        frame = self.renderer.compose(
            self.store.entries, self.navigation.selected, width=width, height=height
        )
        self.display.render(self.renderer.overlay_editor(frame, editor))

    def handle_key(self, key: str) -> bool:
        """Apply one browsing-state key. Returns True if the screen needs a redraw."""

        match key:
            case keys.UP:
                self.navigation.move_up()
            case keys.DOWN:
                self.navigation.move_down()
            case keys.ENTER | keys.SPACE:
                self._activate()
            case keys.LEFT | keys.RIGHT:
                entry = self.navigation.current
                if entry is not None and adjust_inline(entry.value, key):
                    self._committed()
            case "e":
                self._edit()
            case "s":
                self.save()
            case keys.ESC:
                self.state = SessionState.CLOSED
                return False
            case _:
                time.sleep(IDLE_DELAY_S)
                return False
        return True

    def _activate(self) -> None:
        entry = self.navigation.current
        if entry is None:
            return
        match entry.value:
            case ChoiceValue() | ColorValue() | BooleanValue():
                if adjust_inline(entry.value, keys.ENTER):
                    self._committed()
            case TextValue() | IntegerValue() | CategoryValue():
                self._edit()
            case _:
                assert_never(entry.value)

    def _edit(self) -> None:
        entry = self.navigation.current
        if entry is None:
            return
        editor = modal_editor_for(entry.key, entry.value)
        if editor is None:
            hint = edit_hint(entry.value)
            if hint:
                self.status.show(hint)
            return
        self.state = SessionState.EDITING
        try:
            outcome = run_modal(editor, self.display, self._redraw_editor)
        finally:
            self.state = SessionState.BROWSING
        if outcome is EditOutcome.COMMITTED:
            self._committed()

    def _committed(self) -> None:
        if self.autosave:
            self._write(quiet=True)

    def save(self) -> bool:
        return self._write(quiet=False)

    def _write(self, *, quiet: bool) -> bool:
        try:
            self.store.save()
        except ConfigSaveError as exc:
            logger.debug("Save failed: %s", exc)
            self.status.show(f"Save failed: {exc}")
            return False
        if not quiet:
            self.status.show("Saved configuration.")
        return True
