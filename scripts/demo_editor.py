#!/usr/bin/env python3
from __future__ import annotations

import sys
import tempfile
from pathlib import Path

from rich.console import Console

from tac_config.display import RichTerminalDisplay, can_run_interactive
from tac_config.session import EditorSession
from tac_config.store import ConfigStore


def main() -> int:
    console = Console()
    if not can_run_interactive(console):
        print("demo_editor.py needs an interactive terminal", file=sys.stderr)
        return 2
    with tempfile.TemporaryDirectory() as tmp:
        store = ConfigStore.default(Path(tmp) / "demo.json")
        display = RichTerminalDisplay(console)
        with display.session():
            EditorSession(store=store, display=display, autosave=False).run()
        for entry in store:
            text = store.get_string(entry.key)
            if text is not None:
                console.print(f"{entry.key} = {text}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
