from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class StatusLine:
    """One-line transient feedback shown until the next redraw has consumed it."""

    message: str = ""

    def show(self, message: str) -> None:
        self.message = message

    def consume(self) -> str:
        message, self.message = self.message, ""
        return message

    @staticmethod
    def fit(message: str, width: int) -> str:
        return message[: max(1, width - 1)]
