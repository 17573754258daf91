from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import assert_never

from .defaults import default_entries
from .model import (
    I64_MAX,
    I64_MIN,
    BooleanValue,
    CategoryValue,
    ChoiceValue,
    ColorValue,
    DocumentError,
    Entry,
    IntegerValue,
    TextValue,
    document_from_entries,
    entries_from_document,
    selected_option,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base class for configuration store errors."""


class ConfigSaveError(ConfigError):
    """Raised when the configuration cannot be serialized or written."""


@dataclass(slots=True)
class ConfigStore:
    """Ordered key/value entries backed by a JSON document.

    Keys are resolved by first match. The set of keys never changes after
    construction; only values are mutated in place.
    """

    path: Path
    entries: list[Entry] = field(default_factory=list)

    @classmethod
    def default(cls, path: Path) -> ConfigStore:
        return cls(path=path, entries=default_entries())

    @classmethod
    def from_document(cls, path: Path, doc: object) -> ConfigStore:
        """Build a store from a decoded JSON document.

        Raises:
            DocumentError: If the document does not describe a valid entry list.
        """

        return cls(path=path, entries=entries_from_document(doc))

    @classmethod
    def load(cls, path: Path) -> ConfigStore:
        """Load `path`, falling back to the default schema on any failure."""

        if not path.exists():
            logger.info("Config %s not found, using defaults", path)
            return cls.default(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read config (using defaults): %s", exc)
            return cls.default(path)
        try:
            return cls.from_document(path, json.loads(text))
        except (json.JSONDecodeError, DocumentError) as exc:
            logger.warning("Failed to parse config (using defaults): %s", exc)
            return cls.default(path)

    def to_document(self) -> dict[str, object]:
        return document_from_entries(str(self.path), self.entries)

    def save(self) -> None:
        """Overwrite the backing file with the full entry list.

        Raises:
            ConfigSaveError: On serialization or filesystem failure.
        """

        try:
            payload = json.dumps(self.to_document(), indent=2, ensure_ascii=False) + "\n"
            self.path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise ConfigSaveError(f"{self.path}: {exc}") from exc

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, key: str) -> Entry | None:
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    # Read accessors.

    def get_string(self, key: str) -> str | None:
        entry = self.find(key)
        if entry is None:
            return None
        value = entry.value
        match value:
            case TextValue():
                return value.value
            case ChoiceValue() | ColorValue():
                return selected_option(value)
            case IntegerValue():
                return str(value.value)
            case BooleanValue():
                return "true" if value.value else "false"
            case CategoryValue():
                return None
            case _:
                assert_never(value)

    def get_option(self, key: str) -> int:
        entry = self.find(key)
        if entry is not None and isinstance(entry.value, (ChoiceValue, ColorValue)):
            return entry.value.selected
        return 0

    def get_int(self, key: str) -> int:
        entry = self.find(key)
        if entry is not None and isinstance(entry.value, IntegerValue):
            return entry.value.value
        return 0

    def get_bool(self, key: str) -> bool:
        entry = self.find(key)
        if entry is not None and isinstance(entry.value, BooleanValue):
            return entry.value.value
        return False

    # Setters: validate, mutate, persist. `None` means rejected or not persisted.

    def _persist(self, key: str) -> bool:
        try:
            self.save()
        except ConfigSaveError as exc:
            logger.warning("Failed to persist %r: %s", key, exc)
            return False
        return True

    def set_option(self, key: str, index: int) -> int | None:
        if index < 0:
            return None
        entry = self.find(key)
        if entry is None or not isinstance(entry.value, (ChoiceValue, ColorValue)):
            return None
        if index >= len(entry.value.options):
            return None
        entry.value.selected = index
        return index if self._persist(key) else None

    def set_int(self, key: str, value: int) -> int | None:
        if not (I64_MIN <= value <= I64_MAX):
            return None
        entry = self.find(key)
        if entry is None or not isinstance(entry.value, IntegerValue):
            return None
        entry.value.value = value
        return value if self._persist(key) else None

    def set_bool(self, key: str, value: bool) -> bool | None:
        entry = self.find(key)
        if entry is None or not isinstance(entry.value, BooleanValue):
            return None
        entry.value.value = value
        return value if self._persist(key) else None

    def set_string(self, key: str, value: str) -> str | None:
        entry = self.find(key)
        if entry is None or not isinstance(entry.value, TextValue):
            return None
        maximum_size = entry.value.maximum_size
        if maximum_size is not None and len(value) > maximum_size:
            return None
        entry.value.value = value
        return value if self._persist(key) else None
