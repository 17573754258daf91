from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Literal, TypeAlias, assert_never

ValueKind = Literal["text", "choice", "category", "color", "integer", "boolean"]

DEFAULT_TEXT_LIMIT: Final[int] = 4096
INTEGER_INPUT_LIMIT: Final[int] = 32
I64_MIN: Final[int] = -(2**63)
I64_MAX: Final[int] = 2**63 - 1


class DocumentError(ValueError):
    """Raised when a persisted configuration document is malformed."""


@dataclass(slots=True)
class TextValue:
    value: str
    maximum_size: int | None = None

    @property
    def limit(self) -> int:
        """Effective character cap used by the interactive editor."""

        return DEFAULT_TEXT_LIMIT if self.maximum_size is None else self.maximum_size


@dataclass(slots=True)
class ChoiceValue:
    options: list[str]
    selected: int = 0


@dataclass(slots=True)
class ColorValue:
    options: list[str]
    selected: int = 0


@dataclass(frozen=True, slots=True)
class CategoryValue:
    pass


@dataclass(slots=True)
class IntegerValue:
    value: int


@dataclass(slots=True)
class BooleanValue:
    value: bool


Value: TypeAlias = (
    TextValue | ChoiceValue | ColorValue | CategoryValue | IntegerValue | BooleanValue
)


@dataclass(slots=True)
class Entry:
    key: str
    value: Value

    @property
    def kind(self) -> ValueKind:
        return value_kind(self.value)

    @property
    def is_category(self) -> bool:
        return isinstance(self.value, CategoryValue)


def value_kind(value: Value) -> ValueKind:
    match value:
        case TextValue():
            return "text"
        case ChoiceValue():
            return "choice"
        case CategoryValue():
            return "category"
        case ColorValue():
            return "color"
        case IntegerValue():
            return "integer"
        case BooleanValue():
            return "boolean"
        case _:
            assert_never(value)


def selected_option(value: ChoiceValue | ColorValue) -> str | None:
    if 0 <= value.selected < len(value.options):
        return value.options[value.selected]
    return None


def value_to_dict(value: Value) -> dict[str, Any]:
    match value:
        case TextValue(value=text, maximum_size=maximum_size):
            return {"kind": "text", "value": text, "maximum_size": maximum_size}
        case ChoiceValue(options=options, selected=selected):
            return {"kind": "choice", "options": list(options), "selected": selected}
        case CategoryValue():
            return {"kind": "category"}
        case ColorValue(options=options, selected=selected):
            return {"kind": "color", "options": list(options), "selected": selected}
        case IntegerValue(value=number):
            return {"kind": "integer", "value": number}
        case BooleanValue(value=flag):
            return {"kind": "boolean", "value": flag}
        case _:
            assert_never(value)


def _require_int(obj: Mapping[str, Any], field: str, kind: str) -> int:
    raw = obj.get(field)
    if not isinstance(raw, int) or isinstance(raw, bool):
        raise DocumentError(f"{kind}.{field} must be an integer, got {raw!r}")
    return raw


def _require_options(obj: Mapping[str, Any], kind: str) -> tuple[list[str], int]:
    options = obj.get("options")
    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise DocumentError(f"{kind}.options must be a list of strings")
    selected = _require_int(obj, "selected", kind)
    if options and not (0 <= selected < len(options)):
        raise DocumentError(
            f"{kind}.selected out of range 0..{len(options) - 1}: {selected}"
        )
    if not options and selected != 0:
        raise DocumentError(f"{kind}.selected must be 0 for an empty option list")
    return list(options), selected


def value_from_dict(obj: object) -> Value:
    """Decode a tagged `value` object.

    Raises:
        DocumentError: On an unknown kind tag or fields of the wrong type.
    """

    if not isinstance(obj, dict):
        raise DocumentError(f"value must be an object, got {type(obj).__name__}")
    kind = obj.get("kind")
    match kind:
        case "text":
            text = obj.get("value")
            if not isinstance(text, str):
                raise DocumentError(f"text.value must be a string, got {text!r}")
            maximum_size = obj.get("maximum_size")
            if maximum_size is not None:
                maximum_size = _require_int(obj, "maximum_size", "text")
                if maximum_size < 0:
                    raise DocumentError(f"text.maximum_size must be >= 0, got {maximum_size}")
            return TextValue(value=text, maximum_size=maximum_size)
        case "choice":
            options, selected = _require_options(obj, "choice")
            return ChoiceValue(options=options, selected=selected)
        case "category":
            return CategoryValue()
        case "color":
            options, selected = _require_options(obj, "color")
            return ColorValue(options=options, selected=selected)
        case "integer":
            number = _require_int(obj, "value", "integer")
            if not (I64_MIN <= number <= I64_MAX):
                raise DocumentError(f"integer.value out of 64-bit range: {number}")
            return IntegerValue(value=number)
        case "boolean":
            flag = obj.get("value")
            if not isinstance(flag, bool):
                raise DocumentError(f"boolean.value must be true/false, got {flag!r}")
            return BooleanValue(value=flag)
        case _:
            raise DocumentError(f"Unknown value kind: {kind!r}")


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    return {"key": entry.key, "value": value_to_dict(entry.value)}


def entry_from_dict(obj: object) -> Entry:
    if not isinstance(obj, dict):
        raise DocumentError(f"entry must be an object, got {type(obj).__name__}")
    key = obj.get("key")
    if not isinstance(key, str):
        raise DocumentError(f"entry.key must be a string, got {key!r}")
    try:
        value = value_from_dict(obj.get("value"))
    except DocumentError as exc:
        raise DocumentError(f"{key!r}: {exc}") from exc
    return Entry(key=key, value=value)


def entries_from_document(doc: object) -> list[Entry]:
    """Decode the `entries` list of a persisted document (no partial results)."""

    if not isinstance(doc, dict):
        raise DocumentError("document root must be an object")
    raw_entries = doc.get("entries")
    if not isinstance(raw_entries, list):
        raise DocumentError("document is missing an 'entries' list")
    return [entry_from_dict(item) for item in raw_entries]


def document_from_entries(filename: str, entries: list[Entry]) -> dict[str, Any]:
    return {"filename": filename, "entries": [entry_to_dict(e) for e in entries]}
