from __future__ import annotations

from pathlib import Path
from typing import assert_never

import typer
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from . import __version__
from .defaults import DEFAULT_CONFIG_FILENAME
from .display import RichTerminalDisplay, can_run_interactive
from .model import (
    BooleanValue,
    CategoryValue,
    ChoiceValue,
    ColorValue,
    IntegerValue,
    TextValue,
    selected_option,
)
from .render import color_style
from .session import EditorSession
from .store import ConfigSaveError, ConfigStore

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}
_ACCESSORS = ("string", "option", "int", "bool")


def _default_config_path() -> Path:
    return Path.home() / DEFAULT_CONFIG_FILENAME


def _file_option() -> Path:
    return typer.Option(  # noqa: B008
        None,
        "--file",
        "-f",
        envvar="TAC_CONFIG_PATH",
        help=f"Configuration JSON file (default: ~/{DEFAULT_CONFIG_FILENAME}).",
    )


def _resolve(file: Path | None) -> Path:
    return (file or _default_config_path()).expanduser()


def _parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"Expected true/false, got {raw!r}")


def _parse_option(raw: str, options: list[str]) -> int:
    try:
        return int(raw, 10)
    except ValueError:
        pass
    lowered = raw.strip().lower()
    for idx, option in enumerate(options):
        if option.lower() == lowered:
            return idx
    raise ValueError(f"Unknown option {raw!r} (choices: {', '.join(options)})")


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Print version and exit.",
        is_eager=True,
    ),
) -> None:
    if version:
        typer.echo(f"tac-config {__version__}")
        raise typer.Exit(0)


@app.command()
def edit(
    file: Path | None = _file_option(),
    autosave: bool = typer.Option(  # noqa: B008
        True,
        "--autosave/--no-autosave",
        envvar="TAC_AUTOSAVE",
        help="Write every change immediately (otherwise press 's' to save).",
    ),
) -> None:
    """Edit the configuration in a fullscreen terminal editor."""

    path = _resolve(file)
    console = Console()
    if not can_run_interactive(console):
        typer.echo("The editor requires a TTY terminal.", err=True)
        raise typer.Exit(2)

    store = ConfigStore.load(path)
    display = RichTerminalDisplay(console)
    try:
        with display.session():
            EditorSession(store=store, display=display, autosave=autosave).run()
    except KeyboardInterrupt:
        raise typer.Exit(130) from None


@app.command()
def show(file: Path | None = _file_option()) -> None:
    """Print all entries as a table."""

    path = _resolve(file)
    store = ConfigStore.load(path)
    console = Console()

    table = Table(title=str(path), show_lines=False, header_style="bold dim")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Kind", style="dim", no_wrap=True)
    table.add_column("Value", style="white")
    for entry in store:
        value = entry.value
        match value:
            case CategoryValue():
                table.add_section()
                table.add_row(Text(entry.key, style="bold green"), "", "")
                continue
            case TextValue():
                cap = "" if value.maximum_size is None else f" (max {value.maximum_size})"
                shown = Text(f'"{value.value}"{cap}')
            case ChoiceValue():
                shown = Text(f"[{selected_option(value) or '<?>'}] {value.selected}")
            case ColorValue():
                name = selected_option(value) or "<?>"
                shown = Text.assemble("[", (name, color_style(name) or ""), "]")
            case IntegerValue():
                shown = Text(str(value.value), style="magenta")
            case BooleanValue():
                shown = Text("true" if value.value else "false", style="yellow")
            case _:
                assert_never(value)
        table.add_row(entry.key, entry.kind, shown)
    console.print(table)


@app.command()
def get(
    key: str = typer.Argument(..., help="Entry key."),
    file: Path | None = _file_option(),
    accessor: str = typer.Option(  # noqa: B008
        "string",
        "--as",
        help="Accessor: string, option, int, or bool.",
    ),
) -> None:
    """Print the value of KEY."""

    accessor_value = accessor.strip().lower()
    if accessor_value not in _ACCESSORS:
        typer.echo(
            "Invalid --as value. Expected one of: string, option, int, bool.",
            err=True,
        )
        raise typer.Exit(2)

    store = ConfigStore.load(_resolve(file))
    if store.find(key) is None:
        typer.echo(f"Unknown key: {key!r}", err=True)
        raise typer.Exit(1)

    if accessor_value == "option":
        typer.echo(str(store.get_option(key)))
    elif accessor_value == "int":
        typer.echo(str(store.get_int(key)))
    elif accessor_value == "bool":
        typer.echo("true" if store.get_bool(key) else "false")
    else:
        text = store.get_string(key)
        if text is None:
            typer.echo(f"{key!r} has no string value.", err=True)
            raise typer.Exit(1)
        typer.echo(text)


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Entry key."),
    value: str = typer.Argument(..., help="New value (option index/name, integer, bool, text)."),
    file: Path | None = _file_option(),
) -> None:
    """Set KEY to VALUE and save the file."""

    store = ConfigStore.load(_resolve(file))
    entry = store.find(key)
    if entry is None:
        typer.echo(f"Unknown key: {key!r}", err=True)
        raise typer.Exit(1)

    current = entry.value
    result: object | None
    try:
        match current:
            case ChoiceValue() | ColorValue():
                result = store.set_option(key, _parse_option(value, current.options))
            case IntegerValue():
                result = store.set_int(key, int(value, 10))
            case BooleanValue():
                result = store.set_bool(key, _parse_bool(value))
            case TextValue():
                result = store.set_string(key, value)
            case CategoryValue():
                typer.echo(f"{key!r} is a category header and has no value.", err=True)
                raise typer.Exit(1)
            case _:
                assert_never(current)
    except ValueError as exc:
        typer.echo(f"Invalid value for {key!r}: {exc}", err=True)
        raise typer.Exit(1) from exc

    if result is None:
        typer.echo(f"Rejected value for {key!r}: {value!r}", err=True)
        raise typer.Exit(1)
    typer.echo(store.get_string(key) or "")


@app.command()
def reset(
    file: Path | None = _file_option(),
    yes: bool = typer.Option(  # noqa: B008
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation.",
    ),
) -> None:
    """Overwrite the file with the built-in defaults."""

    path = _resolve(file)
    if not yes and not Confirm.ask(f"Overwrite {path} with defaults?", default=False):
        raise typer.Exit(1)
    try:
        ConfigStore.default(path).save()
    except ConfigSaveError as exc:
        typer.echo(f"Save failed: {exc}", err=True)
        raise typer.Exit(1) from exc
    typer.echo(str(path))
