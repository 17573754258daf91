from __future__ import annotations

from tac_config.editors import IntegerEditor, TextEditor
from tac_config.model import (
    BooleanValue,
    CategoryValue,
    ChoiceValue,
    ColorValue,
    Entry,
    IntegerValue,
    TextValue,
)
from tac_config.render import (
    CATEGORY_STYLE,
    SELECTED_STYLE,
    Frame,
    Span,
    ViewRenderer,
    category_bar,
    color_style,
    format_entry,
)


def test_format_entry_per_kind() -> None:
    assert format_entry(Entry("label", TextValue("HOURS"))) == f'{"label":<20} = "HOURS"'
    assert format_entry(Entry("mode", ChoiceValue(["a", "b"], 1))) == f"{'mode':<20} = [b]"
    assert format_entry(Entry("c", ColorValue(["RED"], 0))) == f"{'c':<20} = [RED]"
    assert format_entry(Entry("w", IntegerValue(-5))) == f"{'w':<20} = -5"
    assert format_entry(Entry("f", BooleanValue(True))) == f"{'f':<20} = [true]"
    assert format_entry(Entry("Section", CategoryValue())) == "Section"
    assert format_entry(Entry("e", ChoiceValue([], 0))).endswith("[<?>]")


def test_category_bar_centers_key() -> None:
    assert category_bar("ab", 6) == "  ab  "
    assert category_bar("abc", 6) == " abc  "
    assert category_bar("toolong", 3) == "toolong"


def test_color_style_lookup_is_case_insensitive() -> None:
    assert color_style("red") == "red"
    assert color_style("BLACK") == "black on white"
    assert color_style("PURPLE") is None


def test_frame_put_replaces_row_and_clips() -> None:
    frame = Frame(width=5, height=2)
    frame.put(0, 1, Span("abcdef"))
    frame.put(0, 0, Span("xy"))
    frame.put(5, 0, Span("ignored"))
    assert frame.rows() == ["xy", ""]


def test_compose_centers_selected_entry_and_list() -> None:
    entries = [Entry("A", CategoryValue()), Entry("x", ChoiceValue(["a", "b", "c"], 0))]
    renderer = ViewRenderer(path="/tmp/tac.json", autosave=True)

    frame = renderer.compose(entries, 1, width=40, height=12, status="hello")
    rows = frame.rows()

    assert rows[0] == "Key/Value editor  |  file: /tmp/tac.json"
    instructions = frame.line_at(1)
    assert instructions is not None
    assert instructions.plain.endswith("Esc: quit")
    assert "s: save" not in instructions.plain
    # max width 26 => left margin (40 - 26) // 2
    assert rows[6] == " " * 7 + f"{'x':<20} = [a]"
    assert rows[5] == " " * 7 + category_bar("A", 26)
    assert rows[10] == "hello"
    assert rows[11] == "Press escape to quit"

    selected_line = frame.line_at(6)
    assert selected_line is not None
    assert selected_line.spans[0].style == SELECTED_STYLE
    category_line = frame.line_at(5)
    assert category_line is not None
    assert category_line.spans[0].style == CATEGORY_STYLE


def test_compose_without_autosave_advertises_save_key() -> None:
    renderer = ViewRenderer(path="p", autosave=False)
    rows = renderer.compose([], 0, width=120, height=10).rows()
    assert "s: save" in rows[1]
    assert rows[9] == "Press escape to quit, s to save…"


def test_list_scrolls_around_selection() -> None:
    entries = [Entry(f"n{i:02d}", IntegerValue(i)) for i in range(30)]
    renderer = ViewRenderer(path="p", autosave=True)

    frame = renderer.compose(entries, 0, width=30, height=12)
    drawn = [line.plain.split()[0] for line in frame.lines if 3 <= line.row <= 9]
    assert drawn == ["n00", "n01", "n02", "n03"]

    frame = renderer.compose(entries, 20, width=30, height=12)
    rows = {line.row: line.plain.split()[0] for line in frame.lines if 3 <= line.row <= 9}
    assert rows == {3: "n17", 4: "n18", 5: "n19", 6: "n20", 7: "n21", 8: "n22", 9: "n23"}


def test_wide_list_has_no_left_margin() -> None:
    entries = [Entry("k", TextValue("x" * 50))]
    frame = ViewRenderer(path="p", autosave=True).compose(entries, 0, width=20, height=10)
    line = frame.line_at(5)
    assert line is not None
    assert line.col == 0


def test_color_entry_spans_keep_reverse_framing_when_selected() -> None:
    entries = [Entry("circle color", ColorValue(["RED", "GREEN"], 1))]
    renderer = ViewRenderer(path="p", autosave=True)

    frame = renderer.compose(entries, 0, width=40, height=10)
    line = frame.line_at(5)
    assert line is not None
    assert [s.text for s in line.spans] == [f"{'circle color':<20} = [", "GREEN", "]"]
    assert [s.style for s in line.spans] == [SELECTED_STYLE, "green", SELECTED_STYLE]

    frame = renderer.compose(entries + [Entry("n", IntegerValue(1))], 1, width=40, height=10)
    unselected = frame.line_at(4)
    assert unselected is not None
    assert [s.style for s in unselected.spans] == ["", "green", ""]


def test_overlay_editor_shows_prompt_label_and_tail() -> None:
    renderer = ViewRenderer(path="p", autosave=True)
    frame = renderer.compose([], 0, width=10, height=8, status="gone")
    editor = TextEditor.for_value("k", TextValue("abcdefghijkl"))

    rows = renderer.overlay_editor(frame, editor).rows()

    assert rows[5] == "Editing 'k"
    assert rows[6] == "Current va"
    assert rows[7] == "defghijkl "
    cursor = frame.line_at(7)
    assert cursor is not None
    assert cursor.spans[-1].style == "reverse"


def test_overlay_integer_editor_prompt() -> None:
    renderer = ViewRenderer(path="p", autosave=True)
    frame = renderer.compose([], 0, width=80, height=8)
    rows = renderer.overlay_editor(frame, IntegerEditor.for_value("w", IntegerValue(12))).rows()
    assert rows[5] == "Editing 'w': Enter=save, Esc=cancel (integer)"
    assert rows[6] == "Current value (editable integer):"
    assert rows[7] == "12 "
