import pytest

from oc_select.models import Group
from oc_select.tui.backends import minimal as minimal_module
from oc_select.tui.backends.minimal import (
    NO_PREVIEW,
    DecorationLexer,
    MinimalBackend,
    PreviewBuffer,
    _MinimalPickerApp,
    format_minimal_row,
    minimal_preview,
)

pytestmark = pytest.mark.unit_ui


def test_format_rows(picker_items, command_entry) -> None:
    assert format_minimal_row(Group("PROMPT")) == "── PROMPT ──"
    assert format_minimal_row(picker_items[1]) == "ask" + " " * 13 + "… "
    assert format_minimal_row(command_entry) == "session.new" + " " * 5 + "  Start a new session"


def test_preview_buffer_gets_text_and_decorations(picker_items) -> None:
    preview = PreviewBuffer()
    minimal_preview(preview, picker_items[2])

    assert preview.lines == ["Explain main.py"]
    assert preview.decorations == [(0, 8, 0, 15, "placeholder")]


def test_preview_placeholder_for_entries_without_preview(command_entry) -> None:
    preview = PreviewBuffer()
    preview.add_decoration((0, 0, 0, 1, "agent"))
    minimal_preview(preview, command_entry)

    assert preview.lines == [NO_PREVIEW]
    assert preview.decorations == []


def test_preview_empty_for_groups_and_nothing() -> None:
    preview = PreviewBuffer()
    minimal_preview(preview, Group("PROMPT"))
    assert preview.lines == [""]
    minimal_preview(preview, None)
    assert preview.lines == [""]


def test_decoration_lexer_styles_ranges(picker_items) -> None:
    preview = PreviewBuffer()
    minimal_preview(preview, picker_items[2])

    get_line = DecorationLexer(preview).lex_document(preview.buffer.document)
    fragments = get_line(0)

    assert "".join(text for _, text in fragments) == "Explain main.py"
    styled = [text for style, text in fragments if style == "class:placeholder"]
    assert "".join(styled) == "main.py"


def test_decoration_lexer_multiline_range() -> None:
    preview = PreviewBuffer()
    preview.set_lines(["abc", "def"])
    preview.add_decoration((0, 2, 1, 1, "agent"))

    get_line = DecorationLexer(preview).lex_document(preview.buffer.document)
    assert [style for style, _ in get_line(0)] == ["", "", "class:agent"]
    assert [style for style, _ in get_line(1)] == ["class:agent", "", ""]


def test_picker_app_refreshes_preview_on_move(app_session, picker_items) -> None:
    picker = _MinimalPickerApp(picker_items)
    assert picker.preview.lines == [""]

    picker._move(1)
    assert picker.preview.lines == ["Explain main.py"]

    picker._move(1)
    assert picker.preview.lines == [NO_PREVIEW]


def test_picker_app_enter_selects(app_session, picker_items) -> None:
    pipe_input, _ = app_session
    picker = _MinimalPickerApp(picker_items)
    pipe_input.send_text("session\r")

    assert picker.run() is picker_items[4]


def test_choose_passes_result_to_callback(monkeypatch, picker_items) -> None:
    seen = {}

    class FakeApp:
        def __init__(self, items, *, title, config) -> None:
            seen["config"] = config
            seen["title"] = title

        def run(self):
            return picker_items[7]

    monkeypatch.setattr(minimal_module, "_MinimalPickerApp", FakeApp)
    picked = []
    MinimalBackend().choose(picker_items, picked.append, {"wrap_navigation": True})

    assert picked == [picker_items[7]]
    assert seen["config"].enable_fuzzy is False
    assert seen["config"].wrap_navigation is True
    assert seen["title"] == "opencode"
