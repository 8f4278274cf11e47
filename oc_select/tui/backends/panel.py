"""Full-screen panel picker: grouped list, inline highlights and a preview pane."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame
from rich.text import Text

from oc_select.models import Entry, Group, Preview, SelectableItem, wants_followup
from oc_select.tui.components.flat_picker_panel import (
    FlatPickerPanel,
    FlatPickerPanelConfig,
)
from oc_select.tui.core import theme
from oc_select.tui.core.protocols import Backend, OnChoice

logger = logging.getLogger(__name__)

NAME_COLUMN = 18
NO_PREVIEW = "No preview available"


def _one_line(text: str) -> str:
    return text.replace("\n", " ")


def panel_row_fragments(item: SelectableItem) -> StyleAndTextTuples:
    """Return the styled fragments for one list row."""
    if isinstance(item, Group):
        return [("class:title", item.name)]
    fragments: StyleAndTextTuples = [
        ("class:keyword", item.name),
        ("", " " * max(NAME_COLUMN - len(item.name), 0)),
    ]
    fragments.extend(
        (theme.span_class(style), _one_line(text)) for text, style in item.highlights
    )
    if wants_followup(item):
        fragments.append(("class:keyword", "…"))
    return fragments


def _offset(lines: list[str], line: int, col: int) -> int:
    line = max(0, min(line, len(lines) - 1))
    return sum(len(lines[i]) + 1 for i in range(line)) + min(col, len(lines[line]))


def styled_preview(preview: Preview) -> Text:
    """Return the preview text with its annotations applied as style ranges."""
    text = Text(preview.text)
    lines = preview.text.split("\n")
    for start_line, start_col, end_line, end_col, style in preview.annotations:
        text.stylize(
            theme.rich_span_style(style),
            _offset(lines, start_line, start_col),
            _offset(lines, end_line, end_col),
        )
    return text


def panel_preview(item: SelectableItem) -> Text | str:
    if isinstance(item, Group):
        return ""
    if item.preview is None:
        return NO_PREVIEW
    return styled_preview(item.preview)


class _PanelPickerApp:
    def __init__(
        self,
        items: Sequence[SelectableItem],
        *,
        title: str = "opencode",
        config: FlatPickerPanelConfig | None = None,
    ) -> None:
        self.items = list(items)
        self.title = title
        self._panel = FlatPickerPanel(
            self.items,
            row_renderer=self._render_row,
            preview_renderer=panel_preview,
            config=config,
        )
        self.search = self._panel.search

        body = HSplit(
            [
                self.search,
                Window(height=1, char="-", style="class:separator"),
                VSplit(
                    [
                        Window(self._panel.list_control, width=Dimension(weight=1)),
                        Window(width=1, char="|", style="class:separator"),
                        Window(self._panel.preview_control, width=Dimension(weight=1)),
                    ],
                    padding=1,
                ),
            ]
        )
        self.app: Application[Entry | None] = Application(
            layout=Layout(Frame(body, title=title), focused_element=self.search),
            key_bindings=self._keybindings(),
            style=Style.from_dict(dict(theme.prompt_toolkit_picker_style())),
            full_screen=True,
        )
        self.search.buffer.on_text_changed += lambda _: self._apply_filter()

    @property
    def panel(self) -> FlatPickerPanel:
        return self._panel

    def _apply_filter(self) -> None:
        self._panel.apply_filter(reset_index=True)
        self.app.invalidate()

    def _render_row(self, item: SelectableItem, is_selected: bool) -> StyleAndTextTuples:
        fragments = panel_row_fragments(item)
        if is_selected and not isinstance(item, Group):
            return [("class:selected", " ▸ ")] + [
                (f"{style} class:selected".strip(), text) for style, text in fragments
            ]
        return [("", "   ")] + fragments

    def _keybindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("down")
        @kb.add("c-n")
        def _(e: Any) -> None:
            self._panel.move(1)

        @kb.add("up")
        @kb.add("c-p")
        def _(e: Any) -> None:
            self._panel.move(-1)

        @kb.add("enter")
        def _(e: Any) -> None:
            entry = self._panel.selected_item
            if entry is not None:
                e.app.exit(result=entry)

        @kb.add("escape", eager=True)
        @kb.add("c-c")
        def _(e: Any) -> None:
            e.app.exit(result=None)

        return kb

    def run(self) -> Entry | None:
        return self.app.run()


class PanelBackend(Backend):
    """Backend with native grouping, per-span highlighting and live preview."""

    name = "panel"

    def choose(
        self,
        items: Sequence[SelectableItem],
        on_choice: OnChoice,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        opts = dict(options or {})
        config = FlatPickerPanelConfig(
            enable_fuzzy=bool(opts.get("fuzzy", True)),
            wrap_navigation=bool(opts.get("wrap_navigation", False)),
        )
        picker = _PanelPickerApp(items, title=opts.get("title", "opencode"), config=config)
        try:
            choice = picker.run()
        except KeyboardInterrupt:
            choice = None
        logger.debug("Panel picker returned %s", getattr(choice, "name", None))
        on_choice(choice)
