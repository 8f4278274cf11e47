"""Minimal list picker: plain formatted rows and a buffer-backed preview."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from prompt_toolkit.application import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import BufferControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.lexers import Lexer
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from oc_select.models import Annotation, Entry, Group, SelectableItem, wants_followup
from oc_select.tui.components.flat_picker_panel import (
    FlatPickerPanel,
    FlatPickerPanelConfig,
)
from oc_select.tui.core import theme
from oc_select.tui.core.protocols import Backend, OnChoice

logger = logging.getLogger(__name__)

NAME_WIDTH = 16
NO_PREVIEW = "No preview available"


def format_minimal_row(item: SelectableItem) -> str:
    if isinstance(item, Group):
        return f"── {item.name} ──"
    indicator = "… " if wants_followup(item) else "  "
    return f"{item.name:<{NAME_WIDTH}}{indicator}{item.summary}".replace("\n", " ")


class PreviewBuffer:
    """Read-only preview buffer with buffer-local range decorations."""

    def __init__(self) -> None:
        self.buffer = Buffer(read_only=True, multiline=True)
        self.decorations: list[Annotation] = []

    @property
    def lines(self) -> list[str]:
        return self.buffer.text.split("\n")

    def set_lines(self, lines: Sequence[str]) -> None:
        """Replace the whole buffer; existing decorations are dropped."""
        self.decorations = []
        self.buffer.set_document(Document("\n".join(lines), 0), bypass_readonly=True)

    def add_decoration(self, annotation: Annotation) -> None:
        self.decorations.append(annotation)


class DecorationLexer(Lexer):
    """Renders the decorations of a :class:`PreviewBuffer`."""

    def __init__(self, preview: PreviewBuffer) -> None:
        self._preview = preview

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines
        decorations = list(self._preview.decorations)

        def get_line(lineno: int) -> StyleAndTextTuples:
            line = lines[lineno] if lineno < len(lines) else ""
            styles = [""] * len(line)
            for start_line, start_col, end_line, end_col, style in decorations:
                if not start_line <= lineno <= end_line:
                    continue
                first = start_col if lineno == start_line else 0
                last = end_col if lineno == end_line else len(line)
                for col in range(max(first, 0), min(last, len(line))):
                    styles[col] = theme.span_class(style)
            return [(style, char) for style, char in zip(styles, line)]

        return get_line


def minimal_preview(preview_buffer: PreviewBuffer, item: SelectableItem | None) -> None:
    """Show ``item``'s preview in ``preview_buffer``."""
    if item is None or isinstance(item, Group):
        preview_buffer.set_lines([""])
        return
    preview = item.preview
    if preview is None:
        preview_buffer.set_lines([NO_PREVIEW])
        return
    preview_buffer.set_lines(preview.text.split("\n"))
    for annotation in preview.annotations:
        preview_buffer.add_decoration(annotation)


class _MinimalPickerApp:
    def __init__(
        self,
        items: Sequence[SelectableItem],
        *,
        title: str = "opencode",
        config: FlatPickerPanelConfig | None = None,
    ) -> None:
        self.items = list(items)
        self._panel = FlatPickerPanel(
            self.items,
            row_renderer=self._render_row,
            search_prompt="> ",
            config=config or FlatPickerPanelConfig(enable_fuzzy=False),
        )
        self.search = self._panel.search
        self.preview = PreviewBuffer()
        preview_control = BufferControl(
            buffer=self.preview.buffer,
            lexer=DecorationLexer(self.preview),
            focusable=False,
        )

        body = HSplit(
            [
                VSplit(
                    [
                        Window(self._panel.list_control, width=Dimension(weight=1)),
                        Window(width=1, char="│", style="class:separator"),
                        Window(preview_control, width=Dimension(weight=1)),
                    ]
                ),
                Window(height=1, char="─", style="class:separator"),
                self.search,
            ]
        )
        self.app: Application[Entry | None] = Application(
            layout=Layout(Frame(body, title=title), focused_element=self.search),
            key_bindings=self._keybindings(),
            style=Style.from_dict(dict(theme.prompt_toolkit_picker_style())),
            full_screen=True,
        )
        self.search.buffer.on_text_changed += lambda _: self._apply_filter()
        self._refresh_preview()

    def _refresh_preview(self) -> None:
        minimal_preview(self.preview, self._panel.selected_item)

    def _apply_filter(self) -> None:
        self._panel.apply_filter(reset_index=True)
        self._refresh_preview()
        self.app.invalidate()

    def _move(self, delta: int) -> None:
        self._panel.move(delta)
        self._refresh_preview()

    def _render_row(self, item: SelectableItem, is_selected: bool) -> StyleAndTextTuples:
        style = "class:selected" if is_selected and not isinstance(item, Group) else ""
        return [(style, format_minimal_row(item))]

    def _keybindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("down")
        @kb.add("c-n")
        def _(e: Any) -> None:
            self._move(1)

        @kb.add("up")
        @kb.add("c-p")
        def _(e: Any) -> None:
            self._move(-1)

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


class MinimalBackend(Backend):
    """Backend with a custom row formatter and preview callback, no span highlights."""

    name = "minimal"

    def choose(
        self,
        items: Sequence[SelectableItem],
        on_choice: OnChoice,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        opts = dict(options or {})
        config = FlatPickerPanelConfig(
            enable_fuzzy=False,
            wrap_navigation=bool(opts.get("wrap_navigation", False)),
        )
        picker = _MinimalPickerApp(items, title=opts.get("title", "opencode"), config=config)
        try:
            choice = picker.run()
        except KeyboardInterrupt:
            choice = None
        logger.debug("Minimal picker returned %s", getattr(choice, "name", None))
        on_choice(choice)
