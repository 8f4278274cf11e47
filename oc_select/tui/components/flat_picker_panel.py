"""Reusable flat picker panel (search + sectioned list) for prompt_toolkit UIs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, TypeAlias

from prompt_toolkit.formatted_text import ANSI, StyleAndTextTuples
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.widgets import TextArea
from rich.console import Console

from oc_select.models import Entry, Group, SelectableItem, is_selectable
from oc_select.tui.core.capabilities import fuzzy_matcher

RowRenderer: TypeAlias = Callable[[SelectableItem, bool], StyleAndTextTuples]
PreviewRenderer: TypeAlias = Callable[[SelectableItem], object | None]


def search_blob(item: SelectableItem) -> str:
    if isinstance(item, Group):
        return item.name
    return f"{item.name} {item.summary}"


@dataclass(frozen=True)
class FlatPickerPanelConfig:
    """Configuration for FlatPickerPanel behavior."""

    enable_fuzzy: bool = True
    fuzzy_score_cutoff: int = 50
    wrap_navigation: bool = False


class FlatPickerPanel:
    """A reusable search + list (+ optional preview) component.

    Group rows stay in place above their matching entries and the cursor only
    ever rests on entries. The panel does not own an Application; callers
    wire keybindings and invalidation as needed.
    """

    def __init__(
        self,
        items: Sequence[SelectableItem],
        *,
        row_renderer: RowRenderer,
        preview_renderer: PreviewRenderer | None = None,
        search_prompt: str = "Search: ",
        search_style: str = "class:search",
        config: FlatPickerPanelConfig | None = None,
    ) -> None:
        self._config = config or FlatPickerPanelConfig()
        self._console = Console(force_terminal=True)

        self._row_renderer = row_renderer
        self._preview_renderer = preview_renderer

        self.search = TextArea(height=1, prompt=search_prompt, style=search_style, multiline=False)

        self._items: list[SelectableItem] = list(items)
        self._filtered: list[SelectableItem] = []
        self._selected_index = 0
        self._filter_text = ""

        self.list_control = FormattedTextControl(self._render_list, focusable=True)
        self.preview_control = FormattedTextControl(self._render_preview)

        self.apply_filter(reset_index=True)

    @property
    def items(self) -> list[SelectableItem]:
        return self._items

    @property
    def filtered(self) -> list[SelectableItem]:
        return self._filtered

    @property
    def filter_text(self) -> str:
        return self._filter_text

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def selected_item(self) -> Entry | None:
        """Return the entry under the cursor; group rows are never returned."""
        if not self._filtered:
            return None
        item = self._filtered[self._selected_index]
        if isinstance(item, Group):
            return None
        return item

    def apply_filter(self, *, reset_index: bool = True) -> None:
        query = self.search.text.strip()
        self._filter_text = query
        self._filtered = self._filter_items(self._items, query)
        if reset_index:
            self._selected_index = self._first_selectable()
        elif not self._is_selectable_at(self._selected_index):
            self._selected_index = self._first_selectable()

    def move(self, delta: int) -> None:
        """Move the cursor to the next entry in ``delta``'s direction."""
        if not self._filtered or delta == 0:
            return
        step = 1 if delta > 0 else -1
        size = len(self._filtered)
        index = self._selected_index
        for _ in range(abs(delta)):
            candidate = index
            for _ in range(size):
                candidate += step
                if self._config.wrap_navigation:
                    candidate %= size
                elif candidate < 0 or candidate >= size:
                    candidate = index
                    break
                if self._is_selectable_at(candidate):
                    break
            if not self._is_selectable_at(candidate):
                break
            index = candidate
        self._selected_index = index

    def _is_selectable_at(self, index: int) -> bool:
        return 0 <= index < len(self._filtered) and is_selectable(self._filtered[index])

    def _first_selectable(self) -> int:
        for index, item in enumerate(self._filtered):
            if is_selectable(item):
                return index
        return 0

    def _matching_positions(self, items: list[SelectableItem], query: str) -> set[int]:
        matcher = fuzzy_matcher() if self._config.enable_fuzzy else None
        if matcher is None:
            lowered = query.lower()
            return {
                pos
                for pos, item in enumerate(items)
                if is_selectable(item) and lowered in search_blob(item).lower()
            }
        process, scorer = matcher
        positions = [pos for pos, item in enumerate(items) if is_selectable(item)]
        choices = [search_blob(items[pos]) for pos in positions]
        matches = process.extract(
            query,
            choices,
            scorer=scorer,
            limit=None,
            score_cutoff=self._config.fuzzy_score_cutoff,
        )
        # matches is list of (match_string, score, index)
        return {positions[m[2]] for m in matches}

    def _filter_items(self, items: list[SelectableItem], query: str) -> list[SelectableItem]:
        if not query:
            return list(items)
        matched = self._matching_positions(items, query)
        result: list[SelectableItem] = []
        pending_group: Group | None = None
        for pos, item in enumerate(items):
            if isinstance(item, Group):
                pending_group = item
                continue
            if pos not in matched:
                continue
            if pending_group is not None:
                result.append(pending_group)
                pending_group = None
            result.append(item)
        return result

    def _render_list(self) -> StyleAndTextTuples:
        frags: StyleAndTextTuples = []
        for i, item in enumerate(self._filtered):
            frags.extend(self._row_renderer(item, i == self._selected_index))
            frags.append(("", "\n"))
        return frags

    def _render_preview(self) -> ANSI:
        if not self._filtered or self._preview_renderer is None:
            return ANSI("")
        renderable = self._preview_renderer(self._filtered[self._selected_index])
        if renderable is None:
            return ANSI("")
        with self._console.capture() as cap:
            self._console.print(renderable)
        return ANSI(cap.get())
