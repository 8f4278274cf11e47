"""Template rendering context shared by one picker invocation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Sequence

from oc_select.models import Agent, Annotation, Span

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"@[A-Za-z0-9_][A-Za-z0-9_.\-]*")

STYLE_PLACEHOLDER = "placeholder"
STYLE_AGENT = "agent"


@dataclass(frozen=True)
class RenderedTemplate:
    input: tuple[Span, ...]
    output: tuple[Span, ...]


def default_variables(cwd: Path | None = None) -> dict[str, str]:
    return {"cwd": str(cwd or Path.cwd())}


class RenderContext:
    """Variables and agents used to render prompt templates.

    A context ends exactly once, either with :meth:`resume` (the picker was
    cancelled) or :meth:`clear` (a choice was made).
    """

    def __init__(
        self,
        variables: Mapping[str, str] | None = None,
        *,
        on_resume: Callable[[], None] | None = None,
        on_clear: Callable[[], None] | None = None,
    ) -> None:
        self.variables: dict[str, str] = dict(variables or {})
        self.agents: list[Agent] = []
        self.state = "active"
        self._on_resume = on_resume
        self._on_clear = on_clear

    def _agent_names(self) -> set[str]:
        return {agent.name for agent in self.agents}

    def render(self, template: str) -> RenderedTemplate:
        agents = self._agent_names()
        input_spans: list[Span] = []
        output_spans: list[Span] = []
        cursor = 0
        for match in PLACEHOLDER_RE.finditer(template):
            if match.start() > cursor:
                plain = template[cursor : match.start()]
                input_spans.append((plain, None))
                output_spans.append((plain, None))
            token = match.group(0)
            key = token[1:]
            if key in self.variables:
                input_spans.append((token, STYLE_PLACEHOLDER))
                output_spans.append((self.variables[key], STYLE_PLACEHOLDER))
            elif key in agents:
                input_spans.append((token, STYLE_AGENT))
                output_spans.append((token, STYLE_AGENT))
            else:
                input_spans.append((token, None))
                output_spans.append((token, None))
            cursor = match.end()
        if cursor < len(template):
            tail = template[cursor:]
            input_spans.append((tail, None))
            output_spans.append((tail, None))
        return RenderedTemplate(input=tuple(input_spans), output=tuple(output_spans))

    @staticmethod
    def plaintext(output: Sequence[Span]) -> str:
        return "".join(text for text, _ in output)

    @staticmethod
    def annotations(output: Sequence[Span]) -> tuple[Annotation, ...]:
        """Return positioned style overlays for the styled spans of ``output``."""
        marks: list[Annotation] = []
        line, col = 0, 0
        for text, style in output:
            start_line, start_col = line, col
            parts = text.split("\n")
            if len(parts) > 1:
                line += len(parts) - 1
                col = len(parts[-1])
            else:
                col += len(text)
            if style and text:
                marks.append((start_line, start_col, line, col, style))
        return tuple(marks)

    def _finish(self, state: str, hook: Callable[[], None] | None) -> None:
        if self.state != "active":
            raise RuntimeError(f"Render context already {self.state}")
        self.state = state
        logger.debug("Render context %s", state)
        if hook is not None:
            hook()

    def resume(self) -> None:
        self._finish("resumed", self._on_resume)

    def clear(self) -> None:
        self._finish("cleared", self._on_clear)
