from __future__ import annotations

from typing import Mapping

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
}

# Span styles produced by the item model, rendered with rich.
RICH_SPAN_STYLES: dict[str, str] = {
    "keyword": "bold blue",
    "title": "bold underline",
    "comment": "dim",
    "placeholder": "bold cyan",
    "agent": "bold magenta",
}


def panel_title(text: str) -> str:
    return f"[{RICH_ACCENT_BOLD}]{text}[/{RICH_ACCENT_BOLD}]"


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)


def rich_span_style(style: str | None) -> str:
    if not style:
        return ""
    return RICH_SPAN_STYLES.get(style, style)


def span_class(style: str | None) -> str:
    """Map an item span style onto a prompt_toolkit style class."""
    if not style:
        return ""
    return f"class:{style}"


def prompt_toolkit_picker_style() -> Mapping[str, str]:
    return {
        "selected": "bg:#0000aa fg:white bold",
        "separator": "fg:#0000aa",
        "frame.border": "fg:#0000aa",
        "frame.label": "fg:#0000aa bold",
        "search": "bg:#eeeeee fg:#000000",
        "title": "bold underline",
        "keyword": "fg:ansiblue bold",
        "comment": "fg:ansibrightblack",
        "placeholder": "fg:ansicyan bold",
        "agent": "fg:ansimagenta bold",
    }
