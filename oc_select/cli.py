"""
Command-line interface for opencode-select.

`ocselect` opens the picker; `ocselect items` prints the list it would show.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from oc_common.config.env import parse_assignments
from oc_common.errors import OCError
from oc_common.logging import configure_logging
from oc_select.config import Settings, load_settings, resolve_selection
from oc_select.models import Group
from oc_select.selector import build_context, gather, run_selection
from oc_select.tui.backends.headless import HeadlessBackend
from oc_select.tui.components.presenter import RichPresenter
from oc_select.tui.core import theme
from oc_select.tui.core.protocols import Presenter


@dataclass
class CLIContext:
    """Settings and presenter shared by the commands, loaded lazily."""

    config_path: Optional[Path] = None
    _settings: Optional[Settings] = None
    _presenter: Optional[Presenter] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings(self.config_path)
        return self._settings

    @settings.setter
    def settings(self, value: Settings) -> None:
        self._settings = value

    @property
    def presenter(self) -> Presenter:
        if self._presenter is None:
            self._presenter = RichPresenter()
        return self._presenter

    @presenter.setter
    def presenter(self, value: Presenter) -> None:
        self._presenter = value


ctx_store = CLIContext()

app = typer.Typer(help="Pick an opencode prompt, command or provider action.")


def _section_overrides(
    picker: Optional[str], prompts: bool, commands: bool, provider: bool
) -> Dict[str, Any]:
    sections: Dict[str, Any] = {}
    if not prompts:
        sections["prompts"] = False
    if not commands:
        sections["commands"] = False
    if not provider:
        sections["provider"] = False
    overrides: Dict[str, Any] = {"sections": sections}
    if picker:
        overrides["picker"] = picker
    return overrides


def _parse_vars(values: List[str]) -> Dict[str, str]:
    variables: Dict[str, str] = {}
    for value in values:
        variables.update(parse_assignments(value))
    return variables


def _fail(exc: OCError) -> typer.Exit:
    ctx_store.presenter.error(exc.user_message())
    return typer.Exit(exc.exit_code)


def _run_pick(
    picker: Optional[str] = None,
    prompts: bool = True,
    commands: bool = True,
    provider: bool = True,
    variables: Optional[List[str]] = None,
    headless_choice: Optional[str] = None,
) -> None:
    try:
        settings = ctx_store.settings
        run_selection(
            _section_overrides(picker, prompts, commands, provider),
            settings=settings,
            presenter=ctx_store.presenter,
            context=build_context(settings, _parse_vars(variables or [])),
            backend=HeadlessBackend(headless_choice) if headless_choice else None,
        )
    except OCError as exc:
        raise _fail(exc) from exc


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to $OCS_CONFIG or ~/.config/opencode-select/config.yaml).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Global options; runs `pick` when no command is given."""
    configure_logging(debug=debug, force=True)
    ctx_store.config_path = config
    if ctx.invoked_subcommand is None:
        _run_pick()


@app.command("pick")
def pick(
    picker: Optional[str] = typer.Option(
        None, "--picker", "-p", help="Backend to use: panel, minimal or console."
    ),
    prompts: bool = typer.Option(True, "--prompts/--no-prompts", help="Show the PROMPT section."),
    commands: bool = typer.Option(True, "--commands/--no-commands", help="Show the COMMAND section."),
    provider: bool = typer.Option(True, "--provider/--no-provider", help="Show the PROVIDER section."),
    var: List[str] = typer.Option([], "--var", help="Template variable as key=value (repeatable)."),
    headless_choice: Optional[str] = typer.Option(
        None,
        "--headless-choice",
        help="Skip the UI and choose the entry with this name (CI use).",
    ),
) -> None:
    """Open the picker and run the chosen entry."""
    _run_pick(picker, prompts, commands, provider, var, headless_choice)


@app.command("items")
def list_items(
    prompts: bool = typer.Option(True, "--prompts/--no-prompts"),
    commands: bool = typer.Option(True, "--commands/--no-commands"),
    provider: bool = typer.Option(True, "--provider/--no-provider"),
    var: List[str] = typer.Option([], "--var", help="Template variable as key=value (repeatable)."),
) -> None:
    """Print the picker list without opening a UI."""
    try:
        settings = ctx_store.settings
        selection = resolve_selection(
            settings, _section_overrides(None, prompts, commands, provider)
        )
        aggregation = gather(settings, selection, build_context(settings, _parse_vars(var)))
    except OCError as exc:
        raise _fail(exc) from exc

    table = Table(title=theme.panel_title("opencode"), show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Section")
    table.add_column("Name", style="bold")
    table.add_column("Text")
    section = ""
    for item in aggregation.items:
        if isinstance(item, Group):
            section = item.name
            continue
        table.add_row(str(item.index), section, item.name, item.summary)
    Console().print(table)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
