"""Settings models and loading for opencode-select."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from oc_common.config.env import env_int, read_env
from oc_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/opencode-select/config.yaml")
DEFAULT_STATE_DIR = Path("~/.cache/opencode-select")


def default_prompts() -> Dict[str, "PromptConfig"]:
    return {
        "ask": PromptConfig(prompt="", ask=True, submit=True),
        "explain": PromptConfig(prompt="Explain @this and its context", submit=True),
        "optimize": PromptConfig(prompt="Optimize @this for performance and readability", submit=True),
        "document": PromptConfig(prompt="Add comments documenting @this", submit=True),
        "test": PromptConfig(prompt="Add tests for @this", submit=True),
        "review": PromptConfig(prompt="Review @this for correctness and readability", submit=True),
        "diagnostics": PromptConfig(prompt="Explain @diagnostics", submit=True),
        "fix": PromptConfig(prompt="Fix @diagnostics", submit=True),
        "implement": PromptConfig(prompt="Implement @this"),
    }


def default_commands() -> Dict[str, str]:
    return {
        "session.new": "Start a new session",
        "session.share": "Share the current session",
        "session.interrupt": "Interrupt the current session",
        "session.compact": "Compact the current session (reduce context size)",
        "session.undo": "Undo the last action in the current session",
        "session.redo": "Redo the last undone action in the current session",
        "agent.cycle": "Cycle the selected agent",
        "prompt.submit": "Submit the TUI input",
        "prompt.clear": "Clear the TUI input",
    }


class PromptConfig(BaseModel):
    """A prompt template offered in the PROMPT section."""

    prompt: str = Field(description="Template text; @name placeholders are substituted")
    ask: bool = Field(default=False, description="Ask for follow-up input before sending")
    submit: bool = Field(default=False, description="Submit the prompt right away")


class SectionsConfig(BaseModel):
    """Which sections the picker shows."""

    prompts: bool = True
    commands: Union[Dict[str, str], Literal[False]] = Field(
        default_factory=default_commands,
        description="Command names and descriptions, or false to hide the section",
    )
    provider: bool = Field(
        default=True,
        description="Show provider actions; forced off when no provider is configured",
    )

    @property
    def commands_enabled(self) -> bool:
        return self.commands is not False


class SelectionConfig(BaseModel):
    """Options for a single picker invocation."""

    picker: Optional[str] = Field(
        default=None,
        description="Preferred backend: 'panel', 'minimal' or None for the console",
    )
    sections: SectionsConfig = Field(default_factory=SectionsConfig)
    panel: Dict[str, Any] = Field(default_factory=dict, description="Options passed to the panel backend")
    minimal: Dict[str, Any] = Field(default_factory=dict, description="Options passed to the minimal backend")

    def backend_options(self, name: str) -> Dict[str, Any]:
        if name == "panel":
            return dict(self.panel)
        if name == "minimal":
            return dict(self.minimal)
        return {}


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=4096, gt=0, lt=65536)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


class ProviderConfig(BaseModel):
    """Local process that serves opencode."""

    cmd: List[str] = Field(default_factory=lambda: ["opencode"])
    state_dir: Path = Field(default=DEFAULT_STATE_DIR)


class Settings(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    prompts: Dict[str, PromptConfig] = Field(default_factory=default_prompts)
    select: SelectionConfig = Field(default_factory=SelectionConfig)
    provider: Optional[ProviderConfig] = None
    context: Dict[str, str] = Field(default_factory=dict)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``; override wins."""
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _config_path(path: Path | None) -> Path | None:
    if path is not None:
        return path.expanduser()
    env_path = read_env("config")
    if env_path:
        return Path(env_path).expanduser()
    candidate = DEFAULT_CONFIG_PATH.expanduser()
    return candidate if candidate.exists() else None


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            f"Cannot read config file {path}", context={"path": path}, cause=exc
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping", context={"path": path}
        )
    return data


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    picker = read_env("picker")
    if picker:
        overrides["select"] = {"picker": picker}
    port = env_int("port")
    if port is not None:
        overrides["server"] = {"port": port}
    return overrides


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from YAML, layered over defaults and under env overrides."""
    data = Settings().model_dump()
    resolved = _config_path(path)
    if resolved is not None:
        logger.debug("Loading config from %s", resolved)
        data = deep_merge(data, _read_yaml(resolved))
    data = deep_merge(data, _env_overrides())
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid opencode-select configuration",
            context={"path": resolved, "errors": exc.errors(include_url=False)},
            cause=exc,
        ) from exc


def resolve_selection(
    settings: Settings, override: Mapping[str, Any] | None = None
) -> SelectionConfig:
    """Return the selection options for one call.

    ``override`` is deep-merged over the configured options; the provider
    section is always off when no provider is configured.
    """
    data = deep_merge(settings.select.model_dump(), override or {})
    try:
        selection = SelectionConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid selection options",
            context={"errors": exc.errors(include_url=False)},
            cause=exc,
        ) from exc
    if settings.provider is None and selection.sections.provider:
        selection = selection.model_copy(
            update={"sections": selection.sections.model_copy(update={"provider": False})}
        )
    return selection
