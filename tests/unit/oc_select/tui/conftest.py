import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from oc_select.config import PromptConfig
from oc_select.context import RenderContext
from oc_select.models import CommandEntry, ProviderAction, ProviderEntry
from oc_select.sections import (
    assign_indices,
    build_command_section,
    build_prompt_section,
    build_provider_section,
)


@pytest.fixture
def app_session():
    """Run prompt_toolkit objects against a pipe input and a dummy output."""
    with create_pipe_input() as pipe_input:
        with create_app_session(input=pipe_input, output=DummyOutput()) as session:
            yield pipe_input, session


@pytest.fixture
def picker_items():
    context = RenderContext({"this": "main.py"})
    return assign_indices(
        [
            build_prompt_section(
                {
                    "ask": PromptConfig(prompt="", ask=True, submit=True),
                    "explain": PromptConfig(prompt="Explain @this", submit=True),
                },
                context,
            ),
            build_command_section({"session.new": "Start a new session"}),
            build_provider_section(),
        ]
    )


@pytest.fixture
def command_entry() -> CommandEntry:
    return CommandEntry(name="session.new", description="Start a new session", index=5)


@pytest.fixture
def provider_entry() -> ProviderEntry:
    return ProviderEntry(action=ProviderAction.STOP, label="Stop opencode", index=9)
