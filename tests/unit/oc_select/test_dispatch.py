import pytest

from oc_select.dispatch import ChoiceDispatcher
from oc_select.models import CommandEntry, Group, PromptEntry, ProviderAction, ProviderEntry

pytestmark = pytest.mark.unit_select


@pytest.fixture
def dispatcher(prompts, context, actions) -> ChoiceDispatcher:
    return ChoiceDispatcher(prompts, context, actions)


def test_cancel_only_resumes(dispatcher, context, actions) -> None:
    dispatcher(None)

    assert context.state == "resumed"
    assert actions.calls == []
    assert dispatcher.dispatched is True


def test_prompt_without_ask_clears_then_prompts(dispatcher, context, actions) -> None:
    dispatcher(PromptEntry(name="explain", template="Explain @this"))

    assert context.state == "cleared"
    assert actions.calls == [("prompt", "Explain @this", "explain")]


def test_prompt_with_ask_uses_followup(dispatcher, actions) -> None:
    dispatcher(PromptEntry(name="ask", template="", ask=True))
    assert actions.calls == [("ask", "", "ask")]


def test_command_choice(dispatcher, context, actions) -> None:
    dispatcher(CommandEntry(name="session.new"))

    assert context.state == "cleared"
    assert actions.calls == [("command", "session.new")]


@pytest.mark.parametrize(
    ("action", "expected"),
    [
        (ProviderAction.TOGGLE, "toggle"),
        (ProviderAction.START, "start"),
        (ProviderAction.STOP, "stop"),
    ],
)
def test_provider_choice(dispatcher, actions, action, expected) -> None:
    dispatcher(ProviderEntry(action=action, label=""))
    assert actions.calls == [(expected,)]


def test_second_outcome_is_rejected(dispatcher, actions) -> None:
    dispatcher(CommandEntry(name="session.new"))
    with pytest.raises(RuntimeError):
        dispatcher(None)
    assert len(actions.calls) == 1


def test_group_is_not_a_choice(dispatcher, context, actions) -> None:
    with pytest.raises(TypeError):
        dispatcher(Group("PROMPT"))
    assert context.state == "active"
    assert dispatcher.dispatched is False
    assert actions.calls == []
