import pytest

from oc_select.models import (
    CommandEntry,
    Group,
    PromptEntry,
    ProviderAction,
    ProviderEntry,
    is_selectable,
    wants_followup,
)

pytestmark = pytest.mark.unit_select


def test_entry_summaries() -> None:
    assert PromptEntry(name="fix", template="Fix @this").summary == "Fix @this"
    assert CommandEntry(name="session.new", description="New").summary == "New"
    provider = ProviderEntry(action=ProviderAction.START, label="Start opencode")
    assert provider.name == "start"
    assert provider.summary == "Start opencode"


def test_non_prompt_entries_have_no_preview() -> None:
    assert CommandEntry(name="x").preview is None
    assert ProviderEntry(action=ProviderAction.STOP, label="Stop").preview is None
    assert CommandEntry(name="x", description="d").highlights == (("d", "comment"),)


def test_selectable_and_followup() -> None:
    assert not is_selectable(Group("PROMPT"))
    assert is_selectable(CommandEntry(name="x"))
    assert wants_followup(PromptEntry(name="ask", template="", ask=True))
    assert not wants_followup(PromptEntry(name="fix", template=""))
    assert not wants_followup(CommandEntry(name="x"))
