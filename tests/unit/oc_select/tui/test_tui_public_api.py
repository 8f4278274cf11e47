import pytest

import oc_select
from oc_select import api, tui

pytestmark = pytest.mark.unit_ui


def test_tui_public_api_exports() -> None:
    for name in tui.__all__:
        assert hasattr(tui, name)
    assert hasattr(tui, "select_backend")
    assert hasattr(tui, "HeadlessBackend")


def test_package_exports_select() -> None:
    assert oc_select.select is api.select
    for name in api.__all__:
        assert hasattr(api, name)
