"""
Terminal presentation for the picker: backends, presenter and form.
"""

from oc_select.tui.backends import BackendRegistry, default_registry, select_backend
from oc_select.tui.backends.headless import HeadlessBackend, HeadlessForm, HeadlessPresenter
from oc_select.tui.components.form import RichForm
from oc_select.tui.components.presenter import RichPresenter
from oc_select.tui.core.protocols import Backend, Form, Presenter

__all__ = [
    "Backend",
    "BackendRegistry",
    "Form",
    "HeadlessBackend",
    "HeadlessForm",
    "HeadlessPresenter",
    "Presenter",
    "RichForm",
    "RichPresenter",
    "default_registry",
    "select_backend",
]
