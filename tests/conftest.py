"""pytest configuration and fixtures for widget-drawer tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from widget_drawer.protocols import WidgetHost


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


class FakeWidgetHost(WidgetHost):
    """Widget host returning canned natural heights and placeholder views."""

    def __init__(self, heights=None, default_height=100):
        self.heights = dict(heights or {})
        self.default_height = default_height
        self.created = []

    def create_view(self, widget_id):
        self.created.append(widget_id)
        return f"view-{widget_id}"

    def natural_height(self, widget_id):
        return self.heights.get(widget_id, self.default_height)


@pytest.fixture
def host():
    return FakeWidgetHost(heights={5: 120, 6: 80})


@pytest.fixture
def store(qapp):
    from widget_drawer.core import EntryStore
    return EntryStore()


@pytest.fixture
def selection(qapp):
    from widget_drawer.core import SelectionController
    return SelectionController()


@pytest.fixture
def presenter(store, selection, host):
    from widget_drawer.services import ListPresenter
    from widget_drawer.protocols import DrawerConfig
    return ListPresenter(store, selection, host=host, config=DrawerConfig())


@pytest.fixture(autouse=True)
def reset_globals():
    """Keep global registries from leaking between tests."""
    from widget_drawer.protocols import register_widget_host, set_drawer_config
    yield
    register_widget_host(None)
    set_drawer_config(None)
