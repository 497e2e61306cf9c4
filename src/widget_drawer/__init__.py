"""
widget-drawer: widget-list state for a home-screen widget drawer, on PyQt6.

Owns the ordered collection of hosted widget entries behind a protected
header slot, edit mode and selection, and the per-entry presentation a
display surface renders.

Architecture:
- Core: entries, size model, EntryStore, SelectionController
- Protocols: WidgetHost ABC and DrawerConfig
- Animation: selection indicator transition descriptions
- Services: subscriptions and ListPresenter

Inflating widget views, hosting widget processes, persistence and drag
reordering are left to the application.
"""

__version__ = "0.1.0"

from .core import (
    HEADER_ID,
    SIZE_DEFAULT,
    SIZE_MAX,
    SIZE_MIN,
    STEP,
    EntryStore,
    SelectionController,
    ViewKind,
    WidgetEntry,
    rendered_height,
)
from .protocols import DrawerConfig, WidgetHost
from .services import ListPresenter, NotificationStream, Presentation

__all__ = [
    "__version__",
    "HEADER_ID",
    "SIZE_DEFAULT",
    "SIZE_MAX",
    "SIZE_MIN",
    "STEP",
    "EntryStore",
    "SelectionController",
    "ViewKind",
    "WidgetEntry",
    "rendered_height",
    "DrawerConfig",
    "WidgetHost",
    "ListPresenter",
    "NotificationStream",
    "Presentation",
]
