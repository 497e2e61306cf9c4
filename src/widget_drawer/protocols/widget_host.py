"""Widget host protocol for pluggable view creation and measurement.

The drawer never inflates hosted widgets itself. Applications register a
host that creates the renderable view for a widget id and reports the
widget's natural height.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class WidgetHost(ABC):
    """
    ABC for the collaborator that hosts widget instances.

    Example:
        from widget_drawer.protocols import register_widget_host
        from myapp.hosting import LauncherWidgetHost

        register_widget_host(LauncherWidgetHost())
    """

    @abstractmethod
    def create_view(self, widget_id: int) -> Any:
        """
        Create the renderable view for a widget.

        Args:
            widget_id: Stable id of the hosted widget

        Returns:
            Whatever the display surface renders (typically a QWidget)
        """
        pass

    @abstractmethod
    def natural_height(self, widget_id: int) -> int:
        """
        Report the height the widget asks for before any size offset.

        Args:
            widget_id: Stable id of the hosted widget

        Returns:
            Height in density-independent units
        """
        pass


# Global host instance (set by application)
_widget_host: Optional[WidgetHost] = None


def register_widget_host(host: WidgetHost) -> None:
    """Register the widget host implementation.

    Args:
        host: WidgetHost instance
    """
    global _widget_host
    _widget_host = host


def get_widget_host() -> Optional[WidgetHost]:
    """Get the registered widget host.

    Returns:
        Registered host or None if not registered
    """
    return _widget_host
