"""
Collaborator protocols and configuration.

ABC-based contracts for the widget host the drawer consumes, plus the
global drawer configuration.
"""

from .widget_host import WidgetHost, register_widget_host, get_widget_host
from .drawer_config import DrawerConfig, set_drawer_config, get_drawer_config

__all__ = [
    "WidgetHost",
    "register_widget_host",
    "get_widget_host",
    "DrawerConfig",
    "set_drawer_config",
    "get_drawer_config",
]
