"""Base configuration for the widget drawer.

Provides hooks for applications to tune measurement and indicator behavior.
The sizing constants in widget_drawer.core.size_model are fixed and are not
part of this configuration.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class DrawerConfig:
    """Runtime configuration for a drawer session.

    Attributes:
        density: Pixels per density-independent unit for host measurements
        indicator_show_ms: Duration of the selection indicator show transition
        indicator_hide_ms: Duration of the selection indicator hide transition
        replay_on_subscribe: Deliver the current value to new subscribers
    """

    density: float = 1.0
    indicator_show_ms: int = 500
    indicator_hide_ms: int = 500
    replay_on_subscribe: bool = True

    def __post_init__(self):
        if self.density <= 0:
            raise ValueError(f"density must be positive, got {self.density}")


# Global config instance (set by application)
_drawer_config: Optional[DrawerConfig] = None


def set_drawer_config(config: Optional[DrawerConfig]) -> None:
    """Set the global drawer configuration.

    Args:
        config: DrawerConfig instance, or None to restore defaults
    """
    global _drawer_config
    _drawer_config = config


def get_drawer_config() -> DrawerConfig:
    """Get the current drawer configuration.

    Returns:
        Current DrawerConfig or default if not set
    """
    if _drawer_config is None:
        return DrawerConfig()
    return _drawer_config
