"""Declarative description of the selection indicator transition.

The indicator scales in with an overshoot when edit mode starts and scales
out with an anticipation, then hides, when edit mode ends. Playback belongs
to the display surface; this module only says what to play.
"""

from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QEasingCurve

from widget_drawer.protocols import DrawerConfig, get_drawer_config


@dataclass(frozen=True)
class IndicatorTransition:
    """How the selection indicator animates to its new visibility."""

    visible: bool
    target_scale: float
    duration_ms: int
    easing: QEasingCurve.Type
    hide_on_finish: bool

    def easing_curve(self) -> QEasingCurve:
        """Build a QEasingCurve for QPropertyAnimation.setEasingCurve()."""
        return QEasingCurve(self.easing)


def indicator_transition(visible: bool, config: Optional[DrawerConfig] = None) -> IndicatorTransition:
    """Return the transition that takes the indicator to `visible`."""
    if config is None:
        config = get_drawer_config()
    if visible:
        return IndicatorTransition(
            visible=True,
            target_scale=1.0,
            duration_ms=config.indicator_show_ms,
            easing=QEasingCurve.Type.OutBack,
            hide_on_finish=False,
        )
    return IndicatorTransition(
        visible=False,
        target_scale=0.0,
        duration_ms=config.indicator_hide_ms,
        easing=QEasingCurve.Type.InBack,
        hide_on_finish=True,
    )
