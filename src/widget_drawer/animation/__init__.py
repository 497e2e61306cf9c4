"""Selection indicator transition descriptions."""

from .indicator_transition import IndicatorTransition, indicator_transition

__all__ = [
    "IndicatorTransition",
    "indicator_transition",
]
