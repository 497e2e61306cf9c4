"""
Context manager factory for boolean flag management.

Instead of:
    self._notifying = True
    try:
        ...
    finally:
        self._notifying = False

Use:
    with FlagContextManager.manage_flags(self, _notifying=True):
        ...

Previous values are restored even when the body raises, so flags nest.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class DrawerFlag(Enum):
    """
    Registry of valid drawer state flags.

    Add new flags here as they're introduced to the codebase.
    """
    NOTIFYING = '_notifying'
    DRAINING = '_draining'


class FlagContextManager:
    """Context manager factory that sets flags on entry and restores them on exit."""

    VALID_FLAGS: Set[str] = {flag.value for flag in DrawerFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Set flags on obj for the duration of the block.

        Args:
            obj: Object to set flags on
            **flags: Flag names and values to set (e.g., _notifying=True)

        Raises:
            ValueError: If any flag name is not in VALID_FLAGS
        """
        invalid_flags = set(flags.keys()) - FlagContextManager.VALID_FLAGS
        if invalid_flags:
            raise ValueError(
                f"Invalid flags: {invalid_flags}. "
                f"Valid flags: {FlagContextManager.VALID_FLAGS}. "
                f"Add new flags to DrawerFlag enum."
            )

        # No getattr default: every flag must be initialized in __init__
        prev_values: Dict[str, bool] = {}
        for flag_name in flags:
            prev_values[flag_name] = getattr(obj, flag_name)
            logger.debug(f"Saving flag {flag_name}={prev_values[flag_name]} on {type(obj).__name__}")

        for flag_name, flag_value in flags.items():
            setattr(obj, flag_name, flag_value)
            logger.debug(f"Setting flag {flag_name}={flag_value} on {type(obj).__name__}")

        try:
            yield
        finally:
            for flag_name, prev_value in prev_values.items():
                setattr(obj, flag_name, prev_value)
                logger.debug(f"Restoring flag {flag_name}={prev_value} on {type(obj).__name__}")

    @staticmethod
    @contextmanager
    def notifying_context(obj: Any):
        """Mark obj as delivering notifications while the block runs."""
        with FlagContextManager.manage_flags(obj, **{DrawerFlag.NOTIFYING.value: True}):
            yield

    @staticmethod
    @contextmanager
    def draining_context(obj: Any):
        """Mark obj as applying queued mutations while the block runs."""
        with FlagContextManager.manage_flags(obj, **{DrawerFlag.DRAINING.value: True}):
            yield

    @staticmethod
    def is_flag_set(obj: Any, flag: DrawerFlag) -> bool:
        """Check if a flag is currently set to True."""
        # No getattr default: fail loud if the flag was never initialized
        return getattr(obj, flag.value)
