"""
Edit mode and selection state for a drawer session.

Two states, NotEditing and Editing. Leaving edit mode always clears the
selection. Selecting is accepted in either state; outside edit mode it has
no visible effect, and the id survives into the next edit session unless
edit mode is switched off in between.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditSelectionState:
    """Snapshot of the controller state."""
    is_editing: bool = False
    selected_id: Optional[int] = None


class SelectionController(QObject):
    """Owns is_editing and selected_id and broadcasts their new values."""

    editing_changed = pyqtSignal(bool)
    selection_changed = pyqtSignal(object)  # int or None

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._is_editing = False
        self._selected_id: Optional[int] = None

    @property
    def is_editing(self) -> bool:
        return self._is_editing

    @property
    def selected_id(self) -> Optional[int]:
        return self._selected_id

    @property
    def state(self) -> EditSelectionState:
        return EditSelectionState(self._is_editing, self._selected_id)

    def is_selected(self, entry_id: int) -> bool:
        return self._selected_id is not None and self._selected_id == entry_id

    def set_editing(self, editing: bool) -> None:
        """
        Enter or leave edit mode.

        Leaving (or re-affirming NotEditing) clears the selection first, so
        observers see the selection cleared before the mode change.
        """
        editing = bool(editing)
        changed = editing != self._is_editing
        self._is_editing = editing

        if not editing:
            self._set_selected(None)
            # A selection observer may have switched the mode back meanwhile
            if self._is_editing != editing:
                return

        if changed:
            logger.info(f"Edit mode {'entered' if editing else 'left'}")
            self.editing_changed.emit(editing)

    def toggle_editing(self) -> bool:
        """Flip edit mode and return the new value."""
        self.set_editing(not self._is_editing)
        return self._is_editing

    def select(self, entry_id: Optional[int]) -> None:
        """Select entry_id. No check is made that the id exists."""
        if not self._is_editing:
            logger.debug(f"Selection of {entry_id} recorded outside edit mode")
        self._set_selected(entry_id)

    def clear_selection(self) -> None:
        self._set_selected(None)

    def _set_selected(self, entry_id: Optional[int]) -> None:
        if entry_id == self._selected_id:
            return
        self._selected_id = entry_id
        logger.debug(f"Selected id is now {entry_id}")
        self.selection_changed.emit(entry_id)
