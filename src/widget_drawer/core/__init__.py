"""
Core drawer state.

Entry types, the size model, the entry store and the edit/selection
controller. Depends on PyQt6 only for QObject signals.
"""

from .entries import (
    HEADER_ID,
    HEADER_SLOT,
    VIEW_TYPE_HEADER,
    VIEW_TYPE_WIDGET,
    HeaderSlot,
    Slot,
    ViewKind,
    WidgetEntry,
    WidgetSlot,
)
from .entry_store import EntryStore, NOT_FOUND
from .exceptions import (
    BatchAddError,
    DrawerError,
    DuplicateIdError,
    IndexOutOfRangeError,
    InvalidOperationError,
    NotFoundError,
    SizeOffsetError,
)
from .flag_context_manager import DrawerFlag, FlagContextManager
from .selection_controller import EditSelectionState, SelectionController
from .size_model import (
    SIZE_DEFAULT,
    SIZE_MAX,
    SIZE_MIN,
    STEP,
    clamp_size_offset,
    dp_to_px,
    rendered_height,
    size_offsets,
    validate_size_offset,
)

__all__ = [
    "HEADER_ID",
    "HEADER_SLOT",
    "VIEW_TYPE_HEADER",
    "VIEW_TYPE_WIDGET",
    "HeaderSlot",
    "Slot",
    "ViewKind",
    "WidgetEntry",
    "WidgetSlot",
    "EntryStore",
    "NOT_FOUND",
    "BatchAddError",
    "DrawerError",
    "DuplicateIdError",
    "IndexOutOfRangeError",
    "InvalidOperationError",
    "NotFoundError",
    "SizeOffsetError",
    "DrawerFlag",
    "FlagContextManager",
    "EditSelectionState",
    "SelectionController",
    "SIZE_DEFAULT",
    "SIZE_MAX",
    "SIZE_MIN",
    "STEP",
    "clamp_size_offset",
    "dp_to_px",
    "rendered_height",
    "size_offsets",
    "validate_size_offset",
]
