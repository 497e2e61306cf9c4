"""
Drawer entry and slot types.

A drawer position is either the header slot (always index 0) or a widget
slot wrapping a WidgetEntry. Keeping the header out of the entry type means
no widget entry can ever impersonate it.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from .size_model import SIZE_DEFAULT, validate_size_offset

# Reserved id of the header slot, the minimum 32-bit integer
HEADER_ID = -2 ** 31

# View type codes handed to the display surface
VIEW_TYPE_WIDGET = 0
VIEW_TYPE_HEADER = 1


class ViewKind(Enum):
    """Kind of view a drawer position renders as."""
    WIDGET = VIEW_TYPE_WIDGET
    HEADER = VIEW_TYPE_HEADER


@dataclass(frozen=True)
class WidgetEntry:
    """Drawer-visible configuration of one hosted widget instance."""
    id: int
    size_offset: int = SIZE_DEFAULT
    is_full_width: bool = False

    def __post_init__(self):
        validate_size_offset(self.size_offset)

    def with_size_offset(self, size_offset: int) -> 'WidgetEntry':
        """Copy of this entry resized to size_offset."""
        return replace(self, size_offset=size_offset)

    def with_full_width(self, is_full_width: bool) -> 'WidgetEntry':
        """Copy of this entry with a new span flag."""
        return replace(self, is_full_width=is_full_width)


@dataclass(frozen=True)
class HeaderSlot:
    """The protected first slot of every drawer."""
    id: int = HEADER_ID
    view_kind: ViewKind = ViewKind.HEADER


@dataclass(frozen=True)
class WidgetSlot:
    """A drawer slot holding a widget entry."""
    entry: WidgetEntry
    view_kind: ViewKind = ViewKind.WIDGET

    @property
    def id(self) -> int:
        return self.entry.id


Slot = Union[HeaderSlot, WidgetSlot]

HEADER_SLOT = HeaderSlot()
