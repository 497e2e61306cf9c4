"""Drawer exceptions.

Every failure is a rejected operation raised at the call that caused it;
the store and selection state are left exactly as they were.
"""

from typing import List


class DrawerError(Exception):
    """Base class for all widget drawer errors."""


class DuplicateIdError(DrawerError):
    """Raised when adding an entry whose id is already in the store."""

    def __init__(self, entry_id: int):
        super().__init__(f"Widget id {entry_id} is already in the drawer")
        self.entry_id = entry_id


class NotFoundError(DrawerError, KeyError):
    """Raised when an id lookup for removal or replacement finds nothing."""

    def __init__(self, entry_id: int):
        super().__init__(f"Widget id {entry_id} is not in the drawer")
        self.entry_id = entry_id

    def __str__(self):
        # KeyError quotes its message otherwise
        return self.args[0]


class InvalidOperationError(DrawerError):
    """Raised when mutating a structurally protected slot (the header)."""


class IndexOutOfRangeError(DrawerError, IndexError):
    """Raised for index access outside [0, size) or removal at the header index."""

    def __init__(self, index: int, size: int):
        super().__init__(f"Index {index} out of range for drawer of size {size}")
        self.index = index
        self.size = size


class SizeOffsetError(DrawerError, ValueError):
    """Raised when a size offset falls outside [SIZE_MIN, SIZE_MAX]."""


class BatchAddError(DrawerError):
    """Raised by add_all(raise_on_error=True) after the whole batch was applied."""

    def __init__(self, failures: List[DrawerError]):
        super().__init__(f"{len(failures)} entr{'y' if len(failures) == 1 else 'ies'} could not be added")
        self.failures = failures
