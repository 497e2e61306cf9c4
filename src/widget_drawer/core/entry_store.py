"""
Ordered store of drawer entries.

Position 0 is always the header slot; widget entries follow in insertion
order. Ids are stable for an entry's lifetime while indices shift as lower
positions are inserted or removed, so display surfaces should diff by id.

Notifications are Qt signals delivered synchronously before the mutating call
returns. A mutation requested by an observer while a notification is being
delivered is queued and applied, in request order, once the outer notification
has finished; the nested call returns None. Failures of queued mutations are
logged and broadcast through deferred_mutation_failed.
"""

import logging
from collections import deque
from typing import Any, Deque, Dict, Iterable, Iterator, List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .entries import HEADER_ID, HEADER_SLOT, Slot, WidgetEntry, WidgetSlot
from .exceptions import (
    BatchAddError,
    DrawerError,
    DuplicateIdError,
    IndexOutOfRangeError,
    InvalidOperationError,
    NotFoundError,
)
from .flag_context_manager import DrawerFlag, FlagContextManager

logger = logging.getLogger(__name__)

# Returned by index_of_id when the id is absent
NOT_FOUND = -1


class EntryStore(QObject):
    """Header plus widget entries, with insert/remove/change notifications."""

    item_inserted = pyqtSignal(int, object)  # index, WidgetEntry
    item_removed = pyqtSignal(int, object)  # previous index, WidgetEntry
    item_changed = pyqtSignal(int, object)  # index, new WidgetEntry
    deferred_mutation_failed = pyqtSignal(object)  # DrawerError

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._entries: List[WidgetEntry] = []
        self._by_id: Dict[int, WidgetEntry] = {}
        self._notifying = False
        self._draining = False
        self._deferred: Deque[Tuple[str, Tuple[Any, ...]]] = deque()

    # ========== LOOKUPS ==========

    def size(self) -> int:
        """Number of slots, header included."""
        return len(self._entries) + 1

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Slot]:
        yield HEADER_SLOT
        for entry in self._entries:
            yield WidgetSlot(entry)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id == HEADER_ID or entry_id in self._by_id

    def get(self, index: int) -> Slot:
        """Return the slot at index."""
        self._check_index(index)
        if index == 0:
            return HEADER_SLOT
        return WidgetSlot(self._entries[index - 1])

    def id_at(self, index: int) -> int:
        """Stable id of the slot at index."""
        return self.get(index).id

    def index_of_id(self, entry_id: int) -> int:
        """Current index of entry_id, or NOT_FOUND."""
        if entry_id == HEADER_ID:
            return 0
        if entry_id not in self._by_id:
            return NOT_FOUND
        for position, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return position + 1
        return NOT_FOUND

    def entry_by_id(self, entry_id: int) -> Optional[WidgetEntry]:
        """Widget entry with entry_id, or None."""
        return self._by_id.get(entry_id)

    def entries(self) -> List[WidgetEntry]:
        """Widget entries in display order, header excluded."""
        return list(self._entries)

    def ids(self) -> List[int]:
        """Widget entry ids in display order, header excluded."""
        return [entry.id for entry in self._entries]

    # ========== MUTATIONS ==========

    def add(self, entry: WidgetEntry) -> None:
        """Append entry after the last slot."""
        if self._defer_if_notifying("add", entry):
            return
        if entry.id == HEADER_ID:
            logger.debug(f"Rejected add of reserved header id {entry.id}")
            raise InvalidOperationError(f"Id {HEADER_ID} is reserved for the header")
        if entry.id in self._by_id:
            logger.debug(f"Rejected add of duplicate id {entry.id}")
            raise DuplicateIdError(entry.id)

        self._entries.append(entry)
        self._by_id[entry.id] = entry
        index = self.size() - 1
        logger.debug(f"Inserted widget {entry.id} at index {index}")
        self._notify(self.item_inserted, index, entry)

    def add_all(self, entries: Iterable[WidgetEntry], raise_on_error: bool = False) -> List[DrawerError]:
        """
        Add entries in order, continuing past failures.

        Successful insertions are never rolled back.

        Args:
            entries: Entries to append
            raise_on_error: Raise BatchAddError after the batch if anything failed

        Returns:
            The per-entry failures, empty when every entry was added
        """
        failures: List[DrawerError] = []
        for entry in entries:
            try:
                self.add(entry)
            except (DuplicateIdError, InvalidOperationError) as e:
                failures.append(e)

        if failures:
            logger.debug(f"add_all finished with {len(failures)} failure(s)")
            if raise_on_error:
                raise BatchAddError(failures)
        return failures

    def remove_by_id(self, entry_id: int) -> Optional[WidgetEntry]:
        """Remove the entry with entry_id and return it (None when queued)."""
        if self._defer_if_notifying("remove_by_id", entry_id):
            return None
        if entry_id == HEADER_ID:
            logger.debug("Rejected removal of the header")
            raise InvalidOperationError("The header cannot be removed")
        index = self.index_of_id(entry_id)
        if index == NOT_FOUND:
            logger.debug(f"Rejected removal of unknown id {entry_id}")
            raise NotFoundError(entry_id)
        return self._remove(index)

    def remove(self, entry: WidgetEntry) -> Optional[WidgetEntry]:
        """Remove entry by its id."""
        return self.remove_by_id(entry.id)

    def remove_at_index(self, index: int) -> Optional[WidgetEntry]:
        """Remove the entry at index and return it (None when queued)."""
        if self._defer_if_notifying("remove_at_index", index):
            return None
        if index == 0:
            logger.debug("Rejected removal at the header index")
            raise IndexOutOfRangeError(index, self.size())
        self._check_index(index)
        return self._remove(index)

    def replace(self, entry: WidgetEntry) -> Optional[WidgetEntry]:
        """
        Swap in a new version of an existing entry, keeping its position.

        Used for resizing and span changes; the id must already be present.

        Returns:
            The entry that was replaced, or None when queued
        """
        if self._defer_if_notifying("replace", entry):
            return None
        if entry.id == HEADER_ID:
            raise InvalidOperationError("The header cannot be replaced")
        index = self.index_of_id(entry.id)
        if index == NOT_FOUND:
            logger.debug(f"Rejected replacement of unknown id {entry.id}")
            raise NotFoundError(entry.id)

        previous = self._entries[index - 1]
        self._entries[index - 1] = entry
        self._by_id[entry.id] = entry
        logger.debug(f"Replaced widget {entry.id} at index {index}")
        self._notify(self.item_changed, index, entry)
        return previous

    def pending_mutations(self) -> int:
        """Number of observer-requested mutations waiting to be applied."""
        return len(self._deferred)

    # ========== INTERNALS ==========

    def _remove(self, index: int) -> WidgetEntry:
        removed = self._entries.pop(index - 1)
        del self._by_id[removed.id]
        logger.debug(f"Removed widget {removed.id} from index {index}")
        self._notify(self.item_removed, index, removed)
        return removed

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.size():
            raise IndexOutOfRangeError(index, self.size())

    def _notify(self, signal: Any, index: int, entry: WidgetEntry) -> None:
        with FlagContextManager.notifying_context(self):
            signal.emit(index, entry)
        if not FlagContextManager.is_flag_set(self, DrawerFlag.DRAINING):
            self._drain_deferred()

    def _defer_if_notifying(self, operation: str, *args: Any) -> bool:
        if not FlagContextManager.is_flag_set(self, DrawerFlag.NOTIFYING):
            return False
        self._deferred.append((operation, args))
        logger.debug(f"Queued {operation}{args} requested during notification")
        return True

    def _drain_deferred(self) -> None:
        # Mutations queued while draining join the end of the same queue
        with FlagContextManager.draining_context(self):
            while self._deferred:
                operation, args = self._deferred.popleft()
                try:
                    getattr(self, operation)(*args)
                except DrawerError as e:
                    logger.warning(f"Queued {operation}{args} failed: {e}")
                    self.deferred_mutation_failed.emit(e)
