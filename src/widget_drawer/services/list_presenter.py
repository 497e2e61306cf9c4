"""
List presenter for the widget drawer.

Composes EntryStore, SelectionController and the size model to answer
"what should the slot at index N look like right now", and relays store and
selection changes to the display surface as minimal update notifications.

Item bindings replace per-rebind re-subscription: a display surface binds
once per entry id, rebinding the same id replaces its callbacks, and the
binding is released when the id is unbound or its entry leaves the store.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional
import logging

from PyQt6.QtCore import QObject, pyqtSignal

from widget_drawer.animation import IndicatorTransition, indicator_transition
from widget_drawer.core.entries import HEADER_ID, ViewKind, WidgetEntry
from widget_drawer.core.entry_store import EntryStore, NOT_FOUND
from widget_drawer.core.exceptions import InvalidOperationError, NotFoundError
from widget_drawer.core.selection_controller import SelectionController
from widget_drawer.core.size_model import dp_to_px, rendered_height
from widget_drawer.protocols import DrawerConfig, WidgetHost, get_drawer_config, get_widget_host
from widget_drawer.services.subscription_service import NO_VALUE, Subscription, SubscriptionService

logger = logging.getLogger(__name__)


class NotificationStream(Enum):
    """Notification streams a display surface can subscribe to."""
    INSERTED = "item_inserted"
    REMOVED = "item_removed"
    CHANGED = "item_changed"
    EDITING_CHANGED = "editing_changed"
    SELECTION_CHANGED = "selection_changed"


@dataclass(frozen=True)
class Presentation:
    """What the slot at one index should look like."""
    view_kind: ViewKind
    entry_id: int
    is_selected: bool
    rendered_height: Optional[int]
    is_full_span: bool
    selection_visible: bool


@dataclass
class ItemBinding:
    """Callbacks a display surface attached to one entry id."""
    entry_id: int
    on_selected: Optional[Callable[[bool], None]] = None
    on_visibility: Optional[Callable[[IndicatorTransition], None]] = None
    is_selected: bool = False


class ListPresenter(QObject):
    """Presentation and change relay for one drawer session."""

    item_inserted = pyqtSignal(int, object)  # index, WidgetEntry
    item_removed = pyqtSignal(int, object)  # previous index, WidgetEntry
    item_changed = pyqtSignal(int, object)  # index, WidgetEntry
    editing_changed = pyqtSignal(bool)
    selection_changed = pyqtSignal(object)  # int or None
    item_selection_changed = pyqtSignal(int, bool)  # index, is_selected
    selection_visibility_changed = pyqtSignal(bool)
    indicator_transition_requested = pyqtSignal(object)  # IndicatorTransition

    def __init__(self, store: EntryStore, selection: SelectionController,
                 host: Optional[WidgetHost] = None, config: Optional[DrawerConfig] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._store = store
        self._selection = selection
        self._host = host if host is not None else get_widget_host()
        if self._host is None:
            raise ValueError("ListPresenter needs a WidgetHost; pass one or call register_widget_host()")
        self._config = config if config is not None else get_drawer_config()
        self._bindings: Dict[int, ItemBinding] = {}

        self._store.item_inserted.connect(self._on_item_inserted)
        self._store.item_removed.connect(self._on_item_removed)
        self._store.item_changed.connect(self._on_item_changed)
        self._selection.editing_changed.connect(self._on_editing_changed)
        self._selection.selection_changed.connect(self._on_selection_changed)

    @property
    def store(self) -> EntryStore:
        return self._store

    @property
    def selection(self) -> SelectionController:
        return self._selection

    # ========== DISPLAY SURFACE QUERIES ==========

    def item_count(self) -> int:
        return self._store.size()

    def id_at(self, index: int) -> int:
        return self._store.id_at(index)

    def view_kind_at(self, index: int) -> ViewKind:
        return self._store.get(index).view_kind

    def presentation_at(self, index: int) -> Presentation:
        """Compute the presentation of the slot at index."""
        slot = self._store.get(index)
        if slot.view_kind is ViewKind.HEADER:
            return Presentation(
                view_kind=ViewKind.HEADER,
                entry_id=HEADER_ID,
                is_selected=False,
                rendered_height=None,
                is_full_span=True,
                selection_visible=False,
            )

        entry = slot.entry
        return Presentation(
            view_kind=ViewKind.WIDGET,
            entry_id=entry.id,
            is_selected=self._selection.is_selected(entry.id),
            rendered_height=self.rendered_height_of(entry),
            is_full_span=entry.is_full_width,
            selection_visible=self._selection.is_editing,
        )

    def rendered_height_of(self, entry: WidgetEntry) -> int:
        """Height for entry from the host's natural height and its size offset."""
        natural = dp_to_px(self._host_call("natural_height", entry.id), self._config.density)
        return rendered_height(natural, entry.size_offset)

    def create_view(self, index: int) -> Any:
        """Ask the host for the view of the slot at index. The header has none."""
        slot = self._store.get(index)
        if slot.view_kind is ViewKind.HEADER:
            return None
        return self._host_call("create_view", slot.id)

    def selected_entry(self) -> Optional[WidgetEntry]:
        """The entry whose id is selected, or None."""
        selected_id = self._selection.selected_id
        if selected_id is None:
            return None
        return self._store.entry_by_id(selected_id)

    # ========== TAP HANDLING ==========

    def handle_entry_tap(self, entry_id: int) -> bool:
        """Select entry_id when its body is tapped in edit mode.

        Returns:
            True if the selection changed
        """
        return self._select_if_editing(entry_id)

    def handle_indicator_tap(self, entry_id: int) -> bool:
        """Select entry_id when its selection indicator is tapped in edit mode."""
        return self._select_if_editing(entry_id)

    def _select_if_editing(self, entry_id: int) -> bool:
        if not self._selection.is_editing:
            return False
        previous = self._selection.selected_id
        self._selection.select(entry_id)
        return previous != entry_id

    # ========== SUBSCRIPTIONS ==========

    def subscribe(self, stream: NotificationStream, callback: Callable,
                  replay: Optional[bool] = None) -> Subscription:
        """
        Subscribe callback to one notification stream.

        Editing and selection streams replay their current value unless
        replay is False (or DrawerConfig.replay_on_subscribe is off).
        """
        current = NO_VALUE
        if stream is NotificationStream.EDITING_CHANGED:
            current = self._selection.is_editing
        elif stream is NotificationStream.SELECTION_CHANGED:
            current = self._selection.selected_id
        if replay is None:
            replay = self._config.replay_on_subscribe
        signal = getattr(self, stream.value)
        return SubscriptionService.subscribe(signal, callback, current, replay)

    def unsubscribe(self, subscription: Subscription) -> None:
        SubscriptionService.unsubscribe(subscription)

    # ========== ITEM BINDINGS ==========

    def bind(self, entry_id: int, on_selected: Optional[Callable[[bool], None]] = None,
             on_visibility: Optional[Callable[[IndicatorTransition], None]] = None) -> ItemBinding:
        """
        Bind display callbacks to an entry id.

        Rebinding an id replaces its callbacks. The callbacks receive the
        current state straight away.
        """
        if entry_id == HEADER_ID:
            raise InvalidOperationError("The header has no selection state to bind")
        if self._store.index_of_id(entry_id) == NOT_FOUND:
            raise NotFoundError(entry_id)

        if entry_id in self._bindings:
            logger.debug(f"Rebinding widget {entry_id}")
        binding = ItemBinding(
            entry_id=entry_id,
            on_selected=on_selected,
            on_visibility=on_visibility,
            is_selected=self._selection.is_selected(entry_id),
        )
        self._bindings[entry_id] = binding

        if on_selected is not None:
            on_selected(binding.is_selected)
        if on_visibility is not None:
            on_visibility(indicator_transition(self._selection.is_editing, self._config))
        return binding

    def unbind(self, entry_id: int) -> bool:
        """Release the binding for entry_id. Returns False if none existed."""
        return self._bindings.pop(entry_id, None) is not None

    def is_bound(self, entry_id: int) -> bool:
        return entry_id in self._bindings

    def binding_count(self) -> int:
        return len(self._bindings)

    @contextmanager
    def binding(self, entry_id: int, on_selected: Optional[Callable[[bool], None]] = None,
                on_visibility: Optional[Callable[[IndicatorTransition], None]] = None):
        """Context manager that binds on entry and releases on exit."""
        handle = self.bind(entry_id, on_selected, on_visibility)
        try:
            yield handle
        finally:
            # Only release if nobody rebound the id inside the block
            if self._bindings.get(entry_id) is handle:
                self.unbind(entry_id)

    def dispose(self) -> None:
        """Disconnect from the store and controller and drop every binding."""
        self._store.item_inserted.disconnect(self._on_item_inserted)
        self._store.item_removed.disconnect(self._on_item_removed)
        self._store.item_changed.disconnect(self._on_item_changed)
        self._selection.editing_changed.disconnect(self._on_editing_changed)
        self._selection.selection_changed.disconnect(self._on_selection_changed)
        self._bindings.clear()
        logger.debug("ListPresenter disposed")

    # ========== RELAYS ==========

    def _on_item_inserted(self, index: int, entry: WidgetEntry) -> None:
        self.item_inserted.emit(index, entry)

    def _on_item_removed(self, index: int, entry: WidgetEntry) -> None:
        if self.unbind(entry.id):
            logger.debug(f"Released binding of removed widget {entry.id}")
        self.item_removed.emit(index, entry)

    def _on_item_changed(self, index: int, entry: WidgetEntry) -> None:
        self.item_changed.emit(index, entry)

    def _on_editing_changed(self, editing: bool) -> None:
        transition = indicator_transition(editing, self._config)
        for binding in list(self._bindings.values()):
            if binding.on_visibility is not None:
                binding.on_visibility(transition)
        self.selection_visibility_changed.emit(editing)
        self.indicator_transition_requested.emit(transition)
        self.editing_changed.emit(editing)

    def _on_selection_changed(self, selected_id: Optional[int]) -> None:
        for binding in list(self._bindings.values()):
            is_selected = selected_id is not None and binding.entry_id == selected_id
            if is_selected == binding.is_selected:
                continue
            binding.is_selected = is_selected
            if binding.on_selected is not None:
                binding.on_selected(is_selected)
            index = self._store.index_of_id(binding.entry_id)
            if index != NOT_FOUND:
                self.item_selection_changed.emit(index, is_selected)
        self.selection_changed.emit(selected_id)

    def _host_call(self, method: str, widget_id: int) -> Any:
        try:
            return getattr(self._host, method)(widget_id)
        except Exception as e:
            logger.error(f"Widget host {method}({widget_id}) failed: {e}")
            raise
