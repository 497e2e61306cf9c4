"""Tests for the presenter and subscription services."""

import pytest

from widget_drawer.core import HEADER_ID, STEP, ViewKind, WidgetEntry


def test_header_presentation(presenter):
    presentation = presenter.presentation_at(0)

    assert presentation.view_kind is ViewKind.HEADER
    assert presentation.entry_id == HEADER_ID
    assert presentation.is_full_span is True
    assert presentation.is_selected is False
    assert presentation.rendered_height is None
    assert presenter.create_view(0) is None


def test_widget_presentation(presenter, store, host):
    store.add(WidgetEntry(5, size_offset=0, is_full_width=True))
    store.add(WidgetEntry(6))

    first = presenter.presentation_at(1)
    assert first.view_kind is ViewKind.WIDGET
    assert first.entry_id == 5
    assert first.rendered_height == 120 + STEP
    assert first.is_full_span is True
    assert first.is_selected is False
    assert first.selection_visible is False

    second = presenter.presentation_at(2)
    assert second.rendered_height == 80
    assert second.is_full_span is False

    assert presenter.item_count() == 3
    assert presenter.id_at(2) == 6
    assert presenter.view_kind_at(0) is ViewKind.HEADER
    assert presenter.view_kind_at(1) is ViewKind.WIDGET
    assert presenter.create_view(1) == "view-5"
    assert host.created == [5]


def test_presentation_uses_density(store, selection, host):
    from widget_drawer.protocols import DrawerConfig
    from widget_drawer.services import ListPresenter

    presenter = ListPresenter(store, selection, host=host, config=DrawerConfig(density=2.0))
    store.add(WidgetEntry(6, size_offset=-2))

    assert presenter.presentation_at(1).rendered_height == 160 - STEP


def test_presentation_tracks_selection(presenter, store, selection):
    store.add_all([WidgetEntry(5), WidgetEntry(6)])
    selection.set_editing(True)
    selection.select(6)

    assert presenter.presentation_at(1).is_selected is False
    assert presenter.presentation_at(2).is_selected is True
    assert presenter.presentation_at(2).selection_visible is True
    assert presenter.selected_entry() == WidgetEntry(6)


def test_selection_outside_edit_mode_has_no_visible_indicator(presenter, store, selection):
    store.add(WidgetEntry(5))
    selection.select(5)

    assert presenter.presentation_at(1).selection_visible is False


def test_selected_entry_for_removed_id(presenter, store, selection):
    store.add(WidgetEntry(5))
    selection.set_editing(True)
    selection.select(5)
    store.remove_by_id(5)

    assert selection.selected_id == 5
    assert presenter.selected_entry() is None


def test_taps_only_select_while_editing(presenter, store, selection):
    store.add_all([WidgetEntry(5), WidgetEntry(6)])

    assert presenter.handle_entry_tap(5) is False
    assert presenter.handle_indicator_tap(5) is False
    assert selection.selected_id is None

    selection.set_editing(True)
    assert presenter.handle_entry_tap(5) is True
    assert selection.selected_id == 5
    assert presenter.handle_entry_tap(5) is False
    assert presenter.handle_indicator_tap(6) is True
    assert selection.selected_id == 6


def test_presenter_relays_store_changes(presenter, store):
    from widget_drawer.services import NotificationStream

    inserted = []
    removed = []
    changed = []
    presenter.subscribe(NotificationStream.INSERTED, lambda i, e: inserted.append((i, e.id)))
    presenter.subscribe(NotificationStream.REMOVED, lambda i, e: removed.append((i, e.id)))
    presenter.subscribe(NotificationStream.CHANGED, lambda i, e: changed.append((i, e.size_offset)))

    store.add_all([WidgetEntry(1), WidgetEntry(2)])
    store.replace(WidgetEntry(2, size_offset=3))
    store.remove_at_index(1)

    assert inserted == [(1, 1), (2, 2)]
    assert changed == [(2, 3)]
    assert removed == [(1, 1)]


def test_subscribe_replays_current_value(presenter, selection):
    from widget_drawer.services import NotificationStream

    editing = []
    selected = []
    presenter.subscribe(NotificationStream.EDITING_CHANGED, editing.append)
    presenter.subscribe(NotificationStream.SELECTION_CHANGED, selected.append)
    assert editing == [False]
    assert selected == [None]

    selection.set_editing(True)
    selection.select(3)
    assert editing == [False, True]
    assert selected == [None, 3]


def test_subscribe_without_replay(presenter, store, selection, host):
    from widget_drawer.protocols import DrawerConfig
    from widget_drawer.services import ListPresenter, NotificationStream

    editing = []
    presenter.subscribe(NotificationStream.EDITING_CHANGED, editing.append, replay=False)
    assert editing == []

    quiet = ListPresenter(store, selection, host=host, config=DrawerConfig(replay_on_subscribe=False))
    selected = []
    quiet.subscribe(NotificationStream.SELECTION_CHANGED, selected.append)
    assert selected == []


def test_unsubscribe_stops_delivery(presenter, store):
    from widget_drawer.services import NotificationStream

    inserted = []
    subscription = presenter.subscribe(NotificationStream.INSERTED, lambda i, e: inserted.append(e.id))
    store.add(WidgetEntry(1))
    presenter.unsubscribe(subscription)
    subscription.dispose()
    store.add(WidgetEntry(2))

    assert inserted == [1]
    assert subscription.active is False


def test_editing_change_reaches_visibility_listeners(presenter, selection):
    visibility = []
    transitions = []
    presenter.selection_visibility_changed.connect(visibility.append)
    presenter.indicator_transition_requested.connect(transitions.append)

    selection.set_editing(True)
    selection.set_editing(False)

    assert visibility == [True, False]
    assert [t.visible for t in transitions] == [True, False]
    assert transitions[1].hide_on_finish is True


def test_binding_receives_current_state_and_updates(presenter, store, selection):
    store.add_all([WidgetEntry(5), WidgetEntry(6)])
    checks = []
    transitions = []
    index_events = []
    presenter.item_selection_changed.connect(lambda index, value: index_events.append((index, value)))

    presenter.bind(5, on_selected=checks.append, on_visibility=transitions.append)
    assert checks == [False]
    assert [t.visible for t in transitions] == [False]

    selection.set_editing(True)
    selection.select(5)
    selection.select(6)

    assert checks == [False, True, False]
    assert [t.visible for t in transitions] == [False, True]
    assert index_events == [(1, True), (1, False)]


def test_rebinding_replaces_callbacks(presenter, store, selection):
    store.add(WidgetEntry(5))
    old = []
    new = []

    presenter.bind(5, on_selected=old.append)
    presenter.bind(5, on_selected=new.append)
    assert presenter.binding_count() == 1

    selection.set_editing(True)
    selection.select(5)

    assert old == [False]
    assert new == [False, True]


def test_binding_released_when_entry_removed(presenter, store):
    store.add_all([WidgetEntry(5), WidgetEntry(6)])
    presenter.bind(5)
    presenter.bind(6)

    store.remove_by_id(5)

    assert not presenter.is_bound(5)
    assert presenter.is_bound(6)
    assert presenter.unbind(6) is True
    assert presenter.unbind(6) is False


def test_binding_rejects_header_and_unknown_ids(presenter):
    from widget_drawer.core import InvalidOperationError, NotFoundError

    with pytest.raises(InvalidOperationError):
        presenter.bind(HEADER_ID)
    with pytest.raises(NotFoundError):
        presenter.bind(42)


def test_binding_context_manager_releases(presenter, store):
    store.add(WidgetEntry(5))

    with presenter.binding(5) as binding:
        assert binding.entry_id == 5
        assert presenter.is_bound(5)
    assert not presenter.is_bound(5)


def test_host_failures_propagate(store, selection):
    from widget_drawer.protocols import WidgetHost
    from widget_drawer.services import ListPresenter

    class BrokenHost(WidgetHost):
        def create_view(self, widget_id):
            raise RuntimeError("inflate failed")

        def natural_height(self, widget_id):
            raise RuntimeError("no provider info")

    presenter = ListPresenter(store, selection, host=BrokenHost())
    store.add(WidgetEntry(1))

    with pytest.raises(RuntimeError, match="no provider info"):
        presenter.presentation_at(1)
    with pytest.raises(RuntimeError, match="inflate failed"):
        presenter.create_view(1)


def test_presenter_needs_a_host(store, selection, host):
    from widget_drawer.protocols import register_widget_host
    from widget_drawer.services import ListPresenter

    with pytest.raises(ValueError):
        ListPresenter(store, selection)

    register_widget_host(host)
    presenter = ListPresenter(store, selection)
    store.add(WidgetEntry(5))
    assert presenter.presentation_at(1).rendered_height == 120


def test_dispose_disconnects(presenter, store, selection):
    store.add(WidgetEntry(5))
    presenter.bind(5)
    inserted = []
    presenter.item_inserted.connect(lambda i, e: inserted.append(e.id))

    presenter.dispose()
    store.add(WidgetEntry(6))
    selection.set_editing(True)

    assert inserted == []
    assert presenter.binding_count() == 0


def test_subscription_service_scoped_subscription(selection):
    from widget_drawer.services import SubscriptionService

    seen = []
    with SubscriptionService.subscription(selection.editing_changed, seen.append,
                                          current=selection.is_editing) as handle:
        selection.set_editing(True)
        assert handle.active
    selection.set_editing(False)

    assert seen == [False, True]


def test_display_surface_can_mutate_from_relayed_streams(presenter, store):
    """Mutations made by stream subscribers are applied after the notification."""
    from widget_drawer.services import NotificationStream

    inserted = []
    removed = []
    presenter.subscribe(
        NotificationStream.INSERTED,
        lambda index, entry: store.add(WidgetEntry(entry.id + 100)) if entry.id < 100 else None,
    )
    presenter.subscribe(NotificationStream.INSERTED, lambda index, entry: inserted.append((index, entry.id)))
    presenter.subscribe(
        NotificationStream.REMOVED,
        lambda index, entry: store.remove_by_id(entry.id + 100) if entry.id < 100 else None,
    )
    presenter.subscribe(NotificationStream.REMOVED, lambda index, entry: removed.append((index, entry.id)))

    store.add(WidgetEntry(1))
    assert store.ids() == [1, 101]
    assert inserted == [(1, 1), (2, 101)]

    presenter.bind(101)
    store.remove_by_id(1)
    assert store.ids() == []
    assert removed == [(1, 1), (1, 101)]
    assert not presenter.is_bound(101)
    assert store.pending_mutations() == 0


def test_relayed_mutation_failure_is_reported(presenter, store):
    from widget_drawer.core import DuplicateIdError
    from widget_drawer.services import NotificationStream

    failures = []
    store.add(WidgetEntry(5))
    store.deferred_mutation_failed.connect(failures.append)
    presenter.subscribe(NotificationStream.CHANGED, lambda index, entry: store.add(WidgetEntry(5)))

    store.replace(WidgetEntry(5, size_offset=2))

    assert store.entry_by_id(5).size_offset == 2
    assert presenter.item_count() == 2
    assert [type(e) for e in failures] == [DuplicateIdError]


def test_falsy_host_and_config_are_kept(store, selection, host):
    from widget_drawer.protocols import DrawerConfig, register_widget_host
    from widget_drawer.services import ListPresenter

    class EmptyHost(type(host)):
        def __len__(self):
            return 0

    class FalsyConfig(DrawerConfig):
        def __bool__(self):
            return False

    register_widget_host(host)
    presenter = ListPresenter(store, selection, host=EmptyHost(default_height=40),
                              config=FalsyConfig(density=2.0))
    store.add(WidgetEntry(9))

    assert presenter.presentation_at(1).rendered_height == 80
