"""
Subscription Service.

Wraps Qt signal connections in explicit subscription handles:
1. subscribe() returns a Subscription that disposes exactly once
2. Optional replay of the latest value to the new subscriber
3. Context managers guarantee release
"""

from contextlib import contextmanager
from typing import Any, Callable, Optional
import logging

from widget_drawer.protocols import get_drawer_config

logger = logging.getLogger(__name__)

# Marks "no current value to replay"
NO_VALUE = object()


class Subscription:
    """Handle for one callback connected to one bound signal."""

    def __init__(self, signal: Any, callback: Callable):
        self._signal = signal
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    @property
    def callback(self) -> Callable:
        return self._callback

    def dispose(self) -> None:
        """Disconnect the callback. Later calls do nothing."""
        if not self._active:
            return
        self._active = False
        self._signal.disconnect(self._callback)
        logger.debug(f"Disposed subscription for {getattr(self._callback, '__name__', self._callback)}")

    def __enter__(self) -> 'Subscription':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()


class SubscriptionService:
    """
    Service for connecting observers to drawer signals.

    Examples:
        # Subscribe and receive the current value straight away:
        sub = SubscriptionService.subscribe(
            controller.editing_changed, on_editing, current=controller.is_editing
        )
        ...
        sub.dispose()

        # Scoped subscription:
        with SubscriptionService.subscription(store.item_inserted, on_inserted):
            store.add(entry)
    """

    @staticmethod
    def subscribe(signal: Any, callback: Callable, current: Any = NO_VALUE,
                  replay: Optional[bool] = None) -> Subscription:
        """
        Connect callback to a bound signal.

        Args:
            signal: Bound pyqtSignal (e.g. controller.editing_changed)
            callback: Observer called with the signal arguments
            current: Latest value to replay, or NO_VALUE for event streams
            replay: Override DrawerConfig.replay_on_subscribe

        Returns:
            Subscription handle
        """
        signal.connect(callback)
        subscription = Subscription(signal, callback)

        if replay is None:
            replay = get_drawer_config().replay_on_subscribe
        if replay and current is not NO_VALUE:
            callback(current)
        return subscription

    @staticmethod
    def unsubscribe(subscription: Subscription) -> None:
        subscription.dispose()

    @staticmethod
    @contextmanager
    def subscription(signal: Any, callback: Callable, current: Any = NO_VALUE,
                     replay: Optional[bool] = None):
        """Context manager that subscribes on entry and disposes on exit."""
        handle = SubscriptionService.subscribe(signal, callback, current, replay)
        try:
            yield handle
        finally:
            handle.dispose()

