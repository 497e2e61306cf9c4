"""
Service layer for the drawer.

Subscription handling and the list presenter the display surface talks to.
"""

from .subscription_service import NO_VALUE, Subscription, SubscriptionService
from .list_presenter import ItemBinding, ListPresenter, NotificationStream, Presentation

__all__ = [
    "NO_VALUE",
    "Subscription",
    "SubscriptionService",
    "ItemBinding",
    "ListPresenter",
    "NotificationStream",
    "Presentation",
]
