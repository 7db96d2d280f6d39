"""
Component Test Mocks

In-memory implementations of the store interfaces and a recording dispatcher.
These replace PostgreSQL and the background worker in component and API tests.
"""

from .memory_stores import (
    InMemoryDatabase,
    InMemoryCampaignStore,
    InMemoryDonationStore,
    InMemoryNotificationStore,
    InMemorySubscriptionStore,
    InMemoryWalletStore,
)
from .dispatcher_mock import RecordingDispatcher

__all__ = [
    'InMemoryDatabase',
    'InMemoryCampaignStore',
    'InMemoryDonationStore',
    'InMemoryNotificationStore',
    'InMemorySubscriptionStore',
    'InMemoryWalletStore',
    'RecordingDispatcher',
]
