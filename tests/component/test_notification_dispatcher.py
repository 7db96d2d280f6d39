"""
Component Tests for NotificationDispatcher

The real dispatcher with its worker task, pushing into in-memory stores.
"""
import asyncio
from contextlib import asynccontextmanager

import pytest

from crowdfund.core.exceptions import StorageError
from crowdfund.models.notification import NotificationTargetType
from crowdfund.schemas.notification import NotificationCreate
from crowdfund.services.notification_dispatcher import NotificationDispatcher
from crowdfund.services.notification_service import NotificationService


def notice(title="Hello", target_type=NotificationTargetType.ALL_USERS, detail=None):
    return NotificationCreate(title=title, content="body", target_type=target_type, detail=detail)


@pytest.fixture
def scopes():
    """Counts how many service scopes the dispatcher opened."""
    return []


@pytest.fixture
def make_dispatcher(notification_store, scopes):
    def factory(**kwargs):
        @asynccontextmanager
        async def scope():
            scopes.append(1)
            yield NotificationService(notification_store)

        kwargs.setdefault("retry_delay", 0)
        dispatcher = NotificationDispatcher(scope, **kwargs)
        return dispatcher

    return factory


class TestDelivery:

    @pytest.mark.asyncio
    async def test_submitted_notifications_are_pushed(self, make_dispatcher, db):
        dispatcher = make_dispatcher()
        dispatcher.start()

        assert dispatcher.submit_all([notice("one"), notice("two")]) == 2
        await dispatcher.join()
        await dispatcher.stop()

        assert sorted(n.title for n in db.notifications.values()) == ["one", "two"]
        assert dispatcher.delivered == 2
        assert not dispatcher.running

    @pytest.mark.asyncio
    async def test_each_job_gets_its_own_scope(self, make_dispatcher, scopes):
        dispatcher = make_dispatcher()
        dispatcher.start()

        dispatcher.submit_all([notice("a"), notice("b"), notice("c")])
        await dispatcher.stop()

        assert len(scopes) == 3

    @pytest.mark.asyncio
    async def test_stop_drains_the_queue(self, make_dispatcher, db):
        dispatcher = make_dispatcher()
        dispatcher.submit(notice("queued before start"))
        dispatcher.start()

        await dispatcher.stop()

        assert [n.title for n in db.notifications.values()] == ["queued before start"]


class TestFailures:

    @pytest.mark.asyncio
    async def test_retryable_error_is_retried(self, make_dispatcher, notification_store, db):
        db.add_subscription("a@example.com")
        notification_store.fail_on_audience = StorageError("Database temporarily unavailable", retryable=True)
        dispatcher = make_dispatcher(max_retries=3)
        dispatcher.start()

        dispatcher.submit(notice("retry me", NotificationTargetType.NEW_CAMPAIGN))
        await dispatcher.stop()

        assert dispatcher.delivered == 1
        assert dispatcher.failed == 0
        [notification] = db.notifications.values()
        assert db.members_of(notification.id) == ["a@example.com"]

    @pytest.mark.asyncio
    async def test_permanent_error_is_not_retried(self, make_dispatcher, notification_store, scopes, db):
        notification_store.fail_on_audience = StorageError("Database operation failed", retryable=False)
        dispatcher = make_dispatcher(max_retries=3)
        dispatcher.start()

        dispatcher.submit(notice("broken", NotificationTargetType.NEW_CAMPAIGN))
        await dispatcher.stop()

        assert dispatcher.failed == 1
        assert len(scopes) == 1
        assert db.notifications == {}

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_the_worker(self, make_dispatcher, db):
        dispatcher = make_dispatcher()
        dispatcher.start()

        # Unknown campaign: NotFoundError inside the worker
        dispatcher.submit(notice("orphan", NotificationTargetType.FUNDRAISERS, 999))
        dispatcher.submit(notice("fine"))
        await dispatcher.stop()

        assert dispatcher.failed == 1
        assert dispatcher.delivered == 1
        assert [n.title for n in db.notifications.values()] == ["fine"]

    @pytest.mark.asyncio
    async def test_full_queue_drops_without_blocking(self, make_dispatcher):
        dispatcher = make_dispatcher(max_size=2)

        results = [dispatcher.submit(notice(str(i))) for i in range(4)]

        assert results == [True, True, False, False]
        assert dispatcher.dropped == 2

        dispatcher.start()
        await dispatcher.stop()
        assert dispatcher.delivered == 2

    @pytest.mark.asyncio
    async def test_stop_times_out_on_stuck_delivery(self, notification_store):
        release = asyncio.Event()

        @asynccontextmanager
        async def stuck_scope():
            await release.wait()
            yield NotificationService(notification_store)

        dispatcher = NotificationDispatcher(stuck_scope)
        dispatcher.start()
        dispatcher.submit(notice())

        await dispatcher.stop(timeout=0.05)

        assert not dispatcher.running
        assert dispatcher.delivered == 0
