"""
Background notification dispatch.

Services hand notifications to a bounded queue and return immediately. A single
worker task pushes them through NotificationService using its own session, so
delivery outlives the request that triggered it. Failures are logged and never
reach the caller.
"""
import asyncio
import contextlib
import logging
from typing import AsyncContextManager, Callable, Iterable, Optional

from crowdfund.core.exceptions import StorageError
from crowdfund.schemas.notification import NotificationCreate
from crowdfund.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

ServiceScope = Callable[[], AsyncContextManager[NotificationService]]


class NotificationDispatcher:
    """Bounded work queue consumed by one worker."""

    def __init__(
        self,
        service_scope: ServiceScope,
        max_size: int = 1000,
        max_retries: int = 3,
        retry_delay: float = 0.5
    ):
        self.service_scope = service_scope
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=max_size)
        self._worker: Optional[asyncio.Task] = None

        # Counters
        self.delivered = 0
        self.failed = 0
        self.dropped = 0

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def submit(self, request: NotificationCreate) -> bool:
        """Queue a notification without waiting. Returns False if it was dropped."""
        try:
            self.queue.put_nowait(request)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(f"Notification queue full, dropped '{request.title}'")
            return False
        return True

    def submit_all(self, requests: Iterable[NotificationCreate]) -> int:
        return sum(1 for request in requests if self.submit(request))

    def start(self) -> None:
        if self.running:
            return
        self._worker = asyncio.create_task(self._run(), name="notification-dispatcher")
        logger.info("Notification dispatcher started")

    async def join(self) -> None:
        """Wait until every queued notification has been handled."""
        await self.queue.join()

    async def stop(self, timeout: float = 10.0) -> None:
        """Drain the queue (up to `timeout` seconds), then stop the worker."""
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(self.queue.join(), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Stopping dispatcher with {self.queue.qsize()} notification(s) pending")
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None
        logger.info(
            f"Notification dispatcher stopped (delivered={self.delivered}, "
            f"failed={self.failed}, dropped={self.dropped})"
        )

    async def _run(self) -> None:
        while True:
            request = await self.queue.get()
            try:
                await self._deliver(request)
                self.delivered += 1
            except Exception:
                self.failed += 1
                logger.exception(f"Failed to push notification '{request.title}'")
            finally:
                self.queue.task_done()

    async def _deliver(self, request: NotificationCreate) -> None:
        attempt = 1
        while True:
            try:
                async with self.service_scope() as service:
                    await service.create_and_push(request)
                return
            except StorageError as e:
                if not e.retryable or attempt >= self.max_retries:
                    raise
                logger.warning(
                    f"Pushing '{request.title}' failed ({e.message}), "
                    f"attempt {attempt}/{self.max_retries}. Retrying..."
                )
                await asyncio.sleep(self.retry_delay * attempt)
                attempt += 1
