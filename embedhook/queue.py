"""Paced delivery of many independently built messages.

Webhook endpoints are rate limited (roughly two executions every two
seconds per webhook), so :class:`WebhookQueue` sends at most
``batch_size`` messages per ``interval``. Each message is still its own
POST, and a failed message is reported, not retried.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable

import httpx

from embedhook.dispatcher import DEFAULT_TIMEOUT, WebhookDispatcher
from embedhook.errors import WebhookError
from embedhook.message import Message

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 2
DEFAULT_INTERVAL = 2.0


@dataclass
class QueueResult:
    """Outcome of one queued delivery: a response or the error raised."""

    message: Message
    response: httpx.Response | None = None
    error: WebhookError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WebhookQueue:
    """FIFO of messages drained at a fixed pace."""

    def __init__(
        self,
        dispatcher: WebhookDispatcher | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        interval: float = DEFAULT_INTERVAL,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be a positive integer")
        if interval < 0:
            raise ValueError("interval must be a non-negative number")
        self.batch_size = batch_size
        self.interval = interval
        self._external_dispatcher = dispatcher is not None
        self._dispatcher = dispatcher or WebhookDispatcher(timeout=timeout)
        self._pending: deque[Message] = deque()
        self._task: asyncio.Task | None = None

    def __len__(self) -> int:
        return len(self._pending)

    # ── enqueue ──────────────────────────────────────────────────────

    def enqueue(self, message: Message) -> None:
        self._pending.append(message.copy())

    def enqueue_many(self, messages: Iterable[Message]) -> None:
        self._pending.extend(m.copy() for m in messages)

    # ── delivery ─────────────────────────────────────────────────────

    async def _deliver(self, message: Message) -> QueueResult:
        try:
            resp = await self._dispatcher.send(message)
        except WebhookError as exc:
            logger.error("Queued webhook to %s failed: %s", message.endpoint, exc)
            return QueueResult(message, error=exc)
        return QueueResult(message, response=resp)

    async def _send_batch(self) -> list[QueueResult]:
        results: list[QueueResult] = []
        # the queue may be refilled or emptied while a delivery is awaited
        while len(results) < self.batch_size and self._pending:
            message = self._pending.popleft()
            results.append(await self._deliver(message))
        return results

    async def drain(self) -> list[QueueResult]:
        """Send everything queued, pacing batches, and return the outcomes.

        Raises :class:`RuntimeError` while the background task from
        :meth:`start` owns the queue.
        """
        if self._task is not None and not self._task.done():
            raise RuntimeError("drain() cannot run while the queue is started")
        results: list[QueueResult] = []
        while self._pending:
            results.extend(await self._send_batch())
            if self._pending:
                await asyncio.sleep(self.interval)
        logger.debug("Webhook queue drained (%d sent)", len(results))
        return results

    async def _run_forever(self) -> None:
        while True:
            await self._send_batch()
            await asyncio.sleep(self.interval)

    # ── lifecycle ────────────────────────────────────────────────────

    def start(self) -> asyncio.Task:
        """Run the queue in the background until :meth:`stop` is awaited."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run_forever())
        return self._task

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if not self._external_dispatcher:
            await self._dispatcher.close()
