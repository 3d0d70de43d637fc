from __future__ import annotations

import asyncio
import logging
from typing import NamedTuple

from slack_relay.config import BotConfig
from slack_relay.models import InnerEvent
from slack_relay.workflows.mention.workflow import MentionWorkflow

logger = logging.getLogger("slack_relay")


class MentionJob(NamedTuple):
    event: InnerEvent
    config: BotConfig


class AsyncWebhookProcessor:
    """Drains queued app_mentions off the request path.

    Jobs already queued when ``stop`` is called still run: the shutdown
    sentinels are queued behind them.
    """

    def __init__(
        self,
        mention_workflow: MentionWorkflow,
        worker_count: int = 2,
        max_queue_size: int = 1000,
    ) -> None:
        self.mention_workflow = mention_workflow
        self.worker_count = max(1, worker_count)
        self.queue: asyncio.Queue[MentionJob | None] = asyncio.Queue(maxsize=max_queue_size)
        self.workers: list[asyncio.Task[None]] = []
        self.running = False

    async def start(self) -> None:
        if self.running:
            return
        self.running = True
        self.workers = [
            asyncio.create_task(self._drain(idx), name=f"mention-worker-{idx}")
            for idx in range(self.worker_count)
        ]
        logger.info("Started %s mention workers", self.worker_count)

    async def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        for _ in self.workers:
            await self.queue.put(None)
        await asyncio.gather(*self.workers, return_exceptions=True)
        self.workers.clear()

    def enqueue(self, event: InnerEvent, config: BotConfig) -> bool:
        try:
            self.queue.put_nowait(MentionJob(event, config))
        except asyncio.QueueFull:
            logger.error("Webhook queue is full. Dropping app_mention in channel=%s", event.channel)
            return False
        return True

    async def _drain(self, worker_id: int) -> None:
        while (job := await self.queue.get()) is not None:
            try:
                await asyncio.to_thread(self.mention_workflow.process, job.event, job.config)
            except Exception:
                logger.exception("Worker %s failed on app_mention in channel=%s", worker_id, job.event.channel)
            finally:
                self.queue.task_done()
        self.queue.task_done()
