"""Bounded worker pool that keeps CPU-heavy parsing off the request loop."""

import asyncio
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from docextract.config import settings
from docextract.core.exceptions import ExtractionPoolSaturatedError
from docextract.core.logging import get_logger

logger = get_logger(__name__)


class ExtractionWorkerPool:
    """Thread pool with admission control.

    At most max_workers jobs run and at most queue_size more wait; anything
    beyond that is rejected immediately instead of piling up.
    """

    def __init__(self, max_workers: int | None = None, queue_size: int | None = None):
        self.max_workers = max_workers or settings.extraction_workers
        self.queue_size = settings.extraction_queue_size if queue_size is None else queue_size
        self.capacity = self.max_workers + self.queue_size
        self._slots = threading.BoundedSemaphore(self.capacity)
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="extraction"
        )

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        if not self._slots.acquire(blocking=False):
            logger.warning(f"Extraction pool saturated ({self.capacity} jobs), rejecting")
            raise ExtractionPoolSaturatedError(self.capacity)

        try:
            future = self._executor.submit(fn, *args, **kwargs)
        except RuntimeError:
            self._slots.release()
            raise
        future.add_done_callback(lambda _: self._slots.release())
        return future

    async def run(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        return await asyncio.wrap_future(self.submit(fn, *args, **kwargs))

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=True)


_pool: ExtractionWorkerPool | None = None


def get_worker_pool() -> ExtractionWorkerPool:
    """Lazy-initialize the process-wide pool."""
    global _pool
    if _pool is None:
        _pool = ExtractionWorkerPool()
    return _pool


def shutdown_worker_pool() -> None:
    global _pool
    if _pool is not None:
        _pool.shutdown(wait=False)
        _pool = None
