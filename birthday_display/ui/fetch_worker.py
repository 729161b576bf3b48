from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from birthday_display.services.image_service import ImageService
from birthday_display.utils.concurrency import DEFAULT_CONCURRENCY_LIMIT, run_limited
from typing import Optional
import asyncio
import logging
import queue
import threading

logger = logging.getLogger(__name__)

WORKER_TIMEOUT_SECONDS = 5

class ImageFetchWorker:
    """
    Runs image downloads on an asyncio event loop owned by a background thread.

    Every url becomes an independent task. Finished downloads are put on a thread safe
    queue as (url, bytes or None), the UI thread picks them up with drain(). The loop
    and the HTTP session are only created once the first url is submitted.
    """

    def __init__(self, image_service: ImageService, concurrency: int = DEFAULT_CONCURRENCY_LIMIT):
        self.image_service = image_service
        self.concurrency = concurrency
        self.results: "queue.Queue[tuple[str, bytes | None]]" = queue.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._futures: dict[str, Future] = {}
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._stopped

    def start(self):
        """Start the loop thread and open the HTTP session on it"""
        if self._thread is not None or self._stopped:
            return

        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run_loop, name="image-fetch", daemon=True)
        self._thread.start()

        asyncio.run_coroutine_threadsafe(self._startup(), self._loop).result(timeout=WORKER_TIMEOUT_SECONDS)
        logger.debug("Image fetch worker started")

    def submit(self, url: str) -> bool:
        """Schedule a download, returns False when the url is already scheduled or the worker is stopped"""
        if self._stopped or url in self._futures:
            return False
        self.start()

        self._futures[url] = asyncio.run_coroutine_threadsafe(self._fetch(url), self._loop)
        return True

    def drain(self) -> list[tuple[str, bytes | None]]:
        """All results delivered since the last call, never blocks"""
        results = []
        while True:
            try:
                results.append(self.results.get_nowait())
            except queue.Empty:
                return results

    def stop(self):
        """Cancel unfinished downloads, close the session and end the loop thread"""
        if self._stopped:
            return
        self._stopped = True

        if self._loop is None:
            return

        shutdown = asyncio.run_coroutine_threadsafe(self._shutdown(), self._loop)
        try:
            shutdown.result(timeout=WORKER_TIMEOUT_SECONDS)
        except FutureTimeoutError:
            logger.warning("Image fetch worker did not shut down in time")
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=WORKER_TIMEOUT_SECONDS)

        # late results are discarded
        self.drain()
        logger.debug("Image fetch worker stopped")

    def _run_loop(self):
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()

    async def _startup(self):
        self._semaphore = asyncio.Semaphore(self.concurrency)
        await self.image_service.client.start()

    async def _fetch(self, url: str):
        data = await run_limited(self._semaphore, self.image_service.fetch_image_or_none(url))
        self.results.put((url, data))

    async def _shutdown(self):
        tasks = [task for task in asyncio.all_tasks() if task is not asyncio.current_task()]
        for task in tasks:
            task.cancel()
        if tasks:
            logger.info(f"Cancelled {len(tasks)} unfinished image downloads")
        await asyncio.gather(*tasks, return_exceptions=True)
        await self.image_service.client.close()
