"""
Client-side status polling for thumbnail generation.

``ThumbnailPoller`` re-fetches one thumbnail on a fixed interval until it
reaches a terminal state. Each ``start()`` replaces the running task, and
updates are only delivered for the id that is currently being watched.
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

import httpx

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[dict], Union[None, Awaitable[None]]]


def is_terminal(thumbnail: dict) -> bool:
    return bool(thumbnail.get("image_url")) or not thumbnail.get("is_generating", True)


class ThumbnailPoller:
    def __init__(
        self,
        client: httpx.AsyncClient,
        on_update: UpdateCallback,
        interval: float = 5.0,
        path_template: str = "/api/thumbnail/{id}",
    ):
        self.client = client
        self.on_update = on_update
        self.interval = interval
        self.path_template = path_template
        self.thumbnail_id: Optional[str] = None
        self.last: Optional[dict] = None
        self.error: Optional[Exception] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, thumbnail_id: str) -> None:
        """Begin watching ``thumbnail_id``. Must be called from a running event loop."""
        if not thumbnail_id:
            raise ValueError("thumbnail_id is required")
        if self._task is not None and not self._task.done():
            self._task.cancel()

        self.thumbnail_id = thumbnail_id
        self.last = None
        self.error = None
        self._task = asyncio.create_task(self._run(thumbnail_id))

    async def stop(self) -> None:
        task, self._task = self._task, None
        self.thumbnail_id = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def wait(self) -> Optional[dict]:
        """Wait for the current task to finish and return the last fetched record."""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        return self.last

    async def _fetch(self, thumbnail_id: str) -> dict:
        response = await self.client.get(self.path_template.format(id=thumbnail_id))
        response.raise_for_status()
        return response.json()["thumbnail"]

    async def _run(self, thumbnail_id: str) -> None:
        while True:
            try:
                thumbnail = await self._fetch(thumbnail_id)
            except (httpx.HTTPError, KeyError, ValueError) as e:
                logger.warning("Stopped polling after fetch error", extra={"thumbnail_id": thumbnail_id}, exc_info=True)
                if self.thumbnail_id == thumbnail_id:
                    self.error = e
                return

            # a newer start() or stop() took over while we were waiting
            if self.thumbnail_id != thumbnail_id:
                return

            self.last = thumbnail
            try:
                result = self.on_update(thumbnail)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error("Update callback failed, stopped polling", extra={"thumbnail_id": thumbnail_id}, exc_info=True)
                self.error = e
                return

            if is_terminal(thumbnail):
                logger.info(
                    "Thumbnail reached terminal state",
                    extra={"thumbnail_id": thumbnail_id, "image_url": thumbnail.get("image_url")},
                )
                return

            await asyncio.sleep(self.interval)
