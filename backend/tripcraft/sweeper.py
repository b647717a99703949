"""
Background expiry sweep for temporary itineraries.

The sweeper is owned by the application lifespan: started once at startup,
cancelled on shutdown. Each tick deletes expired temporary records in a worker
thread; a failed tick is logged and the loop keeps going.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from tripcraft.integrations.itinerary_store import ItineraryStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    def __init__(self, store: ItineraryStore, interval_seconds: float):
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> int:
        deleted = self.store.sweep_expired()
        if deleted:
            logger.info(f"Expiry sweep removed {deleted} temporary itineraries")
        return deleted

    async def _loop(self) -> None:
        while True:
            try:
                await asyncio.to_thread(self.run_once)
            except Exception:
                logger.exception("Expiry sweep failed")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop(), name="itinerary-expiry-sweep")
        logger.info(f"Expiry sweep scheduled every {self.interval_seconds:.0f}s")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
