"""Fixed-interval polling of full aircraft snapshots."""

from __future__ import annotations

import asyncio
import contextlib
from datetime import datetime, timezone
import logging
from typing import Callable, Optional, Protocol

from livemap.ingestors.aircraft_api import FetchError
from livemap.models.aircraft import AircraftRecord

logger = logging.getLogger("livemap.ingestors.poller")


class SnapshotSource(Protocol):
    async def get_all_aircraft(self) -> list[AircraftRecord]: ...


class SnapshotPoller:
    """Poll a snapshot source on a fixed interval and hold the latest result.

    The first tick runs as soon as the poller starts; every following tick is
    scheduled only after the previous fetch has settled, so ticks never
    overlap. A failed fetch keeps the previous snapshot and records the
    reason in ``error``.
    """

    def __init__(
        self,
        *,
        source: SnapshotSource,
        interval: float,
        on_snapshot: Callable[[list[AircraftRecord]], None] | None = None,
    ) -> None:
        self.source = source
        self.interval = float(interval)
        self.on_snapshot = on_snapshot

        self.snapshot: list[AircraftRecord] = []
        self.last_update: Optional[datetime] = None
        self.error: Optional[str] = None
        self.loading = True

        self._task: asyncio.Task | None = None
        self._wake: asyncio.Event | None = None
        self._tick_lock = asyncio.Lock()
        self._loop_fetching = False
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stopped = False
        self._wake = asyncio.Event()
        self._task = asyncio.create_task(self._run())
        logger.info("Snapshot poller started (interval=%ss)", self.interval)

    async def stop(self) -> None:
        """Cancel the pending tick; safe to call more than once."""

        self._stopped = True
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Snapshot poller stopped")

    def set_interval(self, seconds: float) -> None:
        """Change the cadence and restart the schedule from now.

        A scheduled fetch already in flight is not interrupted; its result
        counts as the first tick of the new schedule. An on-demand refresh
        does not hold the schedule back.
        """

        seconds = float(seconds)
        if seconds == self.interval:
            return
        self.interval = seconds
        logger.info("Poll interval changed to %ss", seconds)
        if self.running and self._wake is not None and not self._loop_fetching:
            self._wake.set()

    async def refresh(self) -> list[AircraftRecord] | None:
        """Run a tick now, outside the schedule; a stopped poller does nothing."""

        if self._stopped:
            logger.debug("Ignoring refresh on a stopped poller")
            return None
        return await self.tick()

    async def tick(self) -> list[AircraftRecord] | None:
        async with self._tick_lock:
            try:
                snapshot = await self.source.get_all_aircraft()
            except FetchError as exc:
                logger.warning("Error fetching aircraft data: %s", exc)
                self.error = str(exc)
                return None
            finally:
                self.loading = False

            if self._stopped:
                return None

            self.snapshot = snapshot
            self.last_update = datetime.now(tz=timezone.utc)
            self.error = None
            if self.on_snapshot:
                self.on_snapshot(snapshot)
            return snapshot

    async def _run(self) -> None:
        while True:
            self._loop_fetching = True
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # pragma: no cover - defensive logging
                logger.warning("Snapshot poll failed: %s", exc)
                self.error = str(exc)
            finally:
                self._loop_fetching = False

            self._wake.clear()
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._wake.wait(), timeout=self.interval)


__all__ = ["SnapshotPoller", "SnapshotSource"]
