# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Periodic session sampler.

One :class:`SessionTracker` runs per authenticated session.  Every
period it samples the ambient environment, records a
:class:`~eco_office.data.models.DeviceMetric`, and feeds the same sample
to the reward scorer.  Ticks run on a single asyncio task and never
overlap; :meth:`SessionTracker.stop` waits for the in-flight tick before
releasing the timer.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from eco_office.config import Settings
from eco_office.data.models import DeviceMetric, PowerMode, RewardResult, SessionSample
from eco_office.scoring.rewards import RewardScorer
from eco_office.store.base import MetricStore
from eco_office.tracking.environment import EnvironmentReader, power_mode_for

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3600.0


class SessionTracker:
    """Samples one user's session into device metrics and reward points.

    Usage::

        tracker = SessionTracker(store, user_id, environment)
        await tracker.start()
        ...
        await tracker.stop()
    """

    def __init__(
        self,
        store: MetricStore,
        user_id: str,
        environment: EnvironmentReader,
        reward_scorer: RewardScorer | None = None,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.user_id = user_id
        self.environment = environment
        self.reward_scorer = reward_scorer or RewardScorer(store)
        self.settings = settings or Settings()
        self._clock = clock
        self._last_sample_at: Optional[float] = None
        # Bound to the running loop by _bind_loop(), never at construction.
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._tick_lock: Optional[asyncio.Lock] = None
        self._stopping: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task[None]] = None
        self.results: list[RewardResult] = []

    def _bind_loop(self) -> asyncio.Lock:
        """Return the tick lock, recreating primitives for a new event loop."""
        loop = asyncio.get_running_loop()
        if self._loop is not loop or self._tick_lock is None:
            self._loop = loop
            self._tick_lock = asyncio.Lock()
            self._stopping = asyncio.Event()
        return self._tick_lock

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the periodic loop; the first tick runs immediately."""
        if self.running:
            raise RuntimeError(f"Tracker for {self.user_id!r} is already running")
        self._task = None
        self._bind_loop()
        self._stopping.clear()
        self._last_sample_at = None
        self._task = asyncio.create_task(
            self._run(), name=f"session-tracker-{self.user_id}"
        )
        logger.info(
            "Session tracker started for %s (period %.1fs)",
            self.user_id, self.settings.sample_period_seconds,
        )

    async def stop(self) -> None:
        """Stop the loop after any in-flight tick has finished."""
        task = self._task
        if task is None:
            return
        try:
            self._stopping.set()
            async with self._tick_lock:
                task.cancel()
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Session tracker for %s ended with an error", self.user_id)
        finally:
            self._task = None
        logger.info("Session tracker stopped for %s", self.user_id)

    async def run_ticks(self, count: int) -> list[RewardResult]:
        """Run exactly *count* ticks, one period apart, then return."""
        results = []
        for i in range(count):
            if i:
                await asyncio.sleep(self.settings.sample_period_seconds)
            _, result = await self.tick()
            results.append(result)
        return results

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await self.tick()
            except Exception:
                logger.exception("Session tick failed for %s", self.user_id)
            try:
                await asyncio.wait_for(
                    self._stopping.wait(), timeout=self.settings.sample_period_seconds
                )
            except asyncio.TimeoutError:
                continue

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    async def tick(self) -> tuple[DeviceMetric, RewardResult]:
        """Take one sample, store it, and apply its reward delta."""
        async with self._bind_loop():
            sample = self.sample()
            metric = self.store.add_device_metric(
                user_id=self.user_id,
                is_dark_mode=sample.is_dark_mode,
                elapsed_hours=sample.elapsed_hours,
                power_mode=sample.power_mode,
                energy_kwh=sample.energy_kwh,
            )
            result = self.reward_scorer.apply(self.user_id, sample)
            self.results.append(result)
            return metric, result

    def sample(self) -> SessionSample:
        """Read the environment and derive one session sample.

        The first sample of a session reports zero elapsed hours and
        seeds the session marker.  Unreadable signals fall back to light
        mode and the balanced power mode.
        """
        now = self._clock()
        if self._last_sample_at is None:
            elapsed_hours = 0.0
        else:
            elapsed_hours = max(0.0, (now - self._last_sample_at) / _SECONDS_PER_HOUR)
        self._last_sample_at = now

        dark_mode = self._read_dark_mode()
        power_mode = self._read_power_mode()
        factor = self.settings.dark_mode_factor if dark_mode else 1.0
        energy_kwh = self.settings.base_rate_kwh_per_hour * elapsed_hours * factor

        return SessionSample(
            is_dark_mode=dark_mode,
            elapsed_hours=elapsed_hours,
            power_mode=power_mode,
            energy_kwh=energy_kwh,
        )

    def _read_dark_mode(self) -> bool:
        try:
            value = self.environment.is_dark_mode()
        except Exception as exc:
            logger.warning("Could not read display mode for %s: %s", self.user_id, exc)
            return False
        return bool(value) if value is not None else False

    def _read_power_mode(self) -> PowerMode:
        try:
            status = self.environment.power_status()
        except Exception as exc:
            logger.warning("Could not read power status for %s: %s", self.user_id, exc)
            return PowerMode.balanced
        return power_mode_for(status, self.settings.low_battery_threshold)
