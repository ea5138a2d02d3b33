"""Startup probe and periodic send loop for the edge agent."""

from __future__ import annotations

import logging
import math
import random
import time
from typing import Callable, Optional

from app.schemas import TemperaturePayload
from cli.client import UploadClient, UploadOutcome, UploadResult
from services.aggregator import Aggregator
from services.simulator import simulate_zone_sensors
from settings import Settings

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], None]


class StartupTimeoutError(RuntimeError):
    """Remote store stayed unreachable for the whole startup budget."""

    def __init__(self, base_url: str, minutes: int, attempts: int) -> None:
        super().__init__(
            f"Remote store at {base_url} unreachable after {minutes} minute(s) "
            f"({attempts} attempt(s))."
        )
        self.base_url = base_url
        self.minutes = minutes
        self.attempts = attempts


class EdgeAgent:
    """Runs simulate, aggregate and upload once per tick on a single thread."""

    def __init__(
        self,
        settings: Settings,
        client: UploadClient,
        aggregator: Optional[Aggregator] = None,
        rng: Optional[random.Random] = None,
        clock: Clock = time.monotonic,
        sleep: Sleeper = time.sleep,
    ) -> None:
        self.settings = settings
        self.client = client
        self.aggregator = aggregator or Aggregator()
        self._rng = rng or random.Random()
        self._clock = clock
        self._sleep = sleep

    def send_once(self) -> UploadResult:
        readings = simulate_zone_sensors(self.settings.sensor_count, self._rng)
        summary = self.aggregator.aggregate(readings)
        average = summary.mean_value

        if math.isnan(average):
            logger.warning(
                "No readings this tick, nothing to upload",
                extra={"sensor_count": summary.reading_count},
            )
            return UploadResult(UploadOutcome.skipped)

        logger.debug(
            "Aggregated readings min=%.2f max=%.2f zones=%s",
            summary.min_value,
            summary.max_value,
            summary.per_zone_count,
        )
        payload = TemperaturePayload(
            sensor_id=self.settings.aggregate_sensor_id,
            temperature_avg=average,
            truck_id=self.settings.truck_id,
        )
        return self.client.send(payload, reading_count=summary.reading_count)

    def wait_until_reachable(self) -> int:
        """Probe until the store answers; returns the number of attempts used."""
        minutes = self.settings.startup_retry_minutes
        deadline = self._clock() + minutes * 60
        attempts = 0
        while self._clock() < deadline:
            attempts += 1
            if self.client.probe():
                return attempts
            logger.warning(
                "Remote store not reachable, retrying in %.0f seconds",
                self.settings.probe_interval_seconds,
                extra={"attempt": attempts},
            )
            self._sleep(self.settings.probe_interval_seconds)
        raise StartupTimeoutError(self.settings.base_url, minutes, attempts)

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Probe, send immediately, then once per interval. Returns ticks sent."""
        logger.info(
            "Edge processor started for truck %s",
            self.settings.truck_vin,
            extra={"truck_id": self.settings.truck_id},
        )
        self.wait_until_reachable()
        logger.info("Remote store connected, starting data transmission")

        interval = self.settings.send_interval_seconds
        ticks = 0
        next_tick = self._clock()
        while max_ticks is None or ticks < max_ticks:
            delay = next_tick - self._clock()
            if delay > 0:
                self._sleep(delay)
            result = self.send_once()
            ticks += 1
            logger.debug("Tick finished", extra={"outcome": result.outcome.value})
            # Missed ticks are dropped rather than sent back to back.
            next_tick = max(next_tick + interval, self._clock())
        return ticks
