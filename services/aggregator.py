"""Aggregation logic for sensor readings."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable

from models.records import SensorReading


@dataclass
class AggregationSummary:
    """Computed statistics for one tick of sensor readings."""

    reading_count: int = 0
    min_value: float | None = None
    max_value: float | None = None
    mean_value: float = math.nan
    per_zone_count: Dict[str, int] = field(default_factory=dict)


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def mean(self, readings: Iterable[SensorReading]) -> float:
        """Arithmetic mean of the reading values; NaN for no readings."""
        total = 0.0
        count = 0
        for reading in readings:
            total += reading.value
            count += 1
        if not count:
            return math.nan
        return total / count

    def aggregate(self, readings: Iterable[SensorReading]) -> AggregationSummary:
        batch = list(readings)
        summary = AggregationSummary(
            reading_count=len(batch),
            mean_value=self.mean(batch),
        )

        for reading in batch:
            value = reading.value
            if summary.min_value is None or value < summary.min_value:
                summary.min_value = value
            if summary.max_value is None or value > summary.max_value:
                summary.max_value = value

            zone = reading.zone.value
            summary.per_zone_count[zone] = summary.per_zone_count.get(zone, 0) + 1

        return summary
