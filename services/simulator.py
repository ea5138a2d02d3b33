"""Synthetic zone sensors for a refrigerated trailer."""

from __future__ import annotations

import random
from typing import Dict, Optional, Tuple

from models.records import SensorReading, Zone

ZONE_SIZE = 10

# (base temperature, spread) per zone; values are base + U[0, spread).
ZONE_BANDS: Dict[Zone, Tuple[float, float]] = {
    Zone.front: (-18.5, 0.5),
    Zone.middle: (-18.0, 0.4),
    Zone.back: (-17.8, 0.8),
}


def zone_for_position(position: int) -> Zone:
    """Map a 1-based sensor position onto its zone."""
    if position <= ZONE_SIZE:
        return Zone.front
    if position <= 2 * ZONE_SIZE:
        return Zone.middle
    return Zone.back


def simulate_zone_sensors(
    count: int, rng: Optional[random.Random] = None
) -> list[SensorReading]:
    """Produce ``count`` readings with ids ``S-001``, ``S-002``, ..."""
    source = rng or random.Random()
    readings: list[SensorReading] = []
    for position in range(1, count + 1):
        zone = zone_for_position(position)
        base, spread = ZONE_BANDS[zone]
        readings.append(
            SensorReading(
                sensor_id=f"S-{position:03d}",
                zone=zone,
                value=base + source.random() * spread,
            )
        )
    return readings
