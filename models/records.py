"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Zone(str, Enum):
    """Physical location of a sensor inside the trailer."""

    front = "Front"
    middle = "Middle"
    back = "Back"


@dataclass(frozen=True, slots=True)
class SensorReading:
    """A single simulated sensor value for one tick."""

    sensor_id: str
    zone: Zone
    value: float
