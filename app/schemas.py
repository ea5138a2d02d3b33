"""Pydantic schemas for the temperature wire format."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class TemperaturePayload(BaseModel):
    """Aggregate reading for one tick, as posted to ``/currenttemperature``."""

    sensor_id: str = Field(..., min_length=1, description="Aggregate sensor id, AGGR-<VIN>.")
    temperature_avg: float = Field(..., description="Mean of all zone readings in Celsius.")
    units: Literal["Celsius"] = "Celsius"
    truck_id: int


class TemperatureRecord(TemperaturePayload):
    """Row stored by the mock remote store."""

    id: int = Field(..., ge=1)
    received_at: datetime
