"""Unit tests for the mock temperature table."""

from __future__ import annotations

import json

from app.schemas import TemperaturePayload
from datastore.mock_table import MockTemperatureTable


def _payload(value: float = -18.2, truck_id: int = 42) -> TemperaturePayload:
    return TemperaturePayload(sensor_id="AGGR-TEST", temperature_avg=value, truck_id=truck_id)


def test_insert_assigns_sequential_ids() -> None:
    table = MockTemperatureTable(name="currenttemperature")

    first = table.insert(_payload(-18.0))
    second = table.insert(_payload(-17.5))

    assert (first.id, second.id) == (1, 2)
    assert first.received_at.tzinfo is not None
    assert [row.temperature_avg for row in table.scan()] == [-18.0, -17.5]


def test_scan_returns_deep_copies() -> None:
    table = MockTemperatureTable(name="currenttemperature")
    table.insert(_payload())

    scanned = table.scan()
    scanned[0].truck_id = 99

    assert table.scan()[0].truck_id == 42


def test_insert_persists_to_disk_and_reloads(tmp_path) -> None:
    path = tmp_path / "rows.json"
    table = MockTemperatureTable(name="currenttemperature", persistence_path=path)
    stored = table.insert(_payload())

    payload = json.loads(path.read_text())
    assert payload[0]["sensor_id"] == "AGGR-TEST"

    reloaded = MockTemperatureTable(name="currenttemperature", persistence_path=path)
    assert reloaded.scan() == [stored]
    assert reloaded.insert(_payload()).id == 2


def test_corrupt_persistence_file_starts_empty(tmp_path) -> None:
    path = tmp_path / "rows.json"
    path.write_text("{not json")

    table = MockTemperatureTable(name="currenttemperature", persistence_path=path)

    assert table.scan() == []
