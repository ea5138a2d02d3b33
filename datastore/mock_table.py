"""In-memory temperature table backing the mock remote store."""

from __future__ import annotations
import json
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import List, Optional

from app.schemas import TemperaturePayload, TemperatureRecord
from settings import get_settings


class MockTemperatureTable:

    def __init__(self, name: str, persistence_path: Optional[Path] = None) -> None:
        self.name = name
        self._rows: List[TemperatureRecord] = []
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def insert(self, payload: TemperaturePayload) -> TemperatureRecord:
        with self._lock:
            record = TemperatureRecord(
                **payload.model_dump(),
                id=self._rows[-1].id + 1 if self._rows else 1,
                received_at=datetime.now(timezone.utc),
            )
            self._rows.append(record)
            self._persist()
            return record.model_copy(deep=True)

    def scan(self) -> list[TemperatureRecord]:
        """Return deep copies of all stored rows in insertion order."""

        with self._lock:
            return [row.model_copy(deep=True) for row in self._rows]

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = [row.model_dump(mode="json") for row in self._rows]
        self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "[]"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            data = []

        for payload in data:
            self._rows.append(TemperatureRecord.model_validate(payload))


@lru_cache
def build_default_table(
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> MockTemperatureTable:
    settings = get_settings()
    table_name = settings.store_table_name if name is None else name
    table_path = settings.store_persistence_path if path is None else path
    persistence = Path(table_path) if table_path else None
    return MockTemperatureTable(name=table_name, persistence_path=persistence)
