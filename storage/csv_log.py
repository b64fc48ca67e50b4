from __future__ import annotations

import csv
from pathlib import Path
from threading import Lock
from typing import Iterator, List

from models.records import Snapshot

CSV_COLUMNS = (
    "timestamp",
    "temperature",
    "humidity",
    "light",
    "occupancy",
    "energy_used",
    "energy_cost",
    "carbon_footprint",
    "efficiency",
    "compliance_alerts",
)


class CsvSnapshotSink:
    """Appends one flat row per snapshot to a CSV file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = Lock()
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists() or path.stat().st_size == 0:
            with path.open("w", encoding="utf-8", newline="") as handle:
                csv.writer(handle).writerow(CSV_COLUMNS)

    def consume(self, snapshot: Snapshot) -> None:
        record = snapshot.to_record()
        with self._lock:
            with self.path.open("a", encoding="utf-8", newline="") as handle:
                writer = csv.DictWriter(handle, fieldnames=CSV_COLUMNS)
                writer.writerow(record)

    def iter_rows(self) -> Iterator[dict[str, str]]:
        """Yield the rows written so far, header excluded."""
        with self._lock:
            with self.path.open("r", encoding="utf-8", newline="") as handle:
                rows: List[dict[str, str]] = list(csv.DictReader(handle))
        yield from rows
