from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Optional

from pydantic import ValidationError

from app.schemas import SnapshotDocument
from models.records import Snapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Holds the latest snapshot document and exports it as JSON.

    The document on disk is rewritten every ``export_every`` snapshots.
    """

    def __init__(
        self,
        persistence_path: Optional[Path] = None,
        export_every: int = 5,
    ) -> None:
        self.persistence_path = persistence_path
        self.export_every = max(1, export_every)
        self._latest: Optional[SnapshotDocument] = None
        self._received = 0
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def consume(self, snapshot: Snapshot) -> None:
        document = SnapshotDocument.from_snapshot(snapshot)
        with self._lock:
            self._latest = document
            self._received += 1
            if self._received % self.export_every == 0:
                self._persist()

    def latest(self) -> Optional[SnapshotDocument]:
        with self._lock:
            if self._latest is None:
                return None
            return self._latest.model_copy(deep=True)

    def _persist(self) -> None:
        if not self.persistence_path or self._latest is None:
            return
        payload = self._latest.model_dump(mode="json")
        self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
            if data:
                self._latest = SnapshotDocument.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError):
            logger.warning(
                "Ignoring unreadable status export",
                extra={"sink": str(self.persistence_path)},
            )
