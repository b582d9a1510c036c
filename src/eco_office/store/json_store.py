# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Durable metric store persisted to a single JSON document.

The whole store is rewritten after every mutation.  By default the file
lives at ``~/.eco-office/store.json``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from eco_office.data.models import (
    ActivityRecord,
    DeviceMetric,
    OfficeLayout,
    SeatingMetric,
    ZoneEnergyMetric,
)
from eco_office.store.memory import InMemoryMetricStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_DIR = Path.home() / ".eco-office"
STORE_FILE_NAME = "store.json"


class StoreSnapshot(BaseModel):
    """On-disk representation of a metric store."""

    layout: OfficeLayout = Field(default_factory=lambda: OfficeLayout(name="empty"))
    device_metrics: list[DeviceMetric] = Field(default_factory=list)
    seating_metrics: list[SeatingMetric] = Field(default_factory=list)
    zone_energy_metrics: list[ZoneEnergyMetric] = Field(default_factory=list)
    activity_records: list[ActivityRecord] = Field(default_factory=list)


class JsonFileMetricStore(InMemoryMetricStore):
    """Metric store that mirrors its state into a JSON file.

    An existing file is loaded on construction and takes precedence over
    *layout*; otherwise the store is seeded from *layout* (if given) and
    the file is created.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        layout: OfficeLayout | None = None,
    ) -> None:
        self.path = Path(path).expanduser() if path else DEFAULT_BASE_DIR / STORE_FILE_NAME
        self._loading = True
        super().__init__()
        if self.path.exists():
            self._load()
        elif layout is not None:
            self.seed(layout)
        self._loading = False
        self._persist()

    def _load(self) -> None:
        data = json.loads(self.path.read_text())
        snapshot = StoreSnapshot.model_validate(data)
        self.seed(snapshot.layout)
        with self._lock:
            self._device_metrics = list(snapshot.device_metrics)
            self._seating_metrics = list(snapshot.seating_metrics)
            self._zone_energy_metrics = list(snapshot.zone_energy_metrics)
            self._activity_records = list(snapshot.activity_records)
        logger.debug("Loaded store from %s", self.path)

    def snapshot(self) -> StoreSnapshot:
        """Return the current state as a :class:`StoreSnapshot`."""
        with self._lock:
            return StoreSnapshot(
                layout=OfficeLayout(
                    name=self.path.stem,
                    users=self.get_users(),
                    seats=self.get_seats(),
                    zones=self.get_zones(),
                ),
                device_metrics=list(self._device_metrics),
                seating_metrics=list(self._seating_metrics),
                zone_energy_metrics=list(self._zone_energy_metrics),
                activity_records=list(self._activity_records),
            )

    def _persist(self) -> None:
        if self._loading:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(self.snapshot().model_dump_json(indent=2))
        tmp_path.replace(self.path)
