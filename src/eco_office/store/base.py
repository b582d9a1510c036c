# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Metric store protocol.

Every backend keeps four append-only collections (device, seating and
zone energy metrics, plus logged activities) next to the user and
topology records, and must honour the same contract whether it lives in
memory or on disk:

* inserts assign the id and the UTC timestamp and return the stored record;
* filtered reads return matching records in insertion order;
* lookups return ``None`` for unknown ids;
* seat assignment keeps ``seat.user_id``, ``seat.occupied`` and
  ``user.current_seat_id`` consistent, atomically;
* a mutation whose write fails leaves the store unchanged.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

from eco_office.data.models import (
    ActivityRecord,
    DeviceBreakdown,
    DeviceMetric,
    EnergyTier,
    OfficeLayout,
    PowerMode,
    Seat,
    SeatingMetric,
    User,
    Zone,
    ZoneEnergyMetric,
)


@runtime_checkable
class MetricStore(Protocol):
    """Protocol that all metric stores must satisfy."""

    def seed(self, layout: OfficeLayout) -> None:
        """Replace users, seats, and zones with those of *layout*."""
        ...

    # -- metrics -------------------------------------------------------------

    def add_device_metric(
        self,
        *,
        user_id: str,
        is_dark_mode: bool,
        elapsed_hours: float,
        power_mode: PowerMode,
        energy_kwh: float,
    ) -> DeviceMetric:
        ...

    def get_device_metrics(self, user_id: str) -> list[DeviceMetric]:
        ...

    def add_seating_metric(
        self,
        *,
        user_id: str,
        seat_id: int,
        energy_tier: EnergyTier,
        proximity_score: float,
        zone_id: Optional[int] = None,
    ) -> SeatingMetric:
        ...

    def get_seating_metrics(self, user_id: str) -> list[SeatingMetric]:
        ...

    def add_zone_energy_metric(
        self,
        *,
        zone_id: int,
        consumption_kwh: float,
        co2_kg: float,
        breakdown: DeviceBreakdown,
    ) -> ZoneEnergyMetric:
        ...

    def get_zone_energy_metrics(self, zone_id: int) -> list[ZoneEnergyMetric]:
        ...

    def add_activity_record(
        self,
        *,
        user_id: str,
        activity_id: str,
        points: int,
        balance: int,
    ) -> ActivityRecord:
        ...

    def get_activity_records(self, user_id: str) -> list[ActivityRecord]:
        ...

    # -- users ---------------------------------------------------------------

    def get_user(self, user_id: str) -> Optional[User]:
        ...

    def get_users(self) -> list[User]:
        ...

    def update_user(self, user: User) -> User:
        """Replace the stored user with *user* (full replace)."""
        ...

    def modify_user(self, user_id: str, mutate: Callable[[User], None]) -> User:
        """Apply *mutate* to the stored user atomically and return the result."""
        ...

    # -- topology ------------------------------------------------------------

    def get_seat(self, seat_id: int) -> Optional[Seat]:
        ...

    def get_seats(self) -> list[Seat]:
        ...

    def get_zone(self, zone_id: int) -> Optional[Zone]:
        ...

    def get_zones(self) -> list[Zone]:
        ...

    def zone_for_seat(self, seat_id: int) -> Optional[Zone]:
        """Return the first zone listing *seat_id* as a member, if any."""
        ...

    def assign_seat(self, user_id: str, seat_id: int) -> Seat:
        """Move *user_id* into *seat_id*, vacating any previous seat."""
        ...

    def release_seat(self, user_id: str) -> Optional[Seat]:
        """Vacate the seat held by *user_id*; returns it, or None."""
        ...
