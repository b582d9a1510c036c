# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Process-local metric store backed by plain dicts and lists."""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

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
from eco_office.errors import InvariantViolation, NotFoundError, SeatOccupiedError

logger = logging.getLogger(__name__)


@dataclass
class _Checkpoint:
    """State captured before a mutation, restored if persisting fails."""

    users: dict[str, User]
    seats: dict[int, Seat]
    zones: dict[int, Zone]
    device_metrics: int
    seating_metrics: int
    zone_energy_metrics: int
    activity_records: int


class InMemoryMetricStore:
    """Metric store holding all state in the current process.

    All mutations are serialized through one re-entrant lock, so a seat
    move can never interleave with another seat move or a user update.
    Reads hand out deep copies; mutating a returned record has no effect
    on the store.

    A mutation only takes effect once :meth:`_persist` returns.  If it
    raises, the in-memory state is rolled back and the error propagates,
    so the caller can simply re-issue the operation.
    """

    def __init__(self, layout: OfficeLayout | None = None) -> None:
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._seats: dict[int, Seat] = {}
        self._zones: dict[int, Zone] = {}
        self._device_metrics: list[DeviceMetric] = []
        self._seating_metrics: list[SeatingMetric] = []
        self._zone_energy_metrics: list[ZoneEnergyMetric] = []
        self._activity_records: list[ActivityRecord] = []
        if layout is not None:
            self.seed(layout)

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def seed(self, layout: OfficeLayout) -> None:
        """Replace users, seats, and zones with those of *layout*.

        The seat table is authoritative: each user's ``current_seat_id``
        is rewritten to match the seat that holds them.
        """
        layout = OfficeLayout.model_validate(layout.model_dump())
        with self._transaction():
            self._users = {u.id: u for u in layout.users}
            self._seats = {s.id: s for s in layout.seats}
            self._zones = {z.id: z for z in layout.zones}
            for user in self._users.values():
                user.current_seat_id = None
            for seat in self._seats.values():
                if seat.user_id is not None:
                    self._users[seat.user_id].current_seat_id = seat.id
            logger.debug(
                "Seeded store with layout %s: %d users, %d seats, %d zones",
                layout.name, len(self._users), len(self._seats), len(self._zones),
            )

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def add_device_metric(
        self,
        *,
        user_id: str,
        is_dark_mode: bool,
        elapsed_hours: float,
        power_mode: PowerMode,
        energy_kwh: float,
    ) -> DeviceMetric:
        metric = DeviceMetric(
            id=self._new_id(),
            user_id=user_id,
            timestamp=self._now(),
            is_dark_mode=is_dark_mode,
            elapsed_hours=elapsed_hours,
            power_mode=power_mode,
            energy_kwh=energy_kwh,
        )
        with self._transaction():
            self._require_user(user_id)
            self._device_metrics.append(metric)
        return metric.model_copy(deep=True)

    def get_device_metrics(self, user_id: str) -> list[DeviceMetric]:
        with self._lock:
            return [
                m.model_copy(deep=True)
                for m in self._device_metrics
                if m.user_id == user_id
            ]

    def add_seating_metric(
        self,
        *,
        user_id: str,
        seat_id: int,
        energy_tier: EnergyTier,
        proximity_score: float,
        zone_id: Optional[int] = None,
    ) -> SeatingMetric:
        metric = SeatingMetric(
            id=self._new_id(),
            user_id=user_id,
            seat_id=seat_id,
            zone_id=zone_id,
            timestamp=self._now(),
            energy_tier=energy_tier,
            proximity_score=proximity_score,
        )
        with self._transaction():
            self._require_user(user_id)
            self._require_seat(seat_id)
            if zone_id is not None:
                self._require_zone(zone_id)
            self._seating_metrics.append(metric)
        return metric.model_copy(deep=True)

    def get_seating_metrics(self, user_id: str) -> list[SeatingMetric]:
        with self._lock:
            return [
                m.model_copy(deep=True)
                for m in self._seating_metrics
                if m.user_id == user_id
            ]

    def add_zone_energy_metric(
        self,
        *,
        zone_id: int,
        consumption_kwh: float,
        co2_kg: float,
        breakdown: DeviceBreakdown,
    ) -> ZoneEnergyMetric:
        metric = ZoneEnergyMetric(
            id=self._new_id(),
            zone_id=zone_id,
            timestamp=self._now(),
            consumption_kwh=consumption_kwh,
            co2_kg=co2_kg,
            breakdown=breakdown,
        )
        with self._transaction():
            self._require_zone(zone_id)
            self._zone_energy_metrics.append(metric)
        return metric.model_copy(deep=True)

    def get_zone_energy_metrics(self, zone_id: int) -> list[ZoneEnergyMetric]:
        with self._lock:
            return [
                m.model_copy(deep=True)
                for m in self._zone_energy_metrics
                if m.zone_id == zone_id
            ]

    def add_activity_record(
        self,
        *,
        user_id: str,
        activity_id: str,
        points: int,
        balance: int,
    ) -> ActivityRecord:
        record = ActivityRecord(
            id=self._new_id(),
            user_id=user_id,
            activity_id=activity_id,
            timestamp=self._now(),
            points=points,
            balance=balance,
        )
        with self._transaction():
            self._require_user(user_id)
            self._activity_records.append(record)
        return record.model_copy(deep=True)

    def get_activity_records(self, user_id: str) -> list[ActivityRecord]:
        with self._lock:
            return [
                r.model_copy(deep=True)
                for r in self._activity_records
                if r.user_id == user_id
            ]

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy(deep=True) if user else None

    def get_users(self) -> list[User]:
        with self._lock:
            return [u.model_copy(deep=True) for u in self._users.values()]

    def update_user(self, user: User) -> User:
        """Replace the stored user with *user*.

        The seat reference is owned by :meth:`assign_seat`; a replacement
        that disagrees with the seat table is rejected.
        """
        replacement = User.model_validate(user.model_dump())
        with self._transaction():
            current = self._require_user(replacement.id)
            if replacement.current_seat_id != current.current_seat_id:
                raise InvariantViolation(
                    f"User {replacement.id!r}: seat reference "
                    f"{replacement.current_seat_id} disagrees with seat table "
                    f"({current.current_seat_id}); use assign_seat to move users"
                )
            self._users[replacement.id] = replacement
        return replacement.model_copy(deep=True)

    def modify_user(self, user_id: str, mutate: Callable[[User], None]) -> User:
        """Apply *mutate* to a copy of the user and store it atomically."""
        with self._lock:
            working = self._require_user(user_id).model_copy(deep=True)
            mutate(working)
            return self.update_user(working)

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def get_seat(self, seat_id: int) -> Optional[Seat]:
        with self._lock:
            seat = self._seats.get(seat_id)
            return seat.model_copy(deep=True) if seat else None

    def get_seats(self) -> list[Seat]:
        with self._lock:
            return [s.model_copy(deep=True) for s in self._seats.values()]

    def get_zone(self, zone_id: int) -> Optional[Zone]:
        with self._lock:
            zone = self._zones.get(zone_id)
            return zone.model_copy(deep=True) if zone else None

    def get_zones(self) -> list[Zone]:
        with self._lock:
            return [z.model_copy(deep=True) for z in self._zones.values()]

    def zone_for_seat(self, seat_id: int) -> Optional[Zone]:
        with self._lock:
            for zone in self._zones.values():
                if seat_id in zone.seat_ids:
                    return zone.model_copy(deep=True)
        return None

    def assign_seat(self, user_id: str, seat_id: int) -> Seat:
        """Move *user_id* into *seat_id*, vacating any previous seat.

        Raises
        ------
        NotFoundError
            If the user or the seat does not exist.
        SeatOccupiedError
            If another user already holds the seat.
        """
        with self._transaction():
            user = self._require_user(user_id)
            seat = self._require_seat(seat_id)
            if seat.user_id is not None and seat.user_id != user_id:
                logger.warning(
                    "Rejected move of %s to seat %d held by %s",
                    user_id, seat_id, seat.user_id,
                )
                raise SeatOccupiedError(seat_id, seat.user_id)

            for other in self._seats.values():
                if other.user_id == user_id and other.id != seat_id:
                    other.user_id = None
                    other.occupied = False

            seat.user_id = user_id
            seat.occupied = True
            user.current_seat_id = seat_id
            moved = seat.model_copy(deep=True)
        logger.info("User %s moved to seat %d", user_id, seat_id)
        return moved

    def release_seat(self, user_id: str) -> Optional[Seat]:
        with self._transaction():
            user = self._require_user(user_id)
            released = None
            for seat in self._seats.values():
                if seat.user_id == user_id:
                    seat.user_id = None
                    seat.occupied = False
                    released = seat.model_copy(deep=True)
            user.current_seat_id = None
        if released is not None:
            logger.info("User %s released seat %d", user_id, released.id)
        return released

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Hold the lock for one mutation and persist it on success.

        Any exception, from the mutation itself or from :meth:`_persist`,
        restores the state captured on entry before it propagates.
        """
        with self._lock:
            checkpoint = self._checkpoint()
            try:
                yield
                self._persist()
            except BaseException:
                self._restore(checkpoint)
                raise

    def _checkpoint(self) -> _Checkpoint:
        return _Checkpoint(
            users={k: u.model_copy(deep=True) for k, u in self._users.items()},
            seats={k: s.model_copy(deep=True) for k, s in self._seats.items()},
            zones={k: z.model_copy(deep=True) for k, z in self._zones.items()},
            device_metrics=len(self._device_metrics),
            seating_metrics=len(self._seating_metrics),
            zone_energy_metrics=len(self._zone_energy_metrics),
            activity_records=len(self._activity_records),
        )

    def _restore(self, checkpoint: _Checkpoint) -> None:
        self._users = checkpoint.users
        self._seats = checkpoint.seats
        self._zones = checkpoint.zones
        # Metric collections are append-only; truncating undoes the insert.
        del self._device_metrics[checkpoint.device_metrics:]
        del self._seating_metrics[checkpoint.seating_metrics:]
        del self._zone_energy_metrics[checkpoint.zone_energy_metrics:]
        del self._activity_records[checkpoint.activity_records:]

    def _persist(self) -> None:
        """Hook for durable subclasses; called with the lock held."""

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _require_user(self, user_id: str) -> User:
        try:
            return self._users[user_id]
        except KeyError:
            raise NotFoundError("User", user_id) from None

    def _require_seat(self, seat_id: int) -> Seat:
        try:
            return self._seats[seat_id]
        except KeyError:
            raise NotFoundError("Seat", seat_id) from None

    def _require_zone(self, zone_id: int) -> Zone:
        try:
            return self._zones[zone_id]
        except KeyError:
            raise NotFoundError("Zone", zone_id) from None
