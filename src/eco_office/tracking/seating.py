# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Seat moves and the seating metrics they produce."""

from __future__ import annotations

import logging

from eco_office.data.models import SeatingMetric
from eco_office.errors import NotFoundError
from eco_office.scoring.proximity import ProximityScorer
from eco_office.store.base import MetricStore

logger = logging.getLogger(__name__)


class SeatingService:
    """Moves users between seats and records a seating metric per move.

    The proximity score and energy tier are captured as they stand right
    after the move, excluding the mover from the colleague set.
    """

    def __init__(self, store: MetricStore, scorer: ProximityScorer | None = None) -> None:
        self.store = store
        self.scorer = scorer or ProximityScorer(store)

    def move(self, user_id: str, seat_id: int) -> SeatingMetric:
        """Assign *seat_id* to *user_id* and append a seating metric.

        Raises
        ------
        NotFoundError
            If the user or the seat does not exist.
        SeatOccupiedError
            If another user already holds the seat; nothing is recorded.
        """
        seat = self.store.assign_seat(user_id, seat_id)
        zone = self.store.zone_for_seat(seat_id)
        score = self.scorer.score(seat_id)
        metric = self.store.add_seating_metric(
            user_id=user_id,
            seat_id=seat.id,
            zone_id=zone.id if zone else None,
            energy_tier=seat.energy_tier,
            proximity_score=round(score, 4),
        )
        logger.debug("Seating metric %s: seat %d proximity %.2f", metric.id, seat_id, score)
        return metric

    def leave(self, user_id: str) -> None:
        """Vacate whatever seat *user_id* holds."""
        if self.store.get_user(user_id) is None:
            raise NotFoundError("User", user_id)
        self.store.release_seat(user_id)
