# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Spatial proximity of a seat to the colleagues currently seated.

The score is the mean Euclidean distance from the target seat to every
*other* occupied seat, capped at 100.  Lower means more tightly
clustered.  A seat with no occupied neighbours also scores 100, so the
ceiling stands for both "nobody to compare against" and "far from
everyone".
"""

from __future__ import annotations

import math

from eco_office.data.models import Seat
from eco_office.scoring.weights import MAX_PROXIMITY_SCORE
from eco_office.store.base import MetricStore


def proximity_score(target: Seat | None, seats: list[Seat]) -> float:
    """Return the capped mean distance from *target* to other occupied seats."""
    if target is None:
        return MAX_PROXIMITY_SCORE

    occupied = [s for s in seats if s.occupied and s.id != target.id]
    if not occupied:
        return MAX_PROXIMITY_SCORE

    distances = [math.hypot(s.x - target.x, s.y - target.y) for s in occupied]
    mean_distance = sum(distances) / len(distances)
    return min(MAX_PROXIMITY_SCORE, mean_distance)


class ProximityScorer:
    """Scores seats against the live seat table of a metric store.

    The seat table is re-read on every call since occupancy changes
    between calls.

    Usage::

        scorer = ProximityScorer(store)
        score = scorer.score(seat_id)
    """

    def __init__(self, store: MetricStore) -> None:
        self.store = store

    def score(self, seat_id: int) -> float:
        """Proximity score (0-100) for *seat_id*; unknown seats score 100."""
        seats = self.store.get_seats()
        target = next((s for s in seats if s.id == seat_id), None)
        return proximity_score(target, seats)

    def score_all(self, seats: list[Seat]) -> dict[int, float]:
        """Score each seat in *seats* against that same seat list."""
        return {seat.id: proximity_score(seat, seats) for seat in seats}
