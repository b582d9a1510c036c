# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Seat recommendation engine.

Scores every free seat by proximity to seated colleagues and by its
static energy tier, then classifies it into one of three templates.
The first matching rule wins:

1. proximity score below 100 -> close to colleagues (15%)
2. energy tier ``low``       -> energy-efficient zone (20%)
3. anything else             -> balanced location (10%)
"""

from __future__ import annotations

from eco_office.data.models import EnergyTier, Seat, SeatRecommendation
from eco_office.recommendations.templates import (
    BALANCED_LOCATION,
    EFFICIENT_ZONE,
    NEAR_COLLEAGUES,
    SeatTemplate,
)
from eco_office.scoring.proximity import proximity_score
from eco_office.scoring.weights import MAX_PROXIMITY_SCORE
from eco_office.store.base import MetricStore

# Maximum number of recommendations to return.
_MAX_RECOMMENDATIONS = 3


def classify_seat(score: float, tier: EnergyTier) -> SeatTemplate:
    """Pick the template for a seat with the given proximity and tier."""
    if score < MAX_PROXIMITY_SCORE:
        return NEAR_COLLEAGUES
    if tier is EnergyTier.low:
        return EFFICIENT_ZONE
    return BALANCED_LOCATION


class SeatRecommender:
    """Produce up to three seat recommendations.

    Usage::

        recommender = SeatRecommender(store)
        recs = recommender.recommend()
    """

    def __init__(self, store: MetricStore | None = None) -> None:
        self.store = store

    def recommend(
        self,
        seats: list[Seat] | None = None,
        sort_by_savings: bool = False,
    ) -> list[SeatRecommendation]:
        """Recommend free seats from *seats* (defaults to the store's seats).

        Parameters
        ----------
        seats:
            Full seat list; occupied seats are used for proximity and
            never recommended.
        sort_by_savings:
            When true, order candidates by savings percentage descending
            before taking the top three.  Otherwise seats keep their
            iteration order.

        Returns
        -------
        list[SeatRecommendation]
            At most three recommendations.
        """
        if seats is None:
            if self.store is None:
                raise ValueError("SeatRecommender needs a seat list or a store")
            seats = self.store.get_seats()

        candidates: list[SeatRecommendation] = []
        for seat in seats:
            if seat.occupied:
                continue
            score = proximity_score(seat, seats)
            template = classify_seat(score, seat.energy_tier)
            candidates.append(
                SeatRecommendation(
                    seat_id=seat.id,
                    reason=template.reason,
                    savings=template.savings,
                    savings_pct=template.savings_pct,
                    proximity_score=round(score, 2),
                    energy_tier=seat.energy_tier,
                )
            )
            if not sort_by_savings and len(candidates) == _MAX_RECOMMENDATIONS:
                break

        if sort_by_savings:
            candidates.sort(key=lambda c: c.savings_pct, reverse=True)

        return candidates[:_MAX_RECOMMENDATIONS]
