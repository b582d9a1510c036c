# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Reward scoring: turns session behaviour into a bounded point delta.

The eco score is a weighted sum of three sub-scores:

=============  ======  ============================================
Component      Weight  Sub-score
=============  ======  ============================================
Dark mode      0.4     1 if dark mode was on, else 0
Uptime         0.3     ``min(elapsed_hours / 1.2, 1)``
Energy         0.3     ``max(0, 1 - energy_kwh / 0.05)``
=============  ======  ============================================

The point delta is ``round((eco_score - 0.5) * 20)`` clamped to
``[-10, +10]``, and balances never drop below zero.
"""

from __future__ import annotations

import logging
import math

from eco_office.data.models import RewardResult, SessionSample, User
from eco_office.errors import NotFoundError
from eco_office.scoring.thresholds import points_to_level
from eco_office.scoring.weights import (
    DARK_MODE_WEIGHT,
    ECO_SCORE_NEUTRAL,
    ENERGY_REFERENCE_KWH,
    ENERGY_WEIGHT,
    MAX_POINT_DELTA,
    MIN_POINT_DELTA,
    POINTS_PER_ECO_UNIT,
    UPTIME_TARGET_HOURS,
    UPTIME_WEIGHT,
)
from eco_office.store.base import MetricStore

logger = logging.getLogger(__name__)


def eco_score(sample: SessionSample) -> float:
    """Composite eco score in [0, 1] for a single session sample."""
    dark = DARK_MODE_WEIGHT if sample.is_dark_mode else 0.0
    uptime = min(sample.elapsed_hours / UPTIME_TARGET_HOURS, 1.0) * UPTIME_WEIGHT
    energy = max(0.0, 1.0 - sample.energy_kwh / ENERGY_REFERENCE_KWH) * ENERGY_WEIGHT
    return min(1.0, dark + uptime + energy)


def point_delta(score: float) -> int:
    """Map an eco score to a point delta in [-10, +10].

    Halves round upward (``-2.5 -> -2``, ``2.5 -> 3``).
    """
    raw = math.floor((score - ECO_SCORE_NEUTRAL) * POINTS_PER_ECO_UNIT + 0.5)
    return max(MIN_POINT_DELTA, min(MAX_POINT_DELTA, raw))


def apply_delta(points: int, delta: int) -> int:
    """New balance after *delta*, floored at zero."""
    return max(0, points + delta)


def leaderboard(users: list[User], limit: int | None = None) -> list[User]:
    """Users sorted by points, highest first (ties keep input order)."""
    ranked = sorted(users, key=lambda u: u.points, reverse=True)
    return ranked[:limit] if limit is not None else ranked


class RewardScorer:
    """Applies reward points to users held in a metric store.

    Usage::

        scorer = RewardScorer(store)
        result = scorer.apply(user_id, sample)

    Applying the same sample twice counts it twice; callers must apply
    each sample at most once.
    """

    def __init__(self, store: MetricStore) -> None:
        self.store = store

    def score(self, sample: SessionSample) -> tuple[float, int]:
        """Return ``(eco_score, point_delta)`` without touching the store."""
        score = eco_score(sample)
        return score, point_delta(score)

    def apply(self, user_id: str, sample: SessionSample) -> RewardResult:
        """Score *sample* and add the resulting delta to the user's balance.

        Raises
        ------
        NotFoundError
            If *user_id* is not in the store.
        """
        score, delta = self.score(sample)
        user = self._adjust(user_id, delta)
        logger.debug(
            "User %s eco score %.3f -> delta %+d (balance %d)",
            user_id, score, delta, user.points,
        )
        return RewardResult(
            user_id=user_id,
            eco_score=round(score, 4),
            delta=delta,
            points=user.points,
            level=user.level,
        )

    def award(self, user_id: str, points: int) -> User:
        """Grant a fixed, non-negative bonus such as a logged activity."""
        if points < 0:
            raise ValueError(f"Award must be non-negative, got {points}")
        return self._adjust(user_id, points)

    def _adjust(self, user_id: str, delta: int) -> User:
        if self.store.get_user(user_id) is None:
            raise NotFoundError("User", user_id)

        def _mutate(user: User) -> None:
            user.points = apply_delta(user.points, delta)
            user.level = points_to_level(user.points)

        return self.store.modify_user(user_id, _mutate)
