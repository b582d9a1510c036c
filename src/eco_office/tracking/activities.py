"""Catalog of manually logged energy-saving activities.

Logging an activity grants its fixed point value through the reward
scorer, so balances and levels stay consistent with session rewards.
Each log is kept in the metric store as an append-only
:class:`~eco_office.data.models.ActivityRecord`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from eco_office.data.models import ActivityRecord, User
from eco_office.scoring.rewards import RewardScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Activity:
    """One loggable energy-saving action."""

    id: str
    title: str
    points: int


ACTIVITIES: dict[str, Activity] = {
    a.id: a
    for a in (
        Activity("lights", "Turn off unnecessary lights", 50),
        Activity("ac", "Adjust thermostat setting", 75),
        Activity("workspace", "Share workspace with colleague", 100),
        Activity("natural", "Use natural light", 30),
    )
}


def get_activity(activity_id: str) -> Activity:
    """Return the catalog entry for *activity_id*.

    Raises
    ------
    KeyError
        If *activity_id* is not in the catalog.
    """
    try:
        return ACTIVITIES[activity_id]
    except KeyError:
        available = ", ".join(sorted(ACTIVITIES.keys()))
        raise KeyError(
            f"Unknown activity '{activity_id}'. Available activities: {available}"
        ) from None


class ActivityLogger:
    """Awards activity points and records each log in the metric store."""

    def __init__(self, scorer: RewardScorer) -> None:
        self.scorer = scorer
        self.store = scorer.store

    def log(self, user_id: str, activity_id: str) -> User:
        activity = get_activity(activity_id)
        user = self.scorer.award(user_id, activity.points)
        self.store.add_activity_record(
            user_id=user_id,
            activity_id=activity.id,
            points=activity.points,
            balance=user.points,
        )
        logger.info("User %s logged %r (+%d points)", user_id, activity.title, activity.points)
        return user

    def recent(self, user_id: str, limit: int = 10) -> list[ActivityRecord]:
        """Most recent activities of *user_id*, newest first."""
        records = self.store.get_activity_records(user_id)
        return list(reversed(records))[:limit]
