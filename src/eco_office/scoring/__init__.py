# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Proximity and reward scoring for the office sustainability engine."""

from eco_office.scoring.proximity import ProximityScorer, proximity_score
from eco_office.scoring.rewards import RewardScorer, eco_score, leaderboard, point_delta

__all__ = [
    "ProximityScorer",
    "RewardScorer",
    "eco_score",
    "leaderboard",
    "point_delta",
    "proximity_score",
]
