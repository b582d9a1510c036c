# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Seat recommendation engine."""

from eco_office.recommendations.engine import SeatRecommender, classify_seat

__all__ = ["SeatRecommender", "classify_seat"]
