# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Seat recommendation template definitions.

Each template carries the reason text and savings label shown to the
user, plus the numeric savings used when sorting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SeatTemplate:
    """Immutable template for one recommendation tier."""

    reason: str
    savings_pct: int

    @property
    def savings(self) -> str:
        return f"{self.savings_pct}% energy"


NEAR_COLLEAGUES = SeatTemplate(
    reason="close to colleagues, optimal collaboration",
    savings_pct=15,
)

EFFICIENT_ZONE = SeatTemplate(
    reason="energy-efficient zone",
    savings_pct=20,
)

BALANCED_LOCATION = SeatTemplate(
    reason="balanced location",
    savings_pct=10,
)
