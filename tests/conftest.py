# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Shared test fixtures for the eco-office test suite."""

from __future__ import annotations

import pytest

from eco_office.data.layouts import get_layout
from eco_office.data.models import EnergyTier, OfficeLayout, Seat, User, Zone
from eco_office.store.memory import InMemoryMetricStore


@pytest.fixture()
def demo_store() -> InMemoryMetricStore:
    """Store seeded with the six-seat demo layout (seats 1, 3, 5 occupied)."""
    return InMemoryMetricStore(get_layout("demo"))


@pytest.fixture()
def floor_store() -> InMemoryMetricStore:
    """Store seeded with the eleven-seat, three-zone floor plan."""
    return InMemoryMetricStore(get_layout("floor_plan"))


@pytest.fixture()
def small_layout() -> OfficeLayout:
    """Four seats in one zone, two of them occupied, one AC and two lights."""
    return OfficeLayout(
        name="small",
        users=[
            User(id="a", name="Ada", points=100),
            User(id="b", name="Bo", points=600),
            User(id="c", name="Cy", points=0),
        ],
        seats=[
            Seat(id=1, x=0, y=0, occupied=True, user_id="a", energy_tier=EnergyTier.low),
            Seat(id=2, x=3, y=4, occupied=True, user_id="b", energy_tier=EnergyTier.high),
            Seat(id=3, x=500, y=500, energy_tier=EnergyTier.low),
            Seat(id=4, x=6, y=8, energy_tier=EnergyTier.medium),
        ],
        zones=[
            Zone(id=1, name="Corner", seat_ids=[1, 2, 3, 4], devices=["1x AC", "2x Lights"]),
        ],
    )


@pytest.fixture()
def small_store(small_layout: OfficeLayout) -> InMemoryMetricStore:
    return InMemoryMetricStore(small_layout)
