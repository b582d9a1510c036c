"""Tests for core Pydantic data models and layout presets."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from eco_office.data.layouts import LAYOUTS, get_layout
from eco_office.data.models import (
    DeviceBreakdown,
    EnergyReport,
    EnergyTier,
    OfficeLayout,
    OfficeSummary,
    PowerMode,
    Seat,
    User,
    Zone,
)


class TestSeat:
    """Tests for the seat occupancy invariant."""

    def test_free_seat(self):
        seat = Seat(id=1, x=0, y=0)
        assert not seat.occupied
        assert seat.user_id is None
        assert seat.energy_tier == EnergyTier.medium

    def test_occupied_requires_user(self):
        with pytest.raises(ValidationError):
            Seat(id=1, x=0, y=0, occupied=True)

    def test_user_requires_occupied(self):
        with pytest.raises(ValidationError):
            Seat(id=1, x=0, y=0, user_id="u1")


class TestEnums:

    def test_power_mode_values(self):
        assert PowerMode.power_saver.value == "power-saver"
        assert PowerMode("balanced") is PowerMode.balanced

    def test_tier_colors(self):
        assert EnergyTier.low.color == "green"
        assert EnergyTier.high.color == "red"


class TestOfficeLayout:
    """Tests for cross-reference validation of layouts."""

    def test_unknown_seat_in_zone(self):
        with pytest.raises(ValidationError, match="unknown seats"):
            OfficeLayout(name="bad", seats=[Seat(id=1, x=0, y=0)],
                         zones=[Zone(id=1, name="Z", seat_ids=[1, 2])])

    def test_unknown_user_on_seat(self):
        with pytest.raises(ValidationError, match="unknown user"):
            OfficeLayout(name="bad", seats=[Seat(id=1, x=0, y=0, occupied=True, user_id="ghost")])

    def test_user_on_two_seats(self):
        with pytest.raises(ValidationError, match="more than one seat"):
            OfficeLayout(
                name="bad",
                users=[User(id="u", name="U")],
                seats=[
                    Seat(id=1, x=0, y=0, occupied=True, user_id="u"),
                    Seat(id=2, x=1, y=0, occupied=True, user_id="u"),
                ],
            )


class TestComputedFields:

    def test_breakdown_total(self):
        b = DeviceBreakdown(laptops=100, lighting=40, ac=1000, other=0)
        assert b.total_watts == 1140

    def test_potential_savings(self):
        assert EnergyReport(user_id="u", average_proximity_score=62.5).potential_savings == 37.5
        assert EnergyReport(user_id="u").potential_savings == 100.0

    def test_occupancy_pct(self):
        assert OfficeSummary(occupied_seats=3, total_seats=6).occupancy_pct == 50.0
        assert OfficeSummary().occupancy_pct == 0.0

    def test_points_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            User(id="u", name="U", points=-1)


class TestLayouts:
    """Tests for the preset layouts."""

    @pytest.mark.parametrize("name", list(LAYOUTS.keys()))
    def test_layout_is_consistent(self, name: str):
        layout = get_layout(name)
        seat_of = {s.user_id: s.id for s in layout.seats if s.user_id}
        for user in layout.users:
            assert user.current_seat_id == seat_of.get(user.id)

    def test_demo_shape(self):
        layout = get_layout("demo")
        assert len(layout.seats) == 6
        assert len(layout.zones) == 1
        assert len(layout.users) == 3

    def test_floor_plan_shape(self):
        layout = get_layout("floor_plan")
        assert len(layout.seats) == 11
        assert [z.name for z in layout.zones] == ["Zone A", "Zone B", "Zone C"]

    def test_get_layout_returns_copy(self):
        layout = get_layout("demo")
        layout.seats[1].occupied = True
        layout.seats[1].user_id = "user-1"
        assert not get_layout("demo").seats[1].occupied

    def test_unknown_layout(self):
        with pytest.raises(KeyError, match="Unknown layout"):
            get_layout("penthouse")
