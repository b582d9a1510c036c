# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for proximity scoring, reward scoring, and levels."""

from __future__ import annotations

import pytest

from eco_office.data.models import SessionSample, Seat, User
from eco_office.errors import NotFoundError
from eco_office.scoring.proximity import ProximityScorer, proximity_score
from eco_office.scoring.rewards import (
    RewardScorer,
    apply_delta,
    eco_score,
    leaderboard,
    point_delta,
)
from eco_office.scoring.thresholds import level_progress, next_level, points_to_level
from eco_office.store.memory import InMemoryMetricStore


def _seat(seat_id: int, x: float, y: float, user_id: str | None = None) -> Seat:
    return Seat(id=seat_id, x=x, y=y, occupied=user_id is not None, user_id=user_id)


class TestProximityScore:
    """Tests for the capped mean-distance proximity score."""

    def test_single_neighbour(self):
        target = _seat(1, 0, 0)
        assert proximity_score(target, [target, _seat(2, 3, 4, "a")]) == 5.0

    def test_mean_of_neighbours(self):
        target = _seat(1, 0, 0)
        seats = [target, _seat(2, 3, 4, "a"), _seat(3, 6, 8, "b")]
        assert proximity_score(target, seats) == 7.5

    def test_free_seats_ignored(self):
        target = _seat(1, 0, 0)
        seats = [target, _seat(2, 3, 4, "a"), _seat(3, 1, 1)]
        assert proximity_score(target, seats) == 5.0

    def test_target_excluded_even_when_occupied(self):
        target = _seat(1, 0, 0, "me")
        assert proximity_score(target, [target, _seat(2, 0, 10, "a")]) == 10.0

    def test_isolated_seat_scores_ceiling(self):
        target = _seat(1, 0, 0)
        assert proximity_score(target, [target, _seat(2, 1, 1)]) == 100.0

    def test_missing_target_scores_ceiling(self):
        assert proximity_score(None, [_seat(2, 1, 1, "a")]) == 100.0

    def test_capped_at_ceiling(self):
        target = _seat(1, 0, 0)
        assert proximity_score(target, [target, _seat(2, 1000, 1000, "a")]) == 100.0

    @pytest.mark.parametrize("x,y", [(0, 0), (50, 50), (250, 400), (-300, 10)])
    def test_always_in_range(self, x: float, y: float):
        target = _seat(1, x, y)
        seats = [target, _seat(2, 10, 20, "a"), _seat(3, 200, 90, "b")]
        assert 0 <= proximity_score(target, seats) <= 100


class TestProximityScorer:

    def test_score_against_store(self, small_store: InMemoryMetricStore):
        scorer = ProximityScorer(small_store)
        # seat 4 at (6, 8): distances 10 and 5 to seats 1 and 2
        assert scorer.score(4) == 7.5

    def test_unknown_seat(self, small_store: InMemoryMetricStore):
        assert ProximityScorer(small_store).score(99) == 100.0

    def test_reflects_live_occupancy(self, small_store: InMemoryMetricStore):
        scorer = ProximityScorer(small_store)
        small_store.release_seat("b")
        assert scorer.score(4) == 10.0

    def test_score_all(self, small_store: InMemoryMetricStore):
        scores = ProximityScorer(small_store).score_all(small_store.get_seats())
        assert set(scores) == {1, 2, 3, 4}
        assert scores[1] == 5.0


class TestEcoScore:
    """Tests for the eco score and its point delta."""

    def test_perfect_sample(self):
        sample = SessionSample(is_dark_mode=True, elapsed_hours=1.2, energy_kwh=0.0)
        assert eco_score(sample) == pytest.approx(1.0)
        assert point_delta(eco_score(sample)) == 10

    def test_worst_sample(self):
        sample = SessionSample(is_dark_mode=False, elapsed_hours=0.0, energy_kwh=0.05)
        assert eco_score(sample) == 0.0
        assert point_delta(0.0) == -10

    def test_dark_mode_first_sample(self):
        sample = SessionSample(is_dark_mode=True, elapsed_hours=0.0, energy_kwh=0.0)
        assert eco_score(sample) == pytest.approx(0.7)
        assert point_delta(eco_score(sample)) == 4

    def test_full_uptime_at_reference_energy(self):
        sample = SessionSample(is_dark_mode=True, elapsed_hours=1.2, energy_kwh=0.05)
        assert eco_score(sample) == pytest.approx(0.7)
        assert point_delta(eco_score(sample)) == 4

    def test_uptime_saturates(self):
        long = SessionSample(elapsed_hours=10.0, energy_kwh=0.0)
        target = SessionSample(elapsed_hours=1.2, energy_kwh=0.0)
        assert eco_score(long) == pytest.approx(eco_score(target))

    def test_energy_component_floored(self):
        sample = SessionSample(elapsed_hours=0.0, energy_kwh=5.0)
        assert eco_score(sample) == 0.0

    @pytest.mark.parametrize("score,expected", [
        (0.5, 0),
        (0.625, 3),
        (0.375, -2),
        (0.8, 6),
        (1.0, 10),
        (0.0, -10),
    ])
    def test_point_delta(self, score: float, expected: int):
        assert point_delta(score) == expected

    def test_point_delta_clamped(self):
        assert point_delta(2.0) == 10
        assert point_delta(-1.0) == -10

    def test_apply_delta_floors_at_zero(self):
        assert apply_delta(3, -10) == 0
        assert apply_delta(3, 4) == 7


class TestRewardScorer:

    def test_apply_updates_balance(self, demo_store: InMemoryMetricStore):
        scorer = RewardScorer(demo_store)
        sample = SessionSample(is_dark_mode=True, elapsed_hours=1.2, energy_kwh=0.0)
        result = scorer.apply("user-2", sample)
        assert result.delta == 10
        assert result.points == 900
        assert demo_store.get_user("user-2").points == 900

    def test_balance_never_negative(self, small_store: InMemoryMetricStore):
        scorer = RewardScorer(small_store)
        worst = SessionSample(energy_kwh=1.0)
        result = scorer.apply("c", worst)
        assert result.points == 0
        assert small_store.get_user("c").points == 0

    def test_level_recomputed(self, demo_store: InMemoryMetricStore):
        scorer = RewardScorer(demo_store)
        user = scorer.award("user-2", 110)
        assert user.points == 1000
        assert user.level == "Eco Champion"

    def test_level_drops_with_points(self, small_store: InMemoryMetricStore):
        scorer = RewardScorer(small_store)
        result = scorer.apply("b", SessionSample(energy_kwh=1.0))
        assert result.points == 590
        assert result.level == "Green Warrior"

    def test_seat_untouched(self, demo_store: InMemoryMetricStore):
        RewardScorer(demo_store).award("user-1", 5)
        assert demo_store.get_user("user-1").current_seat_id == 1

    def test_unknown_user(self, demo_store: InMemoryMetricStore):
        with pytest.raises(NotFoundError):
            RewardScorer(demo_store).apply("ghost", SessionSample())

    def test_negative_award_rejected(self, demo_store: InMemoryMetricStore):
        with pytest.raises(ValueError):
            RewardScorer(demo_store).award("user-1", -5)

    def test_score_does_not_mutate(self, demo_store: InMemoryMetricStore):
        score, delta = RewardScorer(demo_store).score(SessionSample())
        assert 0 <= score <= 1
        assert -10 <= delta <= 10
        assert demo_store.get_user("user-1").points == 1250


class TestLeaderboard:

    def test_sorted_by_points(self, demo_store: InMemoryMetricStore):
        ranked = leaderboard(demo_store.get_users())
        assert [u.id for u in ranked] == ["user-3", "user-1", "user-2"]

    def test_limit(self, floor_store: InMemoryMetricStore):
        ranked = leaderboard(floor_store.get_users(), limit=2)
        assert [u.id for u in ranked] == ["sarah", "alex"]

    def test_input_not_mutated(self):
        users = [User(id="a", name="A", points=1), User(id="b", name="B", points=2)]
        leaderboard(users)
        assert [u.id for u in users] == ["a", "b"]


class TestLevels:
    """Tests for the point thresholds behind level labels."""

    @pytest.mark.parametrize("points,label", [
        (0, "Eco Beginner"),
        (499, "Eco Beginner"),
        (500, "Green Warrior"),
        (999, "Green Warrior"),
        (1000, "Eco Champion"),
        (1999, "Eco Champion"),
        (2000, "Sustainability Expert"),
        (50000, "Sustainability Expert"),
    ])
    def test_points_to_level(self, points: int, label: str):
        assert points_to_level(points) == label

    def test_next_level(self):
        assert next_level(890) == ("Eco Champion", 110)
        assert next_level(0) == ("Green Warrior", 500)
        assert next_level(2100) is None

    def test_level_progress(self):
        assert level_progress(750) == 50.0
        assert level_progress(1000) == 0.0
        assert level_progress(2500) == 100.0
