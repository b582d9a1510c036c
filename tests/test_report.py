"""Tests for per-user energy reports."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from eco_office.analysis.energy_report import build_energy_report
from eco_office.data.models import EnergyTier, PowerMode
from eco_office.store.memory import InMemoryMetricStore


def _device(store, user_id: str, energy_kwh: float, dark: bool) -> None:
    store.add_device_metric(
        user_id=user_id,
        is_dark_mode=dark,
        elapsed_hours=0.1,
        power_mode=PowerMode.balanced,
        energy_kwh=energy_kwh,
    )


def _seating(store, user_id: str, seat_id: int, score: float) -> None:
    store.add_seating_metric(
        user_id=user_id,
        seat_id=seat_id,
        energy_tier=EnergyTier.low,
        proximity_score=score,
    )


class TestEnergyReport:

    def test_empty_report(self, demo_store: InMemoryMetricStore):
        report = build_energy_report(demo_store, "user-1")
        assert report.total_energy_kwh == 0.0
        assert report.metrics_count == 0
        assert report.average_proximity_score == 0.0
        assert report.potential_savings == 100.0

    def test_aggregates(self, demo_store: InMemoryMetricStore):
        _device(demo_store, "user-1", 0.02, dark=True)
        _device(demo_store, "user-1", 0.03, dark=False)
        _seating(demo_store, "user-1", 2, 40.0)
        _seating(demo_store, "user-1", 4, 60.0)
        _device(demo_store, "user-2", 1.0, dark=True)

        report = build_energy_report(demo_store, "user-1")
        assert report.total_energy_kwh == pytest.approx(0.05)
        assert report.co2_kg == pytest.approx(0.05 * 0.233)
        assert report.average_proximity_score == 50.0
        assert report.potential_savings == 50.0
        assert report.metrics_count == 4
        assert report.dark_mode_ratio == 0.5

    def test_since_window(self, demo_store: InMemoryMetricStore):
        _device(demo_store, "user-1", 0.02, dark=True)
        future = datetime.now(timezone.utc) + timedelta(hours=1)
        report = build_energy_report(demo_store, "user-1", since=future)
        assert report.metrics_count == 0
        assert report.since == future

    def test_naive_since_treated_as_utc(self, demo_store: InMemoryMetricStore):
        _device(demo_store, "user-1", 0.02, dark=True)
        past = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(hours=1)
        report = build_energy_report(demo_store, "user-1", since=past)
        assert report.metrics_count == 1

    def test_configured_co2_factor(self, demo_store: InMemoryMetricStore):
        _device(demo_store, "user-1", 1.0, dark=False)
        report = build_energy_report(demo_store, "user-1", co2_kg_per_kwh=0.5)
        assert report.total_energy_kwh == pytest.approx(1.0)
        assert report.co2_kg == pytest.approx(0.5)

    def test_default_co2_factor(self, demo_store: InMemoryMetricStore):
        _device(demo_store, "user-1", 1.0, dark=False)
        assert build_energy_report(demo_store, "user-1").co2_kg == pytest.approx(0.233)
