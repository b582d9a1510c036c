# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Runtime settings model and YAML loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field

CONFIG_ENV_VAR = "ECO_OFFICE_CONFIG"


# ---------------------------------------------------------------------------
# Store selection
# ---------------------------------------------------------------------------

class StoreConfig(BaseModel):
    """Which metric store backend to build and where it keeps its data."""

    backend: Literal["memory", "json"] = Field(
        default="memory", description="Store backend: memory or json"
    )
    path: Optional[str] = Field(
        default=None, description="JSON file path (json backend only)"
    )


# ---------------------------------------------------------------------------
# Engine settings
# ---------------------------------------------------------------------------

class Settings(BaseModel):
    """Tunable constants of the tracker, scorers, and calculators."""

    sample_period_seconds: float = Field(
        default=30.0, gt=0, description="Session tracker sampling period"
    )
    base_rate_kwh_per_hour: float = Field(
        default=0.05, gt=0, description="Laptop consumption per hour of session"
    )
    dark_mode_factor: float = Field(
        default=0.8, gt=0, le=1.0,
        description="Consumption multiplier applied while dark mode is on",
    )
    low_battery_threshold: float = Field(
        default=20.0, ge=0, le=100,
        description="Battery percentage below which power-saver is assumed",
    )
    co2_kg_per_kwh: float = Field(
        default=0.233, ge=0, description="Grid emission factor in kg CO2/kWh"
    )
    dark_mode: Optional[bool] = Field(
        default=None,
        description="Display-mode preference; None means read ECO_OFFICE_DARK_MODE",
    )
    layout: str = Field(default="demo", description="Preset layout used to seed stores")
    store: StoreConfig = Field(default_factory=StoreConfig)


def load_settings(path: str | Path) -> Settings:
    """Load :class:`Settings` from a YAML file."""
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    return Settings.model_validate(raw)


def resolve_settings(path: str | Path | None = None) -> Settings:
    """Load settings from *path*, then ``$ECO_OFFICE_CONFIG``, else defaults."""
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if path:
        return load_settings(path)
    return Settings()
