# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Ambient environment readers used by the session tracker.

A reader reports the display-mode preference and the power-source
state.  Either signal may be unavailable (``None``); the tracker then
falls back to light mode and the ``balanced`` power mode.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Protocol, runtime_checkable

import psutil
from pydantic import BaseModel, Field

from eco_office.data.models import PowerMode
from eco_office.scoring.weights import LOW_BATTERY_THRESHOLD

logger = logging.getLogger(__name__)

DARK_MODE_ENV_VAR = "ECO_OFFICE_DARK_MODE"
_TRUTHY = {"1", "true", "yes", "on", "dark"}


class PowerStatus(BaseModel):
    """Power-source state reported by the device."""

    charging: bool = Field(..., description="Plugged into mains power")
    battery_percent: Optional[float] = Field(
        default=None, ge=0, le=100, description="Remaining battery charge"
    )


def power_mode_for(
    status: Optional[PowerStatus],
    low_battery_threshold: float = LOW_BATTERY_THRESHOLD,
) -> PowerMode:
    """Derive the power mode from a power status.

    Charging devices run in ``performance``; devices on battery below the
    threshold in ``power-saver``; everything else, including an unknown
    status, in ``balanced``.
    """
    if status is None:
        return PowerMode.balanced
    if status.charging:
        return PowerMode.performance
    if status.battery_percent is not None and status.battery_percent < low_battery_threshold:
        return PowerMode.power_saver
    return PowerMode.balanced


@runtime_checkable
class EnvironmentReader(Protocol):
    """Protocol that all environment readers must satisfy."""

    def is_dark_mode(self) -> Optional[bool]:
        """True for a dark display theme, None if unknown."""
        ...

    def power_status(self) -> Optional[PowerStatus]:
        """Current power-source state, None if unavailable."""
        ...


class StaticEnvironment:
    """Environment reader returning fixed values."""

    def __init__(
        self,
        dark_mode: Optional[bool] = None,
        power: Optional[PowerStatus] = None,
    ) -> None:
        self.dark_mode = dark_mode
        self.power = power

    def is_dark_mode(self) -> Optional[bool]:
        return self.dark_mode

    def power_status(self) -> Optional[PowerStatus]:
        return self.power


class SystemEnvironment:
    """Reads the host machine.

    The display mode comes from the configured preference, falling back
    to ``$ECO_OFFICE_DARK_MODE``.  Power state comes from
    :func:`psutil.sensors_battery`, which reports nothing on machines
    without a battery.
    """

    def __init__(self, dark_mode: Optional[bool] = None) -> None:
        self.dark_mode = dark_mode

    def is_dark_mode(self) -> Optional[bool]:
        if self.dark_mode is not None:
            return self.dark_mode
        raw = os.environ.get(DARK_MODE_ENV_VAR)
        if raw is None:
            return None
        return raw.strip().lower() in _TRUTHY

    def power_status(self) -> Optional[PowerStatus]:
        battery = psutil.sensors_battery()
        if battery is None:
            logger.debug("No battery information available")
            return None
        return PowerStatus(
            charging=bool(battery.power_plugged),
            battery_percent=max(0.0, min(100.0, float(battery.percent))),
        )
