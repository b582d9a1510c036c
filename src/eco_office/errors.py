# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Exception hierarchy shared by the store and the engines."""

from __future__ import annotations


class EcoOfficeError(Exception):
    """Base class for all errors raised by eco_office."""


class NotFoundError(EcoOfficeError, KeyError):
    """A user, seat, or zone id has no matching record."""

    def __init__(self, kind: str, key: object) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} {key!r} not found")

    def __str__(self) -> str:
        return f"{self.kind} {self.key!r} not found"


class InvariantViolation(EcoOfficeError):
    """An operation would leave the store in an inconsistent state."""


class SeatOccupiedError(InvariantViolation):
    """The requested seat is already held by another user."""

    def __init__(self, seat_id: int, holder: str) -> None:
        self.seat_id = seat_id
        self.holder = holder
        super().__init__(f"Seat {seat_id} is already occupied by {holder!r}")
