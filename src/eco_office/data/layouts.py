"""Office layout presets used to seed metric stores.

Each layout bundles seats, zones, and users into a consistent
:class:`~eco_office.data.models.OfficeLayout` snapshot.
"""

from __future__ import annotations

from eco_office.data.models import EnergyTier, OfficeLayout, Seat, User, Zone

low, medium, high = EnergyTier.low, EnergyTier.medium, EnergyTier.high


DEMO = OfficeLayout(
    name="demo",
    description="Single open-plan work area with six desks and three colleagues.",
    users=[
        User(id="user-1", name="John Doe", email="john@example.com",
             points=1250, level="Eco Champion", current_seat_id=1),
        User(id="user-2", name="Jane Smith", email="jane@example.com",
             points=890, level="Green Warrior", current_seat_id=3),
        User(id="user-3", name="Mike Johnson", email="mike@example.com",
             points=2100, level="Sustainability Expert", current_seat_id=5),
    ],
    seats=[
        Seat(id=1, x=100, y=100, occupied=True, user_id="user-1", energy_tier=low),
        Seat(id=2, x=200, y=100, energy_tier=medium),
        Seat(id=3, x=300, y=100, occupied=True, user_id="user-2", energy_tier=high),
        Seat(id=4, x=100, y=200, energy_tier=low),
        Seat(id=5, x=200, y=200, occupied=True, user_id="user-3", energy_tier=medium),
        Seat(id=6, x=300, y=200, energy_tier=high),
    ],
    zones=[
        Zone(id=1, name="Main Work Area", x=50, y=50, width=300, height=200,
             seat_ids=[1, 2, 3, 4, 5, 6],
             devices=["2x AC Units", "8x Lights", "3x Fans"]),
    ],
)

FLOOR_PLAN = OfficeLayout(
    name="floor_plan",
    description="Eleven desks split across three zones with mixed devices.",
    users=[
        User(id="alex", name="Alex Johnson", email="alex@example.com",
             points=1250, level="Eco Champion", current_seat_id=1),
        User(id="sarah", name="Sarah Chen", email="sarah@example.com",
             points=2150, level="Sustainability Expert", current_seat_id=3),
        User(id="mike", name="Mike Rodriguez", email="mike@example.com",
             points=1180, level="Eco Champion", current_seat_id=5),
        User(id="emma", name="Emma Wilson", email="emma@example.com",
             points=950, level="Green Warrior", current_seat_id=7),
        User(id="david", name="David Kim", email="david@example.com",
             points=420, level="Eco Beginner", current_seat_id=10),
    ],
    seats=[
        Seat(id=1, x=100, y=100, occupied=True, user_id="alex", energy_tier=low),
        Seat(id=2, x=200, y=100, energy_tier=medium),
        Seat(id=3, x=300, y=100, occupied=True, user_id="sarah", energy_tier=low),
        Seat(id=4, x=400, y=100, energy_tier=high),
        Seat(id=5, x=100, y=200, occupied=True, user_id="mike", energy_tier=medium),
        Seat(id=6, x=200, y=200, energy_tier=low),
        Seat(id=7, x=300, y=200, occupied=True, user_id="emma", energy_tier=medium),
        Seat(id=8, x=400, y=200, energy_tier=low),
        Seat(id=9, x=150, y=300, energy_tier=low),
        Seat(id=10, x=250, y=300, occupied=True, user_id="david", energy_tier=high),
        Seat(id=11, x=350, y=300, energy_tier=medium),
    ],
    zones=[
        Zone(id=1, name="Zone A", x=50, y=50, width=200, height=170,
             seat_ids=[1, 2, 5, 6], devices=["AC Unit", "2x Lights"]),
        Zone(id=2, name="Zone B", x=270, y=50, width=200, height=170,
             seat_ids=[3, 4, 7, 8], devices=["Fan", "3x Lights"]),
        Zone(id=3, name="Zone C", x=50, y=250, width=420, height=120,
             seat_ids=[9, 10, 11], devices=["AC Unit", "Fan", "4x Lights"]),
    ],
)


# ---------------------------------------------------------------------------
# Layout registry
# ---------------------------------------------------------------------------

LAYOUTS: dict[str, OfficeLayout] = {
    "demo": DEMO,
    "floor_plan": FLOOR_PLAN,
}


def get_layout(name: str) -> OfficeLayout:
    """Return a private copy of the layout registered under *name*.

    Stores mutate the records they are seeded with, so callers always
    receive a deep copy rather than the module-level preset.

    Raises
    ------
    KeyError
        If *name* does not match any registered layout.
    """
    try:
        return LAYOUTS[name].model_copy(deep=True)
    except KeyError:
        available = ", ".join(sorted(LAYOUTS.keys()))
        raise KeyError(
            f"Unknown layout '{name}'. Available layouts: {available}"
        ) from None
