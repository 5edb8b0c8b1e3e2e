from __future__ import annotations

from typing import Final

from decouple import config


def _optional_int(name: str) -> int | None:
    """Return env var as int, or None if unset/blank."""
    value = config(name, default="", cast=str).strip()
    return int(value) if value else None


# --- Board / fleet ---
BOARD_SIZE: Final[int] = config("BOARD_SIZE", default=10, cast=int)
SHIP_COUNT: Final[int] = config("SHIP_COUNT", default=3, cast=int)
SHIP_LENGTH: Final[int] = config("SHIP_LENGTH", default=3, cast=int)

# --- Retry budgets ---
MAX_PLACEMENT_ATTEMPTS: Final[int] = config(
    "MAX_PLACEMENT_ATTEMPTS", default=1000, cast=int
)
HUNT_SAMPLE_ATTEMPTS: Final[int] = config("HUNT_SAMPLE_ATTEMPTS", default=200, cast=int)

# --- Randomness ---
RANDOM_SEED: Final[int | None] = _optional_int("RANDOM_SEED")
