"""Pydantic schemas for game setup."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.seabattle.core.config import BOARD_SIZE, RANDOM_SEED, SHIP_COUNT, SHIP_LENGTH

MIN_BOARD_SIZE = 2
MAX_BOARD_SIZE = 26


class GameSettings(BaseModel):
    """Board size and fleet shape for one game."""

    model_config = ConfigDict(frozen=True)

    board_size: int = Field(default=BOARD_SIZE, ge=MIN_BOARD_SIZE, le=MAX_BOARD_SIZE)
    ship_count: int = Field(default=SHIP_COUNT, ge=1)
    ship_length: int = Field(default=SHIP_LENGTH, ge=1)
    seed: int | None = None

    @model_validator(mode="after")
    def _fleet_fits(self) -> GameSettings:
        if self.ship_length > self.board_size:
            raise ValueError("ship_length cannot exceed board_size")
        if self.ship_count * self.ship_length > self.board_size**2:
            raise ValueError("fleet has more cells than the board")
        return self

    @classmethod
    def from_env(cls) -> GameSettings:
        return cls(
            board_size=BOARD_SIZE,
            ship_count=SHIP_COUNT,
            ship_length=SHIP_LENGTH,
            seed=RANDOM_SEED,
        )
