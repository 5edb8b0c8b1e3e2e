"""Shared fixtures: pinned config and seeded randomness."""

from __future__ import annotations

import os
import random
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from src.seabattle.game.board import Board

os.environ["BOARD_SIZE"] = "10"
os.environ["SHIP_COUNT"] = "3"
os.environ["SHIP_LENGTH"] = "3"
os.environ["RANDOM_SEED"] = ""

SEED = 1234


@pytest.fixture()
def rng() -> random.Random:
    """A deterministic random source."""
    return random.Random(SEED)


@pytest.fixture()
def board(rng: random.Random) -> Board:
    """An empty 10x10 board with a seeded generator."""
    from src.seabattle.game.board import Board

    return Board(size=10, rng=rng)
