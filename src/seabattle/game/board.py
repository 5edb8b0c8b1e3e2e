"""
Battleship board: fleet placement and attack resolution for one side.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from src.seabattle.core.config import BOARD_SIZE, MAX_PLACEMENT_ATTEMPTS
from src.seabattle.core.errors import InvalidCoordinateError, InvariantViolation
from src.seabattle.core.result import RejectReason, ServiceResult
from src.seabattle.game.coordinates import (
    Coord,
    Orientation,
    format_coordinate,
    in_bounds,
    parse_coordinate,
)
from src.seabattle.game.ship import Ship

logger = logging.getLogger(__name__)


class CellState(Enum):
    WATER = "~"
    SHIP = "S"
    HIT = "X"
    MISS = "O"


@dataclass(frozen=True)
class AttackResult:
    """Outcome of a resolved attack."""

    hit: bool
    sunk: bool
    ship: Ship | None
    coordinate: Coord


@dataclass
class Board:
    """Holds the grid, the fleet and the attacked cells for one side."""

    size: int = BOARD_SIZE
    rng: random.Random = field(default_factory=random.Random, repr=False)  # noqa: S311
    _grid: list[list[CellState]] = field(init=False, repr=False)
    _ships: list[Ship] = field(init=False, default_factory=list)
    _occupied: dict[Coord, Ship] = field(init=False, default_factory=dict, repr=False)
    _guesses: set[Coord] = field(init=False, default_factory=set)

    def __post_init__(self: Board) -> None:
        self._grid = self._empty_grid()

    def _empty_grid(self: Board) -> list[list[CellState]]:
        return [[CellState.WATER for _ in range(self.size)] for _ in range(self.size)]

    @property
    def ships(self: Board) -> list[Ship]:
        return list(self._ships)

    @property
    def guesses(self: Board) -> frozenset[Coord]:
        return frozenset(self._guesses)

    def get_cell(self: Board, row: int, col: int) -> CellState:
        if not in_bounds((row, col), self.size):
            raise InvalidCoordinateError(f"Invalid coordinate: {row}, {col}")
        return self._grid[row][col]

    def get_grid_copy(self: Board) -> list[list[CellState]]:
        return [list(row) for row in self._grid]

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def place_ship(self: Board, ship: Ship, reveal: bool = False) -> bool:
        """Add ``ship`` if every cell is on the board and unoccupied."""
        for coord in ship.locations:
            if not in_bounds(coord, self.size) or coord in self._occupied:
                return False
        if not ship.locations or len(set(ship.locations)) != ship.length:
            return False

        self._ships.append(ship)
        for row, col in ship.locations:
            self._occupied[(row, col)] = ship
            if reveal:
                self._grid[row][col] = CellState.SHIP
        return True

    def place_ships_randomly(
        self: Board,
        count: int,
        length: int,
        reveal: bool = False,
    ) -> int:
        """Place up to ``count`` ships of ``length``; return how many fit."""
        placed = 0
        attempts = 0
        if length > self.size:
            logger.warning(
                "Ship length %d does not fit a %dx%d board", length, self.size, self.size
            )
            return 0

        while placed < count and attempts < MAX_PLACEMENT_ATTEMPTS:
            attempts += 1
            if self.rng.random() < 0.5:
                orientation = Orientation.HORIZONTAL
                start = (
                    self.rng.randrange(self.size),
                    self.rng.randrange(self.size - length + 1),
                )
            else:
                orientation = Orientation.VERTICAL
                start = (
                    self.rng.randrange(self.size - length + 1),
                    self.rng.randrange(self.size),
                )

            if self.place_ship(Ship.create(start, length, orientation), reveal):
                placed += 1

        if placed < count:
            logger.warning(
                "Placed only %d of %d ships after %d attempts", placed, count, attempts
            )
        return placed

    # ------------------------------------------------------------------
    # Attacks
    # ------------------------------------------------------------------

    def _resolve_coordinate(self: Board, coord: Coord | str) -> ServiceResult[Coord]:
        if isinstance(coord, str):
            return parse_coordinate(coord, self.size)
        if not in_bounds(coord, self.size):
            return ServiceResult.fail(RejectReason.OUT_OF_RANGE)
        return ServiceResult.ok(coord)

    def has_been_guessed(self: Board, coord: Coord | str) -> bool:
        parsed = self._resolve_coordinate(coord)
        return parsed.success and parsed.data in self._guesses

    def process_attack(self: Board, coord: Coord | str) -> ServiceResult[AttackResult]:
        """Resolve an attack; repeats are rejected, never treated as misses."""
        parsed = self._resolve_coordinate(coord)
        if not parsed.success:
            return ServiceResult.fail(parsed.reason, parsed.error)

        target = parsed.data
        if target in self._guesses:
            return ServiceResult.fail(RejectReason.ALREADY_GUESSED)

        self._guesses.add(target)
        row, col = target
        ship = self._occupied.get(target)

        if ship is None:
            self._grid[row][col] = CellState.MISS
            return ServiceResult.ok(
                AttackResult(hit=False, sunk=False, ship=None, coordinate=target)
            )

        if not ship.hit(target):
            raise InvariantViolation(
                f"Cell {format_coordinate(target, self.size)} was already hit on {ship}"
            )

        self._grid[row][col] = CellState.HIT
        sunk = ship.is_sunk()
        if sunk:
            logger.debug("Ship sunk: %s", ship)
        return ServiceResult.ok(AttackResult(hit=True, sunk=sunk, ship=ship, coordinate=target))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_remaining_ship_count(self: Board) -> int:
        return sum(1 for ship in self._ships if not ship.is_sunk())

    def are_all_ships_sunk(self: Board) -> bool:
        # An empty board has not been defeated, it has not been set up yet.
        return bool(self._ships) and all(ship.is_sunk() for ship in self._ships)

    def get_stats(self: Board) -> dict[str, int | float]:
        total_ships = len(self._ships)
        sunk_ships = total_ships - self.get_remaining_ship_count()
        total_hits = sum(ship.get_hit_count() for ship in self._ships)
        total_guesses = len(self._guesses)
        accuracy = total_hits / total_guesses * 100 if total_guesses else 0.0
        return {
            "total_ships": total_ships,
            "sunk_ships": sunk_ships,
            "remaining_ships": total_ships - sunk_ships,
            "total_hits": total_hits,
            "total_misses": total_guesses - total_hits,
            "total_guesses": total_guesses,
            "accuracy": round(accuracy, 1),
        }

    def reset(self: Board) -> None:
        self._grid = self._empty_grid()
        self._ships.clear()
        self._occupied.clear()
        self._guesses.clear()
