"""Tests for Board placement and attack resolution."""

from __future__ import annotations

import random
from unittest.mock import patch

import pytest

from src.seabattle.core.errors import InvalidCoordinateError, InvariantViolation
from src.seabattle.core.result import RejectReason
from src.seabattle.game.board import Board, CellState
from src.seabattle.game.coordinates import Orientation
from src.seabattle.game.ship import Ship

BOARD_SIZE = 10
SHIP_COUNT = 3
SHIP_LENGTH = 3
PLACEMENT_CASES = [
    (10, 3, 3),
    (10, 5, 4),
    (8, 4, 3),
    (6, 3, 2),
    (10, 1, 10),
]


def _ship(start: tuple[int, int], orientation: Orientation = Orientation.HORIZONTAL) -> Ship:
    return Ship.create(start, SHIP_LENGTH, orientation)


class TestPlacement:
    def test_place_ship_hidden(self: TestPlacement, board: Board) -> None:
        """Hidden ships are tracked but not drawn."""
        ship = _ship((0, 0))
        assert board.place_ship(ship)
        assert board.ships == [ship]
        assert all(cell is CellState.WATER for row in board.get_grid_copy() for cell in row)

    def test_place_ship_revealed(self: TestPlacement, board: Board) -> None:
        ship = _ship((2, 2), Orientation.VERTICAL)
        assert board.place_ship(ship, reveal=True)
        for row, col in ship.locations:
            assert board.get_cell(row, col) is CellState.SHIP

    def test_reject_out_of_bounds(self: TestPlacement, board: Board) -> None:
        """A ship running off the edge is rejected whole."""
        assert not board.place_ship(_ship((0, 8)), reveal=True)
        assert board.ships == []
        assert board.get_cell(0, 8) is CellState.WATER

    def test_reject_overlap_with_hidden_ship(self: TestPlacement, board: Board) -> None:
        """Overlap is detected even when the first ship was never drawn."""
        assert board.place_ship(_ship((3, 3)))
        assert not board.place_ship(_ship((1, 4), Orientation.VERTICAL), reveal=True)
        assert len(board.ships) == 1
        assert board.get_cell(1, 4) is CellState.WATER

    def test_reject_empty_ship(self: TestPlacement, board: Board) -> None:
        """An empty ship would count as sunk, so it never joins the fleet."""
        assert not board.place_ship(Ship())
        assert not board.are_all_ships_sunk()

    def test_touching_ships_allowed(self: TestPlacement, board: Board) -> None:
        assert board.place_ship(_ship((0, 0)))
        assert board.place_ship(_ship((1, 0)))

    @pytest.mark.parametrize(("size", "count", "length"), PLACEMENT_CASES)
    def test_random_placement_places_full_fleet(
        self: TestPlacement,
        size: int,
        count: int,
        length: int,
    ) -> None:
        """Feasible fleets are placed completely and never overlap."""
        for seed in range(5):
            board = Board(size=size, rng=random.Random(seed))
            placed = board.place_ships_randomly(count, length)

            assert placed == count
            cells = [coord for ship in board.ships for coord in ship.locations]
            assert len(cells) == len(set(cells)) == count * length
            for row, col in cells:
                assert 0 <= row < size
                assert 0 <= col < size

    def test_random_placement_is_reproducible(self: TestPlacement) -> None:
        """The same seed gives the same fleet."""
        first = Board(size=BOARD_SIZE, rng=random.Random(7))
        second = Board(size=BOARD_SIZE, rng=random.Random(7))
        first.place_ships_randomly(SHIP_COUNT, SHIP_LENGTH)
        second.place_ships_randomly(SHIP_COUNT, SHIP_LENGTH)

        assert [s.locations for s in first.ships] == [s.locations for s in second.ships]
        assert [s.orientation for s in first.ships] == [s.orientation for s in second.ships]

    def test_random_placement_reveal(self: TestPlacement, board: Board) -> None:
        board.place_ships_randomly(SHIP_COUNT, SHIP_LENGTH, reveal=True)
        ship_cells = sum(
            1 for row in board.get_grid_copy() for cell in row if cell is CellState.SHIP
        )
        assert ship_cells == SHIP_COUNT * SHIP_LENGTH

    def test_random_placement_short_count(self: TestPlacement) -> None:
        """An impossible fleet stops at the attempt budget and warns."""
        board = Board(size=3, rng=random.Random(0))

        with patch("src.seabattle.game.board.logger") as mock_logger:
            placed = board.place_ships_randomly(5, 3)

        assert placed <= 3
        assert placed == len(board.ships)
        assert mock_logger.warning.called

    def test_random_placement_ship_too_long(self: TestPlacement, board: Board) -> None:
        with patch("src.seabattle.game.board.logger") as mock_logger:
            assert board.place_ships_randomly(1, BOARD_SIZE + 1) == 0
        assert mock_logger.warning.called


class TestAttacks:
    def test_miss_on_empty_board(self: TestAttacks, board: Board) -> None:
        """Attacking 00 on an empty board is a recorded miss."""
        result = board.process_attack("00")

        assert result.success
        assert result.data.hit is False
        assert result.data.sunk is False
        assert result.data.ship is None
        assert board.has_been_guessed("00")
        assert board.has_been_guessed((0, 0))
        assert board.get_cell(0, 0) is CellState.MISS

    def test_hit_and_sink(self: TestAttacks, board: Board) -> None:
        """Sunk is reported on the last covering hit only."""
        ship = _ship((5, 2), Orientation.VERTICAL)
        board.place_ship(ship)

        outcomes = [board.process_attack(coord).data for coord in ship.locations]

        assert [o.hit for o in outcomes] == [True, True, True]
        assert [o.sunk for o in outcomes] == [False, False, True]
        assert all(o.ship is ship for o in outcomes)
        assert board.get_cell(5, 2) is CellState.HIT

    def test_repeat_attack_rejected(self: TestAttacks, board: Board) -> None:
        """The second attack on a cell is rejected, not a miss."""
        board.place_ship(_ship((0, 0)))
        assert board.process_attack((0, 0)).success

        repeat = board.process_attack((0, 0))
        assert not repeat.success
        assert repeat.reason is RejectReason.ALREADY_GUESSED

        miss = board.process_attack((9, 9))
        assert board.process_attack("99").reason is RejectReason.ALREADY_GUESSED
        assert miss.data.hit is False

    def test_bad_coordinates_rejected(self: TestAttacks, board: Board) -> None:
        assert board.process_attack((10, 0)).reason is RejectReason.OUT_OF_RANGE
        assert board.process_attack("x1").reason is RejectReason.NOT_A_NUMBER
        assert board.process_attack("100").reason is RejectReason.INVALID_LENGTH
        assert board.guesses == frozenset()

    def test_already_hit_cell_is_invariant_violation(self: TestAttacks, board: Board) -> None:
        """A ship cell hit behind the board's back cannot be resolved again."""
        ship = _ship((0, 0))
        board.place_ship(ship)
        ship.hit((0, 0))

        with pytest.raises(InvariantViolation):
            board.process_attack((0, 0))

    def test_guesses_only_grow(self: TestAttacks, board: Board) -> None:
        seen: set[tuple[int, int]] = set()
        for coord in [(0, 0), (1, 1), (0, 0), (2, 2)]:
            board.process_attack(coord)
            seen.add(coord)
            assert board.guesses == frozenset(seen)


class TestQueries:
    def test_empty_board_is_not_defeated(self: TestQueries, board: Board) -> None:
        assert board.get_remaining_ship_count() == 0
        assert board.are_all_ships_sunk() is False

    def test_remaining_and_all_sunk(self: TestQueries, board: Board) -> None:
        first, second = _ship((0, 0)), _ship((5, 5))
        board.place_ship(first)
        board.place_ship(second)

        for coord in first.locations:
            board.process_attack(coord)
        assert board.get_remaining_ship_count() == 1
        assert not board.are_all_ships_sunk()

        for coord in second.locations:
            board.process_attack(coord)
        assert board.get_remaining_ship_count() == 0
        assert board.are_all_ships_sunk()

    def test_grid_copy_is_defensive(self: TestQueries, board: Board) -> None:
        grid = board.get_grid_copy()
        grid[0][0] = CellState.HIT
        assert board.get_cell(0, 0) is CellState.WATER

    def test_get_cell_out_of_bounds(self: TestQueries, board: Board) -> None:
        with pytest.raises(InvalidCoordinateError):
            board.get_cell(BOARD_SIZE, 0)

    def test_stats(self: TestQueries, board: Board) -> None:
        board.place_ship(_ship((0, 0)))
        board.process_attack((0, 0))
        board.process_attack((9, 9))

        stats = board.get_stats()

        assert stats["total_ships"] == 1
        assert stats["sunk_ships"] == 0
        assert stats["total_hits"] == 1
        assert stats["total_misses"] == 1
        assert stats["total_guesses"] == 2
        assert stats["accuracy"] == 50.0

    def test_reset(self: TestQueries, board: Board) -> None:
        board.place_ship(_ship((0, 0)), reveal=True)
        board.process_attack((0, 0))

        board.reset()

        assert board.ships == []
        assert board.guesses == frozenset()
        assert board.get_cell(0, 0) is CellState.WATER
        assert board.place_ship(_ship((0, 0)))
