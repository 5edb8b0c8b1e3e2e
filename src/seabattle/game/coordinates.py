"""
Coordinate helpers shared by the board and the attackers.

Boards up to 10x10 use the classic two-digit form ("34" is row 3, column 4).
Larger boards switch to a delimited "row,col" form so "111" never has to be
guessed at.
"""

from __future__ import annotations

from enum import Enum

from src.seabattle.core.result import RejectReason, ServiceResult

Coord = tuple[int, int]

SINGLE_DIGIT_LIMIT = 10
DELIMITER = ","

# up, down, left, right
NEIGHBOUR_OFFSETS: tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def in_bounds(coord: Coord, size: int) -> bool:
    row, col = coord
    return 0 <= row < size and 0 <= col < size


def format_coordinate(coord: Coord, size: int = SINGLE_DIGIT_LIMIT) -> str:
    """Serialize a coordinate in the canonical form for a board of ``size``."""
    row, col = coord
    if size <= SINGLE_DIGIT_LIMIT:
        return f"{row}{col}"
    return f"{row}{DELIMITER}{col}"


def _parse_axis(text: str) -> int | None:
    if not text or not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def parse_coordinate(raw: object, size: int) -> ServiceResult[Coord]:
    """Parse a raw coordinate string without raising."""
    if not isinstance(raw, str):
        return ServiceResult.fail(RejectReason.INVALID_LENGTH)

    if size <= SINGLE_DIGIT_LIMIT:
        if len(raw) != 2:
            return ServiceResult.fail(RejectReason.INVALID_LENGTH)
        parts = [raw[0], raw[1]]
    else:
        parts = raw.split(DELIMITER)
        if len(parts) != 2:
            return ServiceResult.fail(
                RejectReason.INVALID_LENGTH,
                "Oops, input must look like row,col (e.g., 0,0 or 11,3).",
            )

    row, col = (_parse_axis(part) for part in parts)
    if row is None or col is None:
        return ServiceResult.fail(RejectReason.NOT_A_NUMBER)

    if not in_bounds((row, col), size):
        return ServiceResult.fail(
            RejectReason.OUT_OF_RANGE,
            f"Oops, please enter valid row and column numbers between 0 and {size - 1}.",
        )
    return ServiceResult.ok((row, col))


def neighbours(coord: Coord, size: int) -> list[Coord]:
    """In-bounds orthogonal neighbours in up, down, left, right order."""
    row, col = coord
    return [
        (row + dr, col + dc)
        for dr, dc in NEIGHBOUR_OFFSETS
        if in_bounds((row + dr, col + dc), size)
    ]


def line_neighbours(coord: Coord, orientation: Orientation, size: int) -> list[Coord]:
    """The two cells either side of ``coord`` along ``orientation``."""
    row, col = coord
    if orientation is Orientation.HORIZONTAL:
        candidates = [(row, col - 1), (row, col + 1)]
    else:
        candidates = [(row - 1, col), (row + 1, col)]
    return [c for c in candidates if in_bounds(c, size)]


def infer_orientation(first: Coord, second: Coord) -> Orientation | None:
    """Orientation of the line through two hits, if they share an axis."""
    if first == second:
        return None
    if first[0] == second[0]:
        return Orientation.HORIZONTAL
    if first[1] == second[1]:
        return Orientation.VERTICAL
    return None


def on_line(coord: Coord, anchor: Coord, orientation: Orientation) -> bool:
    if orientation is Orientation.HORIZONTAL:
        return coord[0] == anchor[0]
    return coord[1] == anchor[1]
