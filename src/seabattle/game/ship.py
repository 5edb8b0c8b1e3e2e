"""A single ship: ordered cells plus per-cell hit tracking."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.seabattle.game.coordinates import Coord, Orientation, in_bounds


@dataclass
class Ship:
    locations: tuple[Coord, ...] = ()
    orientation: Orientation = Orientation.HORIZONTAL
    hits: list[bool] = field(default_factory=list)

    def __post_init__(self: Ship) -> None:
        self.locations = tuple(self.locations)
        if len(self.hits) != len(self.locations):
            self.hits = [False] * len(self.locations)

    @classmethod
    def create(
        cls: type[Ship],
        start: Coord,
        length: int,
        orientation: Orientation,
    ) -> Ship:
        """Build a straight run of ``length`` cells starting at ``start``."""
        row, col = start
        if orientation is Orientation.HORIZONTAL:
            cells = tuple((row, col + i) for i in range(length))
        else:
            cells = tuple((row + i, col) for i in range(length))
        return cls(locations=cells, orientation=orientation)

    @staticmethod
    def fits(start: Coord, length: int, orientation: Orientation, size: int) -> bool:
        """Return True if a run from ``start`` stays on a ``size`` board."""
        row, col = start
        if not in_bounds(start, size):
            return False
        if orientation is Orientation.HORIZONTAL:
            return col + length <= size
        return row + length <= size

    @property
    def length(self: Ship) -> int:
        return len(self.locations)

    def has_location(self: Ship, coord: Coord) -> bool:
        return coord in self.locations

    def hit(self: Ship, coord: Coord) -> bool:
        """Mark ``coord`` as hit; False if it is not ours or was already hit."""
        if coord not in self.locations:
            return False
        index = self.locations.index(coord)
        if self.hits[index]:
            return False
        self.hits[index] = True
        return True

    def is_hit(self: Ship, coord: Coord) -> bool:
        if coord not in self.locations:
            return False
        return self.hits[self.locations.index(coord)]

    def is_sunk(self: Ship) -> bool:
        return all(self.hits)

    def get_hit_count(self: Ship) -> int:
        return sum(self.hits)

    def reset(self: Ship) -> None:
        self.hits = [False] * len(self.locations)

    def __str__(self: Ship) -> str:
        cells = " ".join(f"{r},{c}" for r, c in self.locations)
        return (
            f"Ship({cells}, {self.orientation.value}, "
            f"hits: {self.get_hit_count()}/{self.length})"
        )
