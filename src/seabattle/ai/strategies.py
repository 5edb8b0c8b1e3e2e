"""Move strategies for attackers: human input and the hunt/target AI."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from src.seabattle.ai.schemas import StrategySnapshot
from src.seabattle.core.config import HUNT_SAMPLE_ATTEMPTS
from src.seabattle.core.errors import NoMovesAvailableError
from src.seabattle.game.coordinates import (
    Coord,
    Orientation,
    format_coordinate,
    infer_orientation,
    line_neighbours,
    neighbours,
    on_line,
)

if TYPE_CHECKING:
    from src.seabattle.ai.attacker import AttackerState
    from src.seabattle.game.board import AttackResult

logger = logging.getLogger(__name__)


class AIMode(Enum):
    HUNT = "hunt"
    TARGET = "target"


class MoveStrategy(ABC):
    """Decides the next raw coordinate and learns from attack outcomes."""

    @abstractmethod
    def next_move(self, state: AttackerState) -> str:
        """Return the next coordinate to attack, in its string form."""

    def on_result(self, state: AttackerState, outcome: AttackResult) -> None:
        """Update strategy state with an attack outcome."""

    def snapshot(self) -> StrategySnapshot | None:
        return None


class HumanStrategy(MoveStrategy):
    """Moves come from an external input source (console, UI, test script)."""

    def __init__(self, read_input: Callable[[], str]) -> None:
        self.read_input = read_input

    def next_move(self, state: AttackerState) -> str:
        return self.read_input()


@dataclass
class TargetingState:
    """Mutable hunt/target bookkeeping."""

    mode: AIMode = AIMode.HUNT
    queue: deque[Coord] = field(default_factory=deque)
    last_hit: Coord | None = None
    orientation: Orientation | None = None

    def clear_engagement(self) -> None:
        self.queue.clear()
        self.last_hit = None
        self.orientation = None

    def enqueue(self, coords: list[Coord], guessed: set[Coord] | frozenset[Coord]) -> None:
        for coord in coords:
            if coord not in guessed and coord not in self.queue:
                self.queue.append(coord)

    def prune_to_line(
        self,
        anchor: Coord,
        orientation: Orientation,
        guessed: set[Coord] | frozenset[Coord],
    ) -> None:
        self.queue = deque(
            c for c in self.queue if c not in guessed and on_line(c, anchor, orientation)
        )


class HuntTargetStrategy(MoveStrategy):
    """Random search until a hit, then sweep neighbours and follow the line."""

    def __init__(
        self,
        rng: random.Random | None = None,
        sample_attempts: int = HUNT_SAMPLE_ATTEMPTS,
    ) -> None:
        self.rng = rng or random.Random()  # noqa: S311
        self.sample_attempts = sample_attempts
        self.state = TargetingState()

    @property
    def mode(self) -> AIMode:
        return self.state.mode

    # ------------------------------------------------------------------
    # Move selection
    # ------------------------------------------------------------------

    def next_move(self, state: AttackerState) -> str:
        coord = self._choose(state)
        return format_coordinate(coord, state.board_size)

    def _choose(self, state: AttackerState) -> Coord:
        if self.state.mode is AIMode.TARGET:
            target = self._target_move(state)
            if target is not None:
                return target
            coord = self._hunt_move(state)
            logger.debug("Target queue exhausted, back to hunting")
            self.state.mode = AIMode.HUNT
            self.state.clear_engagement()
            return coord
        return self._hunt_move(state)

    def _target_move(self, state: AttackerState) -> Coord | None:
        targeting = self.state
        targeting.queue = deque(c for c in targeting.queue if c not in state.guesses)
        if not targeting.queue:
            return None

        if (
            targeting.orientation is not None
            and targeting.last_hit is not None
            and len(targeting.queue) > 1
        ):
            for candidate in targeting.queue:
                if on_line(candidate, targeting.last_hit, targeting.orientation):
                    targeting.queue.remove(candidate)
                    return candidate

        return targeting.queue.popleft()

    def _hunt_move(self, state: AttackerState) -> Coord:
        size = state.board_size
        for _ in range(self.sample_attempts):
            coord = (self.rng.randrange(size), self.rng.randrange(size))
            if coord not in state.guesses:
                return coord

        for row in range(size):
            for col in range(size):
                if (row, col) not in state.guesses:
                    return (row, col)

        raise NoMovesAvailableError(f"All {size * size} cells have already been guessed")

    # ------------------------------------------------------------------
    # Learning from outcomes
    # ------------------------------------------------------------------

    def on_result(self, state: AttackerState, outcome: AttackResult) -> None:
        targeting = self.state
        coord = outcome.coordinate

        if outcome.sunk:
            targeting.clear_engagement()
            targeting.mode = AIMode.HUNT
            return

        if outcome.hit:
            self._on_hit(state, coord)
            return

        if targeting.mode is AIMode.TARGET and not targeting.queue:
            targeting.mode = AIMode.HUNT
            targeting.last_hit = None
            targeting.orientation = None

    def _on_hit(self, state: AttackerState, coord: Coord) -> None:
        targeting = self.state
        size = state.board_size
        targeting.mode = AIMode.TARGET

        orientation = None
        if targeting.last_hit is not None:
            orientation = infer_orientation(targeting.last_hit, coord)

        if orientation is None:
            # First hit of an engagement, or a hit that does not line up.
            targeting.orientation = None
            targeting.enqueue(neighbours(coord, size), state.guesses)
        else:
            if orientation is not targeting.orientation:
                logger.debug(
                    "Inferred %s ship from %s and %s",
                    orientation.value,
                    targeting.last_hit,
                    coord,
                )
            targeting.orientation = orientation
            targeting.prune_to_line(coord, orientation, state.guesses)
            targeting.enqueue(line_neighbours(coord, orientation, size), state.guesses)

        targeting.last_hit = coord

    def snapshot(self) -> StrategySnapshot:
        targeting = self.state
        return StrategySnapshot(
            mode=targeting.mode.value,
            pending=list(targeting.queue),
            last_hit=targeting.last_hit,
            orientation=targeting.orientation.value if targeting.orientation else None,
        )
