"""Attacker role: guess bookkeeping against one opposing board."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.seabattle.ai.strategies import HumanStrategy, HuntTargetStrategy, MoveStrategy
from src.seabattle.core.config import BOARD_SIZE
from src.seabattle.core.errors import InvariantViolation
from src.seabattle.core.result import RejectReason, ServiceResult
from src.seabattle.game.coordinates import Coord, format_coordinate, parse_coordinate

if TYPE_CHECKING:
    from src.seabattle.ai.schemas import StrategySnapshot
    from src.seabattle.game.board import AttackResult, Board

logger = logging.getLogger(__name__)


@dataclass
class AttackerState:
    """What one side knows about its own guesses."""

    board_size: int = BOARD_SIZE
    guesses: set[Coord] = field(default_factory=set)

    def record(self, coord: Coord) -> None:
        if coord in self.guesses:
            raise InvariantViolation(
                f"{format_coordinate(coord, self.board_size)} recorded twice"
            )
        self.guesses.add(coord)


class Attacker:
    """A side in the game, choosing moves through a pluggable strategy."""

    def __init__(
        self,
        name: str,
        board_size: int = BOARD_SIZE,
        strategy: MoveStrategy | None = None,
    ) -> None:
        if not name:
            raise ValueError("Attacker must have a name.")
        self.name = name
        self.state = AttackerState(board_size=board_size)
        self.strategy = strategy

    @property
    def board_size(self) -> int:
        return self.state.board_size

    @property
    def guesses(self) -> frozenset[Coord]:
        return frozenset(self.state.guesses)

    def has_guessed(self, coord: Coord) -> bool:
        return coord in self.state.guesses

    def validate_coordinate(self, raw: str) -> ServiceResult[Coord]:
        """Check format, range and repeats; never raises."""
        parsed = parse_coordinate(raw, self.board_size)
        if not parsed.success:
            return parsed
        if parsed.data in self.state.guesses:
            return ServiceResult.fail(RejectReason.ALREADY_GUESSED)
        return parsed

    def make_guess(self, raw: str, opponent_board: Board) -> ServiceResult[AttackResult]:
        """Validate ``raw`` and, if acceptable, fire it at ``opponent_board``."""
        validation = self.validate_coordinate(raw)
        if not validation.success:
            return ServiceResult.fail(validation.reason, validation.error)

        self.state.record(validation.data)
        return opponent_board.process_attack(validation.data)

    def next_move(self) -> str:
        if self.strategy is None:
            raise ValueError(f"{self.name} has no move strategy")
        return self.strategy.next_move(self.state)

    def take_turn(self, opponent_board: Board) -> ServiceResult[AttackResult]:
        """Ask the strategy for a move, fire it, and feed the outcome back."""
        move = self.next_move()
        result = self.make_guess(move, opponent_board)
        if result.success:
            self.strategy.on_result(self.state, result.data)
        else:
            logger.warning("%s chose a rejected move %r: %s", self.name, move, result.error)
        return result

    def snapshot(self) -> StrategySnapshot | None:
        return self.strategy.snapshot() if self.strategy else None


def create_attacker(
    kind: str,
    name: str,
    board_size: int = BOARD_SIZE,
    *,
    rng: random.Random | None = None,
    read_input: Callable[[], str] | None = None,
) -> Attacker:
    """Create an attacker with the strategy named by ``kind``."""
    if kind == "human":
        if read_input is None:
            raise ValueError("A human attacker needs an input source")
        return Attacker(name, board_size, HumanStrategy(read_input))
    if kind == "hunt_target":
        return Attacker(name, board_size, HuntTargetStrategy(rng=rng))
    raise ValueError(f"Unknown attacker kind: {kind}")
