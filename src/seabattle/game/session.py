"""
Headless game orchestration: a human side against the hunt/target CPU.

Rendering and input prompting live outside this package; a session only
takes raw coordinate strings and exposes grid copies and results.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.seabattle.ai.attacker import Attacker, create_attacker
from src.seabattle.core.errors import GameError
from src.seabattle.core.result import RejectReason, ServiceResult
from src.seabattle.game.board import AttackResult, Board, CellState
from src.seabattle.game.coordinates import format_coordinate
from src.seabattle.game.schemas import GameSettings

logger = logging.getLogger(__name__)

LOG_LENGTH = 5


class Turn(Enum):
    PLAYER = "player"
    CPU = "cpu"


@dataclass
class GameSession:
    """Player vs CPU game state and turn order."""

    settings: GameSettings = field(default_factory=GameSettings)
    rng: random.Random | None = None
    log: list[str] = field(default_factory=list)

    def __post_init__(self: GameSession) -> None:
        if self.rng is None:
            self.rng = random.Random(self.settings.seed)  # noqa: S311
        self._build()

    def _build(self: GameSession) -> None:
        size = self.settings.board_size
        self.player_board = Board(size=size, rng=self.rng)
        self.cpu_board = Board(size=size, rng=self.rng)
        self.player = Attacker("Player", size)
        self.cpu = create_attacker("hunt_target", "CPU", size, rng=self.rng)
        self.turn = Turn.PLAYER
        self.turns_played = 0
        self.started = False

    def append_log(self: GameSession, message: str) -> None:
        self.log.append(message)
        if len(self.log) > LOG_LENGTH:
            self.log.pop(0)

    def start(self: GameSession) -> ServiceResult[None]:
        """Place both fleets; fail if either side came up short."""
        count, length = self.settings.ship_count, self.settings.ship_length
        placed_player = self.player_board.place_ships_randomly(count, length, reveal=True)
        placed_cpu = self.cpu_board.place_ships_randomly(count, length, reveal=False)

        if placed_player != count or placed_cpu != count:
            logger.warning(
                "Fleet setup incomplete: player %d/%d, cpu %d/%d",
                placed_player,
                count,
                placed_cpu,
                count,
            )
            return ServiceResult.fail(RejectReason.FLEET_INCOMPLETE)

        self.started = True
        self.append_log(f"{count} ships placed randomly for {self.player.name}.")
        self.append_log(f"{count} ships placed randomly for {self.cpu.name}.")
        size = self.settings.board_size
        logger.info("Game started on a %dx%d board", size, size)
        return ServiceResult.ok()

    def _require_turn(self: GameSession, turn: Turn) -> None:
        if not self.started:
            raise GameError("Game has not been started")
        if self.is_game_over():
            raise GameError("Game is already over")
        if self.turn is not turn:
            raise GameError(f"It is not the {turn.value}'s turn")

    def player_turn(self: GameSession, raw: str) -> ServiceResult[AttackResult]:
        """Fire the player's guess; rejected input keeps the turn."""
        self._require_turn(Turn.PLAYER)
        result = self.player.make_guess(raw, self.cpu_board)
        if not result.success:
            return result

        outcome = result.data
        if outcome.hit:
            self.append_log("PLAYER HIT!")
            if outcome.sunk:
                self.append_log("You sunk an enemy battleship!")
        else:
            self.append_log("PLAYER MISS.")
        self._advance(Turn.CPU)
        return result

    def cpu_turn(self: GameSession) -> ServiceResult[AttackResult]:
        self._require_turn(Turn.CPU)
        result = self.cpu.take_turn(self.player_board)
        if not result.success:
            return result

        outcome = result.data
        label = format_coordinate(outcome.coordinate, self.settings.board_size)
        if outcome.hit:
            self.append_log(f"CPU HIT at {label}!")
            if outcome.sunk:
                self.append_log("CPU sunk your battleship!")
        else:
            self.append_log(f"CPU MISS at {label}.")
        self._advance(Turn.PLAYER)
        return result

    def _advance(self: GameSession, next_turn: Turn) -> None:
        self.turns_played += 1
        if self.is_game_over():
            logger.info("Game over after %d turns, winner: %s", self.turns_played, self.winner)
            return
        self.turn = next_turn

    def is_game_over(self: GameSession) -> bool:
        return self.player_board.are_all_ships_sunk() or self.cpu_board.are_all_ships_sunk()

    @property
    def winner(self: GameSession) -> str | None:
        if self.cpu_board.are_all_ships_sunk():
            return self.player.name
        if self.player_board.are_all_ships_sunk():
            return self.cpu.name
        return None

    def get_display_boards(self: GameSession) -> dict[str, list[list[CellState]]]:
        return {
            "player": self.player_board.get_grid_copy(),
            "cpu": self.cpu_board.get_grid_copy(),
        }

    def get_detailed_stats(self: GameSession) -> dict[str, Any]:
        snapshot = self.cpu.snapshot()
        return {
            "game": {"total_turns": self.turns_played, "winner": self.winner},
            "player": {
                "own_board": self.player_board.get_stats(),
                "attacks": self.cpu_board.get_stats(),
            },
            "cpu": {
                "own_board": self.cpu_board.get_stats(),
                "attacks": self.player_board.get_stats(),
                "strategy": snapshot.model_dump() if snapshot else None,
            },
        }

    def reset(self: GameSession) -> None:
        self.log.clear()
        self._build()


@dataclass(frozen=True)
class SelfMatchResult:
    winner: str
    turns: int
    shots: dict[str, int]


def play_self_match(
    settings: GameSettings | None = None,
    rng: random.Random | None = None,
) -> SelfMatchResult:
    """Let two hunt/target attackers play each other to the end."""
    settings = settings or GameSettings()
    rng = rng or random.Random(settings.seed)  # noqa: S311
    size = settings.board_size

    sides: list[tuple[Attacker, Board]] = []
    for name in ("Alpha", "Bravo"):
        board = Board(size=size, rng=rng)
        placed = board.place_ships_randomly(settings.ship_count, settings.ship_length)
        if placed != settings.ship_count:
            raise GameError(f"{name} fleet incomplete: {placed}/{settings.ship_count}")
        sides.append((create_attacker("hunt_target", name, size, rng=rng), board))

    max_turns = 2 * size * size
    turns = 0
    while turns < max_turns:
        attacker, _ = sides[turns % 2]
        _, target = sides[(turns + 1) % 2]
        result = attacker.take_turn(target)
        if not result.success:
            raise GameError(f"{attacker.name} made an illegal move: {result.error}")
        turns += 1
        if target.are_all_ships_sunk():
            return SelfMatchResult(
                winner=attacker.name,
                turns=turns,
                shots={a.name: len(a.guesses) for a, _ in sides},
            )

    raise GameError("Self match did not finish")
