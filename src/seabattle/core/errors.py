"""Exceptions for programming errors; expected failures use ServiceResult."""

from __future__ import annotations


class GameError(Exception):
    """Base class for unrecoverable game-logic errors."""


class InvariantViolation(GameError):
    """Board or ship state contradicts itself (e.g. a cell resolved twice)."""


class NoMovesAvailableError(GameError):
    """Asked for a move when every cell has already been guessed."""


class InvalidCoordinateError(GameError, ValueError):
    """A coordinate that should have been validated upstream is malformed."""
