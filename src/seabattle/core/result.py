from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class RejectReason(str, Enum):
    """Why a coordinate or an attack was turned down."""

    INVALID_LENGTH = "invalid_length"
    NOT_A_NUMBER = "not_a_number"
    OUT_OF_RANGE = "out_of_range"
    ALREADY_GUESSED = "already_guessed"
    FLEET_INCOMPLETE = "fleet_incomplete"


MESSAGES: dict[RejectReason, str] = {
    RejectReason.INVALID_LENGTH: "Oops, input must be exactly two digits (e.g., 00, 34, 98).",
    RejectReason.NOT_A_NUMBER: "Oops, row and column must be numbers.",
    RejectReason.OUT_OF_RANGE: "Oops, please enter valid row and column numbers.",
    RejectReason.ALREADY_GUESSED: "You already guessed that location!",
    RejectReason.FLEET_INCOMPLETE: "Could not fit the whole fleet on the board.",
}


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    success: bool
    data: T | None = None
    error: str = ""
    reason: RejectReason | None = None

    @classmethod
    def ok(cls, data: T = None) -> ServiceResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, reason: RejectReason, message: str | None = None) -> ServiceResult[T]:
        return cls(success=False, error=message or MESSAGES[reason], reason=reason)
