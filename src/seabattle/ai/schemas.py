"""Pydantic schemas for AI introspection."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StrategySnapshot(BaseModel):
    """Read-only view of a strategy's targeting state."""

    model_config = ConfigDict(frozen=True)

    mode: str
    pending: list[tuple[int, int]] = Field(default_factory=list)
    last_hit: tuple[int, int] | None = None
    orientation: str | None = None
