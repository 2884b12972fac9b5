"""Generation options accepted by the level pipeline.

Options are a Pydantic model so that bad input from a host application or
the command-line scripts fails loudly with a ``ValidationError`` before any
generation work starts.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, field_validator, model_validator


class Difficulty(str, Enum):
    """Mission difficulty; shifts loop-door odds, enemy mix and room caps."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GenerationOptions(BaseModel):
    """Knobs for a single level generation call."""

    min_rooms: int = 6
    max_rooms: int = 12
    """Bounds on the number of rooms (inclusive)."""

    min_enemies: int = 3
    max_enemies: int = 8
    """Requested total enemy bounds, before per-room capacity clamping."""

    difficulty: Difficulty = Difficulty.MEDIUM

    seed: int | None = None
    """Seed for the level RNG; ``None`` produces a non-reproducible level."""

    @field_validator("min_rooms")
    @classmethod
    def _validate_min_rooms(cls, v: int) -> int:
        if v < 1:
            raise ValueError("min_rooms must be at least 1")
        return v

    @field_validator("min_enemies", "max_enemies")
    @classmethod
    def _validate_enemy_bounds(cls, v: int) -> int:
        if v < 0:
            raise ValueError("enemy bounds must be non-negative")
        return v

    @model_validator(mode="after")
    def _validate_room_range(self) -> "GenerationOptions":
        if self.max_rooms < self.min_rooms:
            raise ValueError(
                f"max_rooms ({self.max_rooms}) must be >= min_rooms ({self.min_rooms})"
            )
        return self
