"""Utility functions and constants for the Wraith turn engine."""

from .constants import (
    BIRTH_RATE,
    DEFAULT_PHASES,
    LIFE_SUPPORT_HULL_KINDS,
    MAX_TECH_LEVEL,
    PROFESSIONALS_PER_UNIT,
    QUARTERS_PER_YEAR,
    RNG_SEED_DEFAULT,
    STAGE_COUNT,
    UNSKILLED_PER_UNIT,
)
from .rng import GameRNG

__all__ = [
    "BIRTH_RATE",
    "DEFAULT_PHASES",
    "LIFE_SUPPORT_HULL_KINDS",
    "MAX_TECH_LEVEL",
    "PROFESSIONALS_PER_UNIT",
    "QUARTERS_PER_YEAR",
    "RNG_SEED_DEFAULT",
    "STAGE_COUNT",
    "UNSKILLED_PER_UNIT",
    "GameRNG",
]
