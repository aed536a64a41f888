"""
Entity Definitions
===================
All entities are plain dataclasses with no behavior.
"""

from dataclasses import dataclass

from .engine import NEON_BLUE, NEON_GREEN, NEON_RED


@dataclass
class Player:
    """The player-controlled circle."""
    x: float = 0.0
    y: float = 0.0
    radius: float = 16.0
    speed: float = 220.0  # units per second
    color: int = NEON_BLUE


@dataclass
class Pickup:
    """Collectible token worth `value` points."""
    x: float = 0.0
    y: float = 0.0
    radius: float = 10.0
    value: int = 1
    color: int = NEON_GREEN


@dataclass
class Hazard:
    """Drifting obstacle. Velocity in units per second."""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    radius: float = 14.0
    color: int = NEON_RED


@dataclass(frozen=True)
class InputIntent:
    """Direction the player wants to move, magnitude at most 1."""
    dx: float = 0.0
    dy: float = 0.0

    @property
    def is_zero(self) -> bool:
        return self.dx == 0.0 and self.dy == 0.0
