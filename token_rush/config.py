"""
Game Configuration
===================
Tunable gameplay constants. Distances are in world units (pixels of the
virtual canvas), speeds in units per second, rates in events per second.
"""

from dataclasses import dataclass, fields


@dataclass
class GameConfig:
    """All gameplay tunables, defaulting to the classic arcade values."""

    # Canvas
    width: float = 800.0
    height: float = 500.0

    # Player
    player_radius: float = 16.0
    player_speed: float = 220.0
    starting_lives: int = 3

    # Difficulty ramp (seconds per level)
    difficulty_interval: float = 25.0

    # Initial population
    initial_pickups: int = 6
    initial_hazards: int = 3

    # Pickups
    pickup_radius: float = 10.0
    pickup_value: int = 1
    pickup_margin: float = 12.0
    pickup_cap: int = 10
    pickup_spawn_rate: float = 0.2

    # Hazards
    hazard_radius: float = 14.0
    hazard_base_speed: float = 40.0
    hazard_speed_jitter: float = 50.0
    hazard_speed_per_level: float = 30.0
    hazard_spawn_rate: float = 0.3
    wrap_margin: float = 20.0

    # Input
    deadzone: float = 5.0

    # Longest frame delta the host feeds into a single step
    max_frame_delta: float = 0.25

    def validate(self) -> 'GameConfig':
        """Raise ValueError for values the simulation cannot run with."""
        for name in ('width', 'height', 'player_radius', 'pickup_radius',
                     'hazard_radius', 'difficulty_interval', 'max_frame_delta'):
            if getattr(self, name) <= 0:
                raise ValueError(f'{name} must be positive, got {getattr(self, name)}')

        for name in ('player_speed', 'pickup_margin', 'pickup_spawn_rate',
                     'hazard_base_speed', 'hazard_speed_jitter',
                     'hazard_speed_per_level', 'hazard_spawn_rate',
                     'wrap_margin', 'deadzone', 'initial_pickups',
                     'initial_hazards', 'pickup_cap'):
            if getattr(self, name) < 0:
                raise ValueError(f'{name} must not be negative, got {getattr(self, name)}')

        if self.starting_lives < 1:
            raise ValueError(f'starting_lives must be at least 1, got {self.starting_lives}')

        if 2 * self.pickup_margin >= min(self.width, self.height):
            raise ValueError('pickup_margin leaves no room to place pickups')

        return self

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = GameConfig()
