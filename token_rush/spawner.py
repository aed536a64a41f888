"""
Spawner
========
Procedural placement of pickups and hazards, plus the per-frame
stochastic spawn policy. Spawn chances scale with frame time so the
spawn rate stays the same at any frame rate.
"""

import logging
import math
from typing import List, Tuple

from .config import GameConfig, DEFAULT_CONFIG
from .entities import Pickup, Hazard
from .geometry import Bounds


logger = logging.getLogger(__name__)


def spawn_pickup(bounds: Bounds, rng, config: GameConfig = DEFAULT_CONFIG) -> Pickup:
    """Place a pickup uniformly inside the bounds, keeping clear of the edges."""
    margin = config.pickup_margin
    return Pickup(
        x=rng.uniform(margin, bounds.width - margin),
        y=rng.uniform(margin, bounds.height - margin),
        radius=config.pickup_radius,
        value=config.pickup_value,
    )


def hazard_speed(difficulty: int, rng, config: GameConfig = DEFAULT_CONFIG) -> float:
    """Base speed plus random jitter plus a per-level bonus."""
    return (
        config.hazard_base_speed
        + rng.uniform(0, config.hazard_speed_jitter)
        + difficulty * config.hazard_speed_per_level
    )


def spawn_hazard(bounds: Bounds, difficulty: int, rng,
                 config: GameConfig = DEFAULT_CONFIG) -> Hazard:
    """Place a hazard anywhere on the canvas heading in a random direction."""
    x = rng.uniform(0, bounds.width)
    y = rng.uniform(0, bounds.height)
    speed = hazard_speed(difficulty, rng, config)
    angle = rng.uniform(0, math.pi * 2)
    return Hazard(
        x=x,
        y=y,
        vx=math.cos(angle) * speed,
        vy=math.sin(angle) * speed,
        radius=config.hazard_radius,
    )


def seed_entities(bounds: Bounds, rng,
                  config: GameConfig = DEFAULT_CONFIG) -> Tuple[List[Pickup], List[Hazard]]:
    """Initial population for a fresh session."""
    pickups = [spawn_pickup(bounds, rng, config) for _ in range(config.initial_pickups)]
    hazards = [spawn_hazard(bounds, 1, rng, config) for _ in range(config.initial_hazards)]
    return pickups, hazards


def spawn_system(session, dt: float, rng, config: GameConfig = DEFAULT_CONFIG) -> List[dict]:
    """
    Run the per-frame Bernoulli spawn trials.

    Hazard chance is dt * rate * difficulty. Pickup chance is dt * rate,
    only while fewer than pickup_cap pickups are live. The hazard trial
    is always drawn first.

    Returns a list of spawn events.
    """
    events = []

    if rng.random() < dt * config.hazard_spawn_rate * session.difficulty:
        hazard = spawn_hazard(session.bounds, session.difficulty, rng, config)
        session.hazards.append(hazard)
        events.append({'type': 'spawn_hazard', 'x': hazard.x, 'y': hazard.y})
        logger.debug('Hazard spawned at (%.0f, %.0f), %d live',
                     hazard.x, hazard.y, len(session.hazards))

    if rng.random() < dt * config.pickup_spawn_rate and len(session.pickups) < config.pickup_cap:
        pickup = spawn_pickup(session.bounds, rng, config)
        session.pickups.append(pickup)
        events.append({'type': 'spawn_pickup', 'x': pickup.x, 'y': pickup.y})
        logger.debug('Pickup spawned at (%.0f, %.0f), %d live',
                     pickup.x, pickup.y, len(session.pickups))

    return events
