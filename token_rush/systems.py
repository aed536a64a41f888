"""
Simulation Systems
===================
Functions that advance one part of the session per frame, and `step`,
which runs them in order. Each system returns the events it produced.
"""

from typing import List
import logging

from .config import GameConfig, DEFAULT_CONFIG
from .entities import InputIntent
from .geometry import circles_overlap, clamp, wrap
from .session import Session, difficulty_for, end_game
from .spawner import spawn_pickup, spawn_system


logger = logging.getLogger(__name__)


# =============================================================================
# MOVEMENT
# =============================================================================

def difficulty_system(session: Session, config: GameConfig = DEFAULT_CONFIG) -> None:
    session.difficulty = difficulty_for(session.elapsed, config.difficulty_interval)


def player_movement_system(session: Session, intent: InputIntent, dt: float) -> None:
    """Move the player along the intent and clamp it inside the canvas."""
    p = session.player
    p.x += intent.dx * p.speed * dt
    p.y += intent.dy * p.speed * dt

    # Hard boundary, no bounce
    p.x = clamp(p.x, p.radius, max(p.radius, session.bounds.width - p.radius))
    p.y = clamp(p.y, p.radius, max(p.radius, session.bounds.height - p.radius))


def hazard_movement_system(session: Session, dt: float,
                           config: GameConfig = DEFAULT_CONFIG) -> None:
    """Integrate hazard velocities, wrapping each axis independently."""
    width = session.bounds.width
    height = session.bounds.height
    margin = config.wrap_margin

    for h in session.hazards:
        h.x = wrap(h.x + h.vx * dt, width, margin)
        h.y = wrap(h.y + h.vy * dt, height, margin)


# =============================================================================
# COLLISIONS
# =============================================================================

def pickup_collection_system(session: Session, rng,
                             config: GameConfig = DEFAULT_CONFIG) -> List[dict]:
    """
    Collect every pickup touching the player.

    Iterates backwards so removals do not skip entries. Replacements are
    appended past the cursor and are not checked until the next frame.
    """
    events = []
    p = session.player

    for i in range(len(session.pickups) - 1, -1, -1):
        pickup = session.pickups[i]
        if circles_overlap(p, pickup):
            session.score += pickup.value
            del session.pickups[i]
            session.pickups.append(spawn_pickup(session.bounds, rng, config))
            events.append({
                'type': 'pickup',
                'x': pickup.x,
                'y': pickup.y,
                'value': pickup.value,
            })

    return events


def hazard_collision_system(session: Session) -> List[dict]:
    """Cost at most one life per frame, however many hazards overlap."""
    for h in session.hazards:
        if circles_overlap(session.player, h):
            return lose_life(session)
    return []


def lose_life(session: Session) -> List[dict]:
    """Take a life, recenter the player and end the game at zero lives."""
    session.lives = max(0, session.lives - 1)
    session.player.x, session.player.y = session.bounds.center

    events = [{'type': 'life_lost', 'lives': session.lives}]
    logger.info('Life lost, %d remaining (score=%d)', session.lives, session.score)

    if session.lives <= 0:
        end_game(session)
        events.append({'type': 'game_over', 'score': session.score})

    return events


# =============================================================================
# FRAME STEP
# =============================================================================

def step(session: Session, dt: float, intent: InputIntent, rng,
         config: GameConfig = DEFAULT_CONFIG) -> Session:
    """
    Advance the session by dt seconds.

    Does nothing unless the session is running. The step stops right
    after the game ends so no later system mutates a finished session.
    """
    events: List[dict] = []
    session.events = events

    if not session.running:
        return session

    dt = max(0.0, dt)
    session.elapsed += dt

    difficulty_system(session, config)
    player_movement_system(session, intent, dt)
    hazard_movement_system(session, dt, config)
    events.extend(pickup_collection_system(session, rng, config))
    events.extend(hazard_collision_system(session))

    if session.game_over:
        return session

    events.extend(spawn_system(session, dt, rng, config))
    return session
