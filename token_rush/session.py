"""
Session State
==============
The single-writer game session, its phase machine and the read-only
projections (HUD values, hint context) taken from it.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional
import logging
import math
import random

from .config import GameConfig, DEFAULT_CONFIG
from .entities import Player, Pickup, Hazard
from .geometry import Bounds, clamp
from .spawner import seed_entities


logger = logging.getLogger(__name__)


class Phase(Enum):
    RUNNING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass
class Session:
    """Everything the simulation mutates. Owned by the frame-tick handler."""
    bounds: Bounds
    player: Player
    pickups: List[Pickup] = field(default_factory=list)
    hazards: List[Hazard] = field(default_factory=list)
    score: int = 0
    lives: int = 3
    elapsed: float = 0.0
    difficulty: int = 1
    phase: Phase = Phase.RUNNING
    events: List[dict] = field(default_factory=list)  # From the last step

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


@dataclass(frozen=True)
class Hud:
    score: int
    lives: int
    seconds: int
    difficulty: int


@dataclass(frozen=True)
class HintContext:
    """What the hint generator is allowed to see."""
    score: int
    lives: int
    elapsed: float
    difficulty: int


def difficulty_for(elapsed: float, interval: float = DEFAULT_CONFIG.difficulty_interval) -> int:
    """One level per `interval` seconds survived, starting at 1."""
    return 1 + int(math.floor(max(0.0, elapsed) / interval))


def new_session(config: GameConfig = DEFAULT_CONFIG, rng=None,
                bounds: Optional[Bounds] = None) -> Session:
    """Create a fresh session with the player centered and the initial entities."""
    if rng is None:
        rng = random.Random()
    if bounds is None:
        bounds = Bounds(config.width, config.height)

    cx, cy = bounds.center
    player = Player(x=cx, y=cy, radius=config.player_radius, speed=config.player_speed)
    pickups, hazards = seed_entities(bounds, rng, config)

    session = Session(
        bounds=bounds,
        player=player,
        pickups=pickups,
        hazards=hazards,
        lives=config.starting_lives,
    )
    logger.info('New session %.0fx%.0f: %d pickups, %d hazards, %d lives',
                bounds.width, bounds.height, len(pickups), len(hazards), session.lives)
    return session


# =============================================================================
# PHASE MACHINE
# =============================================================================

def toggle_pause(session: Session) -> Phase:
    """
    Flip between RUNNING and PAUSED.

    GAME_OVER is terminal: the toggle does nothing once the game has ended.
    """
    if session.phase is Phase.RUNNING:
        session.phase = Phase.PAUSED
    elif session.phase is Phase.PAUSED:
        session.phase = Phase.RUNNING
    else:
        return session.phase
    logger.info('Phase -> %s', session.phase.name)
    return session.phase


def end_game(session: Session) -> None:
    session.lives = max(0, session.lives)
    session.phase = Phase.GAME_OVER
    logger.info('Game over: score=%d time=%.1fs difficulty=%d',
                session.score, session.elapsed, session.difficulty)


# =============================================================================
# PROJECTIONS
# =============================================================================

def hud(session: Session) -> Hud:
    return Hud(
        score=session.score,
        lives=session.lives,
        seconds=int(math.floor(session.elapsed)),
        difficulty=session.difficulty,
    )


def snapshot(session: Session) -> HintContext:
    return HintContext(
        score=session.score,
        lives=session.lives,
        elapsed=session.elapsed,
        difficulty=session.difficulty,
    )


def resize(session: Session, width: float, height: float,
           config: GameConfig = DEFAULT_CONFIG) -> None:
    """
    Apply new canvas bounds between frames.

    The player is re-clamped and pickups are pulled back inside the
    spawn margin. Hazards past the wrap margin wrap on the next step.
    """
    session.bounds = Bounds(width, height)

    p = session.player
    p.x = clamp(p.x, p.radius, max(p.radius, width - p.radius))
    p.y = clamp(p.y, p.radius, max(p.radius, height - p.radius))

    margin = config.pickup_margin
    for pickup in session.pickups:
        pickup.x = clamp(pickup.x, margin, max(margin, width - margin))
        pickup.y = clamp(pickup.y, margin, max(margin, height - margin))

    logger.debug('Canvas resized to %.0fx%.0f', width, height)
