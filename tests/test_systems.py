import random

from token_rush.config import GameConfig
from token_rush.entities import Hazard, InputIntent, Pickup
from token_rush.session import Phase
from token_rush.systems import (
    hazard_collision_system, hazard_movement_system, pickup_collection_system,
    player_movement_system, step
)


STILL = InputIntent()
RIGHT = InputIntent(1.0, 0.0)


def test_player_moves_along_intent(empty_session):
    player_movement_system(empty_session, RIGHT, 0.5)
    assert empty_session.player.x == 400 + 220 * 0.5
    assert empty_session.player.y == 250


def test_player_is_clamped_inside_canvas(empty_session):
    rng = random.Random(9)
    for _ in range(300):
        intent = InputIntent(rng.choice([-1.0, 0.0, 1.0]), rng.choice([-1.0, 0.0, 1.0]))
        player_movement_system(empty_session, intent, rng.uniform(0, 2))
        p = empty_session.player
        assert p.radius <= p.x <= 800 - p.radius
        assert p.radius <= p.y <= 500 - p.radius


def test_hazard_wraps_on_each_axis(empty_session):
    hazard = Hazard(x=815, y=250, vx=100, vy=0)
    empty_session.hazards.append(hazard)
    hazard_movement_system(empty_session, 0.1)
    assert hazard.x == -20
    assert hazard.y == 250

    hazard.vx, hazard.vy = 0, -100
    hazard.y = -15
    hazard_movement_system(empty_session, 0.1)
    assert hazard.y == 520
    assert hazard.x == -20


def test_hazard_count_is_invariant(empty_session, quiet_config):
    rng = random.Random(2)
    empty_session.hazards = [
        Hazard(x=rng.uniform(0, 800), y=rng.uniform(0, 500),
               vx=rng.uniform(-400, 400), vy=rng.uniform(-400, 400))
        for _ in range(8)
    ]
    for _ in range(500):
        hazard_movement_system(empty_session, 1 / 60)
        for h in empty_session.hazards:
            assert -20 <= h.x <= 820
            assert -20 <= h.y <= 520
    assert len(empty_session.hazards) == 8


def test_centered_pickup_is_collected(empty_session, rng):
    empty_session.pickups.append(Pickup(x=400, y=250, radius=10, value=1))
    events = pickup_collection_system(empty_session, rng)
    assert empty_session.score == 1
    assert len(empty_session.pickups) == 1
    assert [e['type'] for e in events] == ['pickup']


def test_simultaneous_collections_are_all_counted(empty_session, fixed_random):
    empty_session.pickups = [
        Pickup(x=300, y=300),
        Pickup(x=405, y=250, value=2),
        Pickup(x=395, y=255, value=3),
        Pickup(x=100, y=100),
        Pickup(x=400, y=240, value=5),
    ]
    # Replacements land at (12, 12), away from the player
    events = pickup_collection_system(empty_session, fixed_random())
    assert empty_session.score == 10
    assert len(empty_session.pickups) == 5
    assert len(events) == 3
    assert (empty_session.pickups[0].x, empty_session.pickups[1].x) == (300, 100)


def test_replacement_is_not_checked_in_same_frame(empty_session, fixed_random):
    # Replacement spawns at (12, 12); move the player there
    empty_session.player.x, empty_session.player.y = 16, 16
    empty_session.pickups = [Pickup(x=20, y=20, value=1)]
    pickup_collection_system(empty_session, fixed_random())
    assert empty_session.score == 1
    assert len(empty_session.pickups) == 1


def test_one_life_per_frame_even_with_many_hits(empty_session):
    empty_session.hazards = [Hazard(x=400, y=250), Hazard(x=405, y=250), Hazard(x=400, y=255)]
    events = hazard_collision_system(empty_session)
    assert empty_session.lives == 2
    assert [e['type'] for e in events] == ['life_lost']


def test_life_loss_recenters_player(empty_session):
    empty_session.player.x, empty_session.player.y = 100, 100
    empty_session.hazards = [Hazard(x=110, y=100)]
    hazard_collision_system(empty_session)
    assert (empty_session.player.x, empty_session.player.y) == (400, 250)


def test_last_life_ends_game_and_freezes_session(empty_session, quiet_config, rng):
    empty_session.lives = 1
    empty_session.hazards = [Hazard(x=400, y=250)]
    step(empty_session, 0.016, STILL, rng, quiet_config)

    assert empty_session.lives == 0
    assert empty_session.phase is Phase.GAME_OVER
    assert not empty_session.running
    assert 'game_over' in [e['type'] for e in empty_session.events]

    frozen = (empty_session.score, empty_session.lives, empty_session.elapsed,
              empty_session.player.x, empty_session.player.y)
    empty_session.pickups.append(Pickup(x=400, y=250))
    for _ in range(10):
        step(empty_session, 0.1, RIGHT, rng, quiet_config)
    assert (empty_session.score, empty_session.lives, empty_session.elapsed,
            empty_session.player.x, empty_session.player.y) == frozen


def test_game_over_step_skips_spawning(empty_session, fixed_random):
    empty_session.lives = 1
    empty_session.hazards = [Hazard(x=400, y=250)]
    step(empty_session, 0.1, STILL, fixed_random(0.0))
    assert len(empty_session.hazards) == 1
    assert empty_session.pickups == []


def test_paused_step_does_not_advance(empty_session, rng):
    empty_session.phase = Phase.PAUSED
    empty_session.pickups.append(Pickup(x=400, y=250))
    step(empty_session, 1.0, RIGHT, rng)
    assert empty_session.elapsed == 0.0
    assert empty_session.score == 0
    assert empty_session.player.x == 400


def test_negative_dt_is_ignored(empty_session, quiet_config, rng):
    step(empty_session, -1.0, RIGHT, rng, quiet_config)
    assert empty_session.elapsed == 0.0
    assert empty_session.player.x == 400


def test_twenty_six_quiet_seconds(empty_session, quiet_config, rng):
    for _ in range(26 * 60):
        step(empty_session, 1 / 60, STILL, rng, quiet_config)
    assert abs(empty_session.elapsed - 26.0) < 1e-6
    assert empty_session.difficulty == 2
    assert empty_session.score == 0
    assert empty_session.lives == 3


def test_step_collects_and_reports(empty_session, quiet_config, rng):
    empty_session.pickups.append(Pickup(x=400, y=250))
    step(empty_session, 0.0, STILL, rng, quiet_config)
    assert empty_session.score == 1
    assert len(empty_session.pickups) == 1
    assert [e['type'] for e in empty_session.events] == ['pickup']


def test_step_spawns_hazards_over_time(empty_session):
    rng = random.Random(42)
    config = GameConfig(pickup_spawn_rate=0.0)
    for _ in range(60 * 20):
        step(empty_session, 1 / 60, STILL, rng, config)
        if not empty_session.running:
            break
    assert len(empty_session.hazards) > 0
