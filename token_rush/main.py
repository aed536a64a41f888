#!/usr/bin/env python3
"""
TOKEN RUSH - Terminal Arcade
=============================
Collect the green tokens, dodge the red hazards.

Controls:
    WASD / Arrows   - Move
    P               - Pause / resume
    H               - Ask for a hint
    R               - Restart (after game over)
    Q/ESC           - Quit
"""

from dataclasses import replace
import argparse
import logging
import random
import sys
import textwrap
import time

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .config import GameConfig
from .geometry import Bounds
from .engine import (
    GameRenderer, CELL_HEIGHT, CELL_WIDTH,
    GRAY_DARK, GRAY_DARKER, GRAY_LIGHT, GRAY_MED, NEON_CYAN, NEON_GREEN, NEON_RED,
    NEON_YELLOW, WHITE
)
from .hints import generate_hint
from .player import InputHandler
from .session import (
    Session, Phase, new_session, toggle_pause, hud, snapshot, resize
)
from .systems import step


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS
MIN_WIDTH = 60
MIN_HEIGHT = 20

# Background grid spacing in world units
GRID_SPACING = 40.0

# How long a requested hint stays on screen
HINT_FRAMES = TARGET_FPS * 8

GAME_OVER_MESSAGE = 'Game over! Press R to restart or Q to quit.'

GAME_OVER_ART = [
    ' ___   _   __  __ ___    _____   _____ ___ ',
    '/ __| /_\\ |  \\/  | __|  / _ \\ \\ / / __| _ \\',
    '| (_ |/ _ \\| |\\/| | _|  | (_) \\ V /| _||   /',
    ' \\___/_/ \\_\\_|  |_|___|  \\___/ \\_/ |___|_|_\\',
]


# =============================================================================
# RENDERING
# =============================================================================

def render_grid(renderer: GameRenderer):
    """Faint grid dots at every grid intersection."""
    world_w, world_h = renderer.world_size
    dot_w = CELL_WIDTH / 2
    dot_h = CELL_HEIGHT / 4
    y = 0.0
    while y < world_h:
        x = 0.0
        while x < world_w:
            renderer.braille.set_pixel(int(x // dot_w), int(y // dot_h), GRAY_DARKER)
            x += GRID_SPACING
        y += GRID_SPACING


def render_entities(session: Session, renderer: GameRenderer):
    for pickup in session.pickups:
        renderer.fill_disc(pickup.x, pickup.y, pickup.radius, pickup.color)
    for hazard in session.hazards:
        renderer.fill_disc(hazard.x, hazard.y, hazard.radius, hazard.color)
    p = session.player
    renderer.fill_disc(p.x, p.y, p.radius, p.color)


def render_ui(session: Session, renderer: GameRenderer):
    """Render the HUD in the bottom 3 rows."""
    ui_y = renderer.game_height
    width = renderer.width
    values = hud(session)

    renderer.buffer.put_string(0, ui_y, '=' * width, GRAY_DARK)
    renderer.buffer.put_string(2, ui_y, ' TOKEN RUSH ', NEON_GREEN)

    level = f' DIFFICULTY:{values.difficulty} '
    renderer.buffer.put_string(width - len(level) - 1, ui_y, level, NEON_YELLOW)

    row = ui_y + 1
    renderer.buffer.put_string(2, row, f'SCORE: {values.score}', WHITE)
    lives_color = NEON_CYAN if values.lives > 1 else NEON_RED
    renderer.buffer.put_string(18, row, f'LIVES: {"o" * values.lives:<3}', lives_color)
    renderer.buffer.put_string(32, row, f'TIME: {values.seconds}s', GRAY_MED)

    controls = 'WASD/Arrows:Move  P:Pause  H:Hint  Q:Quit'
    renderer.buffer.put_string(2, ui_y + 2, controls, GRAY_DARKER)


def render_hint_panel(renderer: GameRenderer, text: str):
    """Hint text in the top-left corner of the play area."""
    width = max(20, min(renderer.width - 4, 60))
    y = 1
    for paragraph in text.split('\n\n'):
        for line in textwrap.wrap(paragraph, width):
            renderer.put_string(2, y, line, NEON_YELLOW, with_shake=False)
            y += 1
        y += 1


def render_pause_overlay(renderer: GameRenderer):
    cx = renderer.width // 2
    cy = renderer.game_height // 2
    title = 'PAUSED'
    sub = 'Press P to Resume'
    renderer.put_string(cx - len(title) // 2, cy - 1, title, WHITE, with_shake=False)
    renderer.put_string(cx - len(sub) // 2, cy + 1, sub, GRAY_LIGHT, with_shake=False)


def render_game_over_screen(session: Session, renderer: GameRenderer, frame: int):
    width = renderer.width
    height = renderer.game_height

    art_y = max(0, height // 2 - 5)
    for i, line in enumerate(GAME_OVER_ART):
        x = width // 2 - len(line) // 2
        renderer.buffer.put_string(max(0, x), art_y + i, line, NEON_RED)

    values = hud(session)
    stats_y = art_y + len(GAME_OVER_ART) + 1
    for i, line in enumerate([
        f'FINAL SCORE: {values.score}',
        f'SURVIVED: {values.seconds}s   DIFFICULTY: {values.difficulty}',
    ]):
        renderer.buffer.put_string(width // 2 - len(line) // 2, stats_y + i, line, NEON_YELLOW)

    if (frame // 30) % 2 == 0:
        prompt = '[ R - RESTART ]    [ Q - QUIT ]'
        renderer.buffer.put_string(width // 2 - len(prompt) // 2, stats_y + 3, prompt, NEON_CYAN)


# =============================================================================
# GAME STATE
# =============================================================================

class GameState:
    """Host shell: owns the session, feeds it input and frame deltas, draws it."""

    def __init__(self, term: Terminal, config: GameConfig = None, rng=None):
        self.term = term
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.renderer = GameRenderer(term)
        self.input_handler = InputHandler(deadzone=self.config.deadzone)

        self.running = True
        self.frame = 0
        self.last_timestamp = None

        self.hint_text = ''
        self.hint_timer = 0

        self.session: Session = None
        self.start_game()

    def start_game(self):
        """Initialize a new game session sized to the terminal."""
        world_w, world_h = self.renderer.world_size
        self.session = new_session(self.config, self.rng, Bounds(world_w, world_h))
        self.input_handler.clear()
        self.hint_text = ''
        self.hint_timer = 0
        self.frame = 0

    def show_hint(self):
        self.hint_text = generate_hint(snapshot(self.session), self.rng)
        self.hint_timer = HINT_FRAMES

    def check_resize(self):
        """Pick up terminal size changes between frames."""
        width, height = self.term.width, self.term.height
        if (width, height) != (self.renderer.width, self.renderer.height):
            self.renderer.resize(width, height)
            world_w, world_h = self.renderer.world_size
            resize(self.session, world_w, world_h, self.config)
            print(self.term.home + self.term.clear, end='', flush=True)

    def on_frame(self, timestamp_ms: float):
        """
        One host tick.

        dt comes from the previous tick's timestamp, is zero on the first
        tick and is capped at max_frame_delta.
        """
        if self.last_timestamp is None:
            dt = 0.0
        else:
            dt = (timestamp_ms - self.last_timestamp) / 1000.0
        self.last_timestamp = timestamp_ms
        dt = min(max(0.0, dt), self.config.max_frame_delta)

        self.frame += 1
        if self.hint_timer > 0:
            self.hint_timer -= 1
            if self.hint_timer == 0 and not self.session.game_over:
                self.hint_text = ''

        # Hold timers decay in every phase
        intent = self.input_handler.read_intent()
        self.input_handler.update()

        if self.session.running:
            step(self.session, dt, intent, self.rng, self.config)
            self.handle_events(self.session.events)

    def handle_events(self, events):
        for event in events:
            if event['type'] == 'life_lost':
                self.renderer.trigger_shake(intensity=2, frames=6)
            elif event['type'] == 'game_over':
                self.hint_text = GAME_OVER_MESSAGE
                self.hint_timer = 0

    def handle_input(self):
        """Drain the keystroke buffer and apply one-shot actions."""
        key = self.term.inkey(timeout=0)
        while key:
            self.input_handler.process_key(key)
            key = self.term.inkey(timeout=0)

        if self.input_handler.consume_quit():
            self.running = False

        if self.input_handler.consume_restart() and self.session.game_over:
            self.start_game()

        if self.input_handler.consume_pause():
            toggle_pause(self.session)
            self.input_handler.release_directions()

        if self.input_handler.consume_hint():
            self.show_hint()

    def render(self):
        renderer = self.renderer
        renderer.begin_frame()

        if self.session.phase is Phase.GAME_OVER:
            render_game_over_screen(self.session, renderer, self.frame)
        else:
            render_grid(renderer)
            render_entities(self.session, renderer)
            if self.session.phase is Phase.PAUSED:
                render_pause_overlay(renderer)

        if self.hint_text:
            render_hint_panel(renderer, self.hint_text)
        render_ui(self.session, renderer)

        output = renderer.end_frame()
        if output:
            print(output, end='', flush=True)


# =============================================================================
# MAIN LOOP
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Collect tokens, dodge hazards.')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for spawns and hints (default: random)')
    parser.add_argument('--lives', type=int, default=None,
                        help='Starting lives (default: 3)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Write a game log to this file')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Log level for --log-file')
    return parser


def config_from_args(args) -> GameConfig:
    config = GameConfig()
    if args.lives is not None:
        config = replace(config, starting_lives=args.lives)
    return config.validate()


def main(argv=None):
    """Entry point. Sets up terminal and runs the 60 FPS game loop."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    # Never log to the terminal we draw on
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level),
            format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        )

    term = Terminal()

    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        game = GameState(term, config, random.Random(args.seed))
        logger.info('Starting game (seed=%s)', args.seed)

        print(term.home + term.clear, end='', flush=True)

        while game.running:
            now = time.perf_counter()

            game.check_resize()
            game.handle_input()
            game.on_frame(now * 1000.0)
            game.render()

            # Sleep for remaining frame time
            elapsed = time.perf_counter() - now
            sleep_time = FRAME_TIME - elapsed
            if sleep_time > 0.001:
                time.sleep(sleep_time * 0.9)

        print(term.normal, end='', flush=True)
        logger.info('Quit with score %d', game.session.score)


if __name__ == '__main__':
    main()
