"""
Player Input
=============
Merges keyboard and single-touch joystick input into one direction.
"""

import math
from typing import Dict, Optional

from .entities import InputIntent
from .geometry import normalize


# Key names -> direction. Terminal keystrokes arrive as 'KEY_UP' etc.
DIRECTION_KEYS: Dict[str, str] = {
    'KEY_UP': 'up', 'w': 'up',
    'KEY_DOWN': 'down', 's': 'down',
    'KEY_LEFT': 'left', 'a': 'left',
    'KEY_RIGHT': 'right', 'd': 'right',
}

DIRECTION_VECTORS: Dict[str, tuple] = {
    'up': (0.0, -1.0),
    'down': (0.0, 1.0),
    'left': (-1.0, 0.0),
    'right': (1.0, 0.0),
}


class InputHandler:
    """
    Pending-intent buffer written by input events and read once per frame.

    Keys pressed via key_down() stay held until key_up(). Terminals do not
    report key releases, so keystrokes fed through process_key() are held
    for a number of frames instead and decay in update().
    """

    def __init__(self, hold_frames: int = 12, deadzone: float = 5.0):
        self.hold_frames = hold_frames
        self.deadzone = deadzone

        # direction -> frames remaining, None while held by key_down()
        self.held: Dict[str, Optional[int]] = {}

        # Active single-touch gesture
        self.pointer_id = None
        self.pointer_start_pos: Optional[tuple] = None
        self.pointer_pos: Optional[tuple] = None

        # Actions triggered this frame (consumed on read)
        self._pause_triggered = False
        self._hint_triggered = False
        self._quit_triggered = False
        self._restart_triggered = False

    # -------------------------------------------------------------------------
    # Keyboard
    # -------------------------------------------------------------------------

    def key_down(self, name: str, hold_frames: Optional[int] = None) -> None:
        """Register a key press by name."""
        key = name if name.startswith('KEY_') else name.lower()

        direction = DIRECTION_KEYS.get(key)
        if direction is not None:
            current = self.held.get(direction, 0)
            if hold_frames is None or current is None:
                self.held[direction] = None
            else:
                self.held[direction] = max(current, hold_frames)
        elif key == 'p':
            self._pause_triggered = True
        elif key == 'h':
            self._hint_triggered = True
        elif key == 'q' or key == 'KEY_ESCAPE':
            self._quit_triggered = True
        elif key == 'r':
            self._restart_triggered = True

    def key_up(self, name: str) -> None:
        key = name if name.startswith('KEY_') else name.lower()
        direction = DIRECTION_KEYS.get(key)
        if direction is not None:
            self.held.pop(direction, None)

    def process_key(self, key) -> None:
        """Process a single keystroke from blessed's inkey()."""
        if key is None or not key:
            return
        name = key.name if key.is_sequence else str(key)
        if name:
            self.key_down(name, hold_frames=self.hold_frames)

    def update(self) -> None:
        """Decay terminal key hold timers (call once per frame)."""
        expired = []
        for direction, frames in self.held.items():
            if frames is None:
                continue
            self.held[direction] = frames - 1
            if frames - 1 <= 0:
                expired.append(direction)
        for direction in expired:
            del self.held[direction]

    # -------------------------------------------------------------------------
    # Pointer / touch joystick
    # -------------------------------------------------------------------------

    @property
    def gesture_active(self) -> bool:
        return self.pointer_id is not None

    def pointer_start(self, pointer_id, x: float, y: float) -> None:
        """Begin a gesture. Ignored while another gesture is active."""
        if self.gesture_active:
            return
        self.pointer_id = pointer_id
        self.pointer_start_pos = (x, y)
        self.pointer_pos = (x, y)

    def pointer_move(self, pointer_id, x: float, y: float) -> None:
        if pointer_id != self.pointer_id:
            return
        self.pointer_pos = (x, y)

    def pointer_end(self, pointer_id) -> None:
        """Lift the active gesture; all directional state is zeroed."""
        if pointer_id != self.pointer_id:
            return
        self.pointer_id = None
        self.pointer_start_pos = None
        self.pointer_pos = None
        self.held.clear()

    pointer_cancel = pointer_end

    # -------------------------------------------------------------------------
    # Intent
    # -------------------------------------------------------------------------

    def get_movement_vector(self) -> tuple:
        """Current direction from the active source, unit length or zero."""
        if self.gesture_active:
            dx = self.pointer_pos[0] - self.pointer_start_pos[0]
            dy = self.pointer_pos[1] - self.pointer_start_pos[1]
            if math.hypot(dx, dy) < self.deadzone:
                return 0.0, 0.0
            return normalize(dx, dy)

        dx, dy = 0.0, 0.0
        for direction in self.held:
            vx, vy = DIRECTION_VECTORS[direction]
            dx += vx
            dy += vy
        return normalize(dx, dy)

    def read_intent(self) -> InputIntent:
        dx, dy = self.get_movement_vector()
        return InputIntent(dx, dy)

    def release_directions(self) -> None:
        """Drop every held direction, keeping any active gesture."""
        self.held.clear()

    def clear(self) -> None:
        """Drop all held keys, gestures and pending triggers."""
        self.held.clear()
        self.pointer_id = None
        self.pointer_start_pos = None
        self.pointer_pos = None
        self._pause_triggered = False
        self._hint_triggered = False
        self._quit_triggered = False
        self._restart_triggered = False

    def consume_pause(self) -> bool:
        triggered = self._pause_triggered
        self._pause_triggered = False
        return triggered

    def consume_hint(self) -> bool:
        triggered = self._hint_triggered
        self._hint_triggered = False
        return triggered

    def consume_quit(self) -> bool:
        triggered = self._quit_triggered
        self._quit_triggered = False
        return triggered

    def consume_restart(self) -> bool:
        triggered = self._restart_triggered
        self._restart_triggered = False
        return triggered
