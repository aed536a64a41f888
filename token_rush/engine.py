"""
Rendering Engine
=================
Double-buffered terminal renderer. Projects world units onto terminal
cells and draws circular entities as braille discs.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
import random

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")


# ANSI 256 color constants
NEON_CYAN = 51
NEON_GREEN = 46
NEON_RED = 196
NEON_YELLOW = 226
NEON_BLUE = 75

GRAY_LIGHT = 252
GRAY_MED = 245
GRAY_DARK = 238
GRAY_DARKER = 235

WHITE = 255

# World units covered by one terminal cell
CELL_WIDTH = 10.0
CELL_HEIGHT = 20.0

# Rows reserved for the HUD below the play area
UI_ROWS = 3


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg_color: int = 7
    bg_color: int = -1  # -1 = transparent/default

    def matches(self, other: 'Cell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg_color == other.fg_color and
            self.bg_color == other.bg_color
        )

    def reset(self):
        """Reset to empty state."""
        self.char = ' '
        self.fg_color = 7
        self.bg_color = -1


class DoubleBuffer:
    """
    Double-buffered terminal renderer.

    Writes to a back buffer, then swaps to front buffer,
    only updating cells that changed.
    """

    def __init__(self, term: Terminal, width: int, height: int):
        self.term = term
        self.width = width
        self.height = height
        self.front: List[List[Cell]] = []
        self.back: List[List[Cell]] = []
        self._init_buffers()
        self._normal = term.normal

    def _init_buffers(self):
        """Initialize both buffers with empty cells."""
        self.front = [[Cell() for _ in range(self.width)] for _ in range(self.height)]
        self.back = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def resize(self, width: int, height: int):
        """Handle terminal resize."""
        self.width = width
        self.height = height
        self._init_buffers()

    def clear_back(self):
        """Clear the back buffer by resetting cells in-place."""
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: str, fg_color: int = 7, bg_color: int = -1):
        """Put a character in the back buffer at exact position."""
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color
            cell.bg_color = bg_color

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7, bg_color: int = -1):
        """Put a string in the back buffer."""
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def present(self) -> str:
        """Swap buffers and generate output for changed cells only."""
        output_parts = []
        normal = self._normal

        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                if not back_cell.matches(self.front[y][x]):
                    output_parts.append(self.term.move_xy(x, y))
                    output_parts.append(normal)
                    if back_cell.bg_color >= 0:
                        output_parts.append(self.term.on_color(back_cell.bg_color))
                    output_parts.append(self.term.color(back_cell.fg_color))
                    output_parts.append(back_cell.char or ' ')

        self.front, self.back = self.back, self.front
        return ''.join(output_parts)


class BrailleCanvas:
    """
    Sub-pixel rendering using Unicode Braille patterns.

    Each character cell maps to a 2x4 dot grid.
    """

    # Braille dot bit values keyed by (column, row)
    DOTS = {
        (0, 0): 0x01, (0, 1): 0x02, (0, 2): 0x04, (0, 3): 0x40,
        (1, 0): 0x08, (1, 1): 0x10, (1, 2): 0x20, (1, 3): 0x80,
    }
    BASE = 0x2800

    def __init__(self, char_width: int, char_height: int):
        self.char_width = char_width
        self.char_height = char_height
        self.pixel_width = char_width * 2
        self.pixel_height = char_height * 4
        self.canvas: List[List[int]] = []
        self.colors: List[List[int]] = []
        self.clear()

    def clear(self):
        """Clear the canvas."""
        self.canvas = [[0] * self.char_width for _ in range(self.char_height)]
        self.colors = [[WHITE] * self.char_width for _ in range(self.char_height)]

    def set_pixel(self, px: int, py: int, color: int = WHITE):
        """Set a sub-pixel dot at pixel coordinates."""
        if 0 <= px < self.pixel_width and 0 <= py < self.pixel_height:
            cx, cy = px // 2, py // 4
            self.canvas[cy][cx] |= self.DOTS[(px % 2, py % 4)]
            self.colors[cy][cx] = color

    def get_char(self, cx: int, cy: int) -> Tuple[str, int]:
        """Get the braille character and color at a cell position."""
        if 0 <= cx < self.char_width and 0 <= cy < self.char_height:
            pattern = self.canvas[cy][cx]
            if pattern > 0:
                return chr(self.BASE + pattern), self.colors[cy][cx]
        return '', WHITE

    def blit_to_buffer(self, buffer: DoubleBuffer, offset_x: int = 0, offset_y: int = 0):
        """Render braille canvas onto the buffer. Only overlays empty cells."""
        for cy in range(self.char_height):
            for cx in range(self.char_width):
                char, color = self.get_char(cx, cy)
                if char:
                    bx = cx + offset_x
                    by = cy + offset_y
                    if 0 <= bx < buffer.width and 0 <= by < buffer.height:
                        if buffer.back[by][bx].char == ' ':
                            buffer.put(bx, by, char, color)


@dataclass
class GameRenderer:
    """
    High-level game renderer with screen shake.

    Game-area drawing is offset by the current shake; HUD rows are not.
    """
    term: Terminal
    width: int = 0
    height: int = 0
    buffer: DoubleBuffer = field(init=False)
    braille: BrailleCanvas = field(init=False)

    shake_x: int = 0
    shake_y: int = 0
    shake_frames: int = 0
    shake_intensity: int = 2

    def __post_init__(self):
        self.width = self.width or self.term.width
        self.height = self.height or self.term.height
        self.buffer = DoubleBuffer(self.term, self.width, self.height)
        self.braille = BrailleCanvas(self.width, self.game_height)

    @property
    def game_height(self) -> int:
        """Height of the playable area (excluding UI rows)."""
        return max(1, self.height - UI_ROWS)

    @property
    def world_size(self) -> Tuple[float, float]:
        """Size of the play area in world units."""
        return self.width * CELL_WIDTH, self.game_height * CELL_HEIGHT

    def trigger_shake(self, intensity: int = 2, frames: int = 3):
        """Trigger screen shake for N frames."""
        self.shake_intensity = intensity
        self.shake_frames = max(self.shake_frames, frames)

    def update_effects(self):
        """Tick screen shake timer."""
        if self.shake_frames > 0:
            self.shake_x = random.randint(-self.shake_intensity, self.shake_intensity)
            self.shake_y = random.randint(-max(1, self.shake_intensity // 2),
                                          max(1, self.shake_intensity // 2))
            self.shake_frames -= 1
        else:
            self.shake_x = 0
            self.shake_y = 0

    def begin_frame(self):
        """Begin rendering a new frame."""
        self.buffer.clear_back()
        self.braille.clear()

    def end_frame(self) -> str:
        """Finalize frame: blit braille overlay and present."""
        self.braille.blit_to_buffer(self.buffer)
        self.update_effects()
        return self.buffer.present()

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7,
                   with_shake: bool = True):
        """Put a string, optionally with shake offset."""
        if with_shake and y < self.game_height:
            x += self.shake_x
            y += self.shake_y
        self.buffer.put_string(x, y, text, fg_color)

    def fill_disc(self, x: float, y: float, radius: float, color: int = WHITE):
        """
        Fill a circle given in world units with braille dots.

        A dot is set when its center lies inside the circle. Circles smaller
        than one dot still light the dot under their center.
        """
        dot_w = CELL_WIDTH / 2
        dot_h = CELL_HEIGHT / 4
        shift_x = self.shake_x * 2
        shift_y = self.shake_y * 4

        px0 = int((x - radius) // dot_w)
        px1 = int((x + radius) // dot_w)
        py0 = int((y - radius) // dot_h)
        py1 = int((y + radius) // dot_h)
        r2 = radius * radius

        for py in range(py0, py1 + 1):
            dy = (py + 0.5) * dot_h - y
            for px in range(px0, px1 + 1):
                dx = (px + 0.5) * dot_w - x
                if dx * dx + dy * dy <= r2:
                    self.braille.set_pixel(px + shift_x, py + shift_y, color)

        self.braille.set_pixel(int(x // dot_w) + shift_x, int(y // dot_h) + shift_y, color)

    def resize(self, width: int, height: int):
        """Handle terminal resize."""
        self.width = width
        self.height = height
        self.buffer.resize(width, height)
        self.braille = BrailleCanvas(width, self.game_height)
