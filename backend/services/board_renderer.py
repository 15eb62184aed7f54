"""
Board rendering for the Snake game.

Draws a GameState onto a Pillow image:
- Checkerboard background
- Food cell
- Snake segments (filled and outlined)
- Dimmed "GAME OVER" overlay once the game has ended
"""

import io
import logging
from typing import Tuple

from PIL import Image, ImageDraw, ImageFilter, ImageFont

from domain.game_state import GameState

logger = logging.getLogger(__name__)


class ColorScheme:
    """Neon arcade palette"""

    DARK_TILE = "#0f1419"
    LIGHT_TILE = "#1a1f2e"
    SNAKE = "#00ffff"  # Neon cyan
    SNAKE_BORDER = "#00d9ff"  # Bright cyan border
    FOOD = "#ff3366"  # Bright red-pink

    OVERLAY = (0, 0, 0, 178)  # 70% black
    GAME_OVER_TEXT = "#ff3366"
    INSTRUCTION_TEXT = "#00d9ff"


GAME_OVER_TEXT = "GAME OVER"
RESTART_TEXT = "Press Reset to play again"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def _load_font(size: int, bold: bool = False):
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except Exception:
        logger.debug(f"Font {name} unavailable, using Pillow default")
        return ImageFont.load_default()


class BoardRenderer:
    """Render game snapshots to images."""

    def __init__(self, title_size: int = 50, instruction_size: int = 20, glow_radius: int = 6):
        self.font_title = _load_font(title_size, bold=True)
        self.font_instruction = _load_font(instruction_size)
        self.glow_radius = glow_radius

    def render(self, state: GameState) -> Image.Image:
        """Render a full frame for state."""
        img = Image.new('RGB', (state.width, state.height), hex_to_rgb(ColorScheme.DARK_TILE))
        draw = ImageDraw.Draw(img)

        self._draw_checkerboard(draw, state)
        self._draw_cell(draw, state.food, state.unit, hex_to_rgb(ColorScheme.FOOD))

        snake_fill = hex_to_rgb(ColorScheme.SNAKE)
        snake_border = hex_to_rgb(ColorScheme.SNAKE_BORDER)
        for part in state.snake:
            self._draw_cell(draw, part, state.unit, snake_fill, outline=snake_border)

        if state.is_game_over:
            img = self._draw_game_over(img)

        return img

    def render_png(self, state: GameState) -> bytes:
        """Render state and encode it as PNG."""
        buffer = io.BytesIO()
        self.render(state).save(buffer, format="PNG")
        return buffer.getvalue()

    def _draw_checkerboard(self, draw: ImageDraw.ImageDraw, state: GameState):
        dark = hex_to_rgb(ColorScheme.DARK_TILE)
        light = hex_to_rgb(ColorScheme.LIGHT_TILE)
        for i in range(state.width // state.unit):
            for j in range(state.height // state.unit):
                color = dark if (i + j) % 2 == 0 else light
                self._draw_cell(draw, (i * state.unit, j * state.unit), state.unit, color)

    def _draw_cell(
        self,
        draw: ImageDraw.ImageDraw,
        cell: Tuple[int, int],
        size: int,
        color: Tuple[int, int, int],
        outline: Tuple[int, int, int] = None
    ):
        """Draw one grid cell; Pillow includes the end pixel, hence the -1."""
        x, y = cell
        draw.rectangle([x, y, x + size - 1, y + size - 1], fill=color, outline=outline)

    def _draw_game_over(self, img: Image.Image) -> Image.Image:
        width, height = img.size
        frame = Image.alpha_composite(
            img.convert('RGBA'),
            Image.new('RGBA', img.size, ColorScheme.OVERLAY)
        )

        lines = [
            (GAME_OVER_TEXT, self.font_title, ColorScheme.GAME_OVER_TEXT, height // 2 - 20),
            (RESTART_TEXT, self.font_instruction, ColorScheme.INSTRUCTION_TEXT, height // 2 + 30),
        ]

        # Glow: blurred copy of the text underneath the sharp text
        glow = Image.new('RGBA', img.size, (0, 0, 0, 0))
        glow_draw = ImageDraw.Draw(glow)
        for text, font, color, center_y in lines:
            glow_draw.text(self._centered(glow_draw, text, font, width, center_y), text,
                           fill=hex_to_rgb(color) + (255,), font=font)
        frame = Image.alpha_composite(frame, glow.filter(ImageFilter.GaussianBlur(self.glow_radius)))

        draw = ImageDraw.Draw(frame)
        for text, font, color, center_y in lines:
            draw.text(self._centered(draw, text, font, width, center_y), text,
                      fill=hex_to_rgb(color), font=font)

        return frame.convert('RGB')

    @staticmethod
    def _centered(draw: ImageDraw.ImageDraw, text: str, font, width: int, center_y: int) -> Tuple[int, int]:
        bbox = draw.textbbox((0, 0), text, font=font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        return (width // 2 - text_width // 2, center_y - text_height // 2)
