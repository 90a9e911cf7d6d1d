"""
renderer/keypad.py — Symbol keypad layout and hit detection for Key Cracker.

Keypad lays out the round's keypad_layout (8 symbols, 9 with the entangled
key) in a 3-column grid centered horizontally below the progress bar. It
handles:
    - Computing key rects from settings constants
    - Hit detection against game coordinates, returning the symbol value
    - Rendering each key with its display glyph

The layout is re-read from the session every frame, so a shuffled keypad
takes effect as soon as the engine produces it. Keys are only live during
the Input phase; game.py passes `enabled` accordingly.
"""

import pygame

from settings import (
    SCREEN_W,
    KEY_W, KEY_H, KEY_PADDING, KEYPAD_COLS,
    COLOR, SYMBOL_MAP,
    FONT_FAMILY, FONT_SIZE_XL,
)
from renderer.bevel import draw_flat, draw_raised

_font_cache: dict[int, pygame.font.Font] = {}


def _glyph_font() -> pygame.font.Font:
    if FONT_SIZE_XL not in _font_cache:
        _font_cache[FONT_SIZE_XL] = pygame.font.SysFont(FONT_FAMILY, FONT_SIZE_XL)
    return _font_cache[FONT_SIZE_XL]


class Keypad:
    """A grid of symbol keys anchored at a fixed top edge.

    Attributes:
        top:      Y pixel of the first key row.
        cols:     Keys per row.
        origin_x: X pixel of the first key column.
    """

    def __init__(self, top: int, cols: int = KEYPAD_COLS) -> None:
        """Compute the horizontal origin so the grid is centered.

        Args:
            top:  Y pixel of the first key row.
            cols: Keys per row.
        """
        self.top = top
        self.cols = cols
        grid_w = cols * KEY_W + (cols - 1) * KEY_PADDING
        self.origin_x = (SCREEN_W - grid_w) // 2

    def key_rect(self, index: int) -> pygame.Rect:
        """Return the rect of the key at position `index` in the layout."""
        col = index % self.cols
        row = index // self.cols
        x = self.origin_x + col * (KEY_W + KEY_PADDING)
        y = self.top + row * (KEY_H + KEY_PADDING)
        return pygame.Rect(x, y, KEY_W, KEY_H)

    def hit_test(self, layout: tuple[str, ...], gx: int, gy: int) -> str | None:
        """Return the symbol value under a game coordinate, or None.

        Args:
            layout: Symbol values in keypad order.
            gx:     X in game space.
            gy:     Y in game space.
        """
        for index, value in enumerate(layout):
            if self.key_rect(index).collidepoint(gx, gy):
                return value
        return None

    def render(
        self,
        surface: pygame.Surface,
        layout: tuple[str, ...],
        enabled: bool,
        hovered: str | None = None,
    ) -> None:
        """Draw every key with its glyph.

        Live keys are raised, the hovered one highlighted. Outside Input the
        keys are drawn flat with dimmed glyphs.

        Args:
            surface: Game surface.
            layout:  Symbol values in keypad order.
            enabled: True during Input.
            hovered: Symbol value under the mouse, if any.
        """
        font = _glyph_font()
        for index, value in enumerate(layout):
            rect = self.key_rect(index)
            if enabled:
                color = COLOR["highlight"] if value == hovered else COLOR["key"]
                draw_raised(surface, rect, color, border_color=COLOR["key_border"])
                text_color = COLOR["text"]
            else:
                draw_flat(surface, rect, COLOR["panel"], COLOR["key_border"])
                text_color = COLOR["text_dim"]

            glyph = font.render(SYMBOL_MAP.get(value, value), True, text_color)
            surface.blit(glyph, (rect.centerx - glyph.get_width() // 2,
                                 rect.centery - glyph.get_height() // 2))
