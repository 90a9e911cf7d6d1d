"""
renderer/bevel.py — Raised and flat panel primitives for Key Cracker.

Every control on screen is one of three shapes:
    - Raised key  (keypad keys, hovered buttons): a front face with a lit
                  top edge and a shaded right edge offset by `depth`
    - Flat panel  (idle buttons, display panel, empty bar tracks)
    - Bar         a flat track with a raised fill, for timer and progress

(x, y) always refers to the front face, so a raised key and a flat panel
at the same rect line up; the bevel grows up and to the right.
"""

import pygame

from settings import BEVEL_DEPTH, COLOR
from utils.color import RGBColor, shade

_LIGHT = 40
_SHADOW = -40


def draw_raised(
    surface: pygame.Surface,
    rect: pygame.Rect,
    color: RGBColor,
    depth: int = BEVEL_DEPTH,
    border_color: RGBColor | None = None,
) -> None:
    """Draw a key with a lit top face and a shaded right face.

    Args:
        surface:      Target surface.
        rect:         Front face in game coordinates.
        color:        Front face color; the other faces are derived.
        depth:        Bevel offset in pixels.
        border_color: Optional outline color for the front face.
    """
    x, y, w, h = rect.x, rect.y, rect.w, rect.h
    top = [(x, y), (x + w, y), (x + w + depth, y - depth), (x + depth, y - depth)]
    side = [(x + w, y), (x + w + depth, y - depth), (x + w + depth, y + h - depth), (x + w, y + h)]

    pygame.draw.polygon(surface, shade(color, _LIGHT), top)
    pygame.draw.polygon(surface, shade(color, _SHADOW), side)
    pygame.draw.rect(surface, color, rect)
    if border_color is not None:
        pygame.draw.rect(surface, border_color, rect, 1)


def draw_flat(
    surface: pygame.Surface,
    rect: pygame.Rect,
    color: RGBColor,
    border_color: RGBColor | None = None,
    border_width: int = 1,
) -> None:
    """Draw a flat filled rect with an optional outline."""
    pygame.draw.rect(surface, color, rect)
    if border_color is not None:
        pygame.draw.rect(surface, border_color, rect, border_width)


def draw_bar(
    surface: pygame.Surface,
    rect: pygame.Rect,
    fill: float,
    fill_color: RGBColor,
    track_color: RGBColor = COLOR["panel"],
    depth: int = BEVEL_DEPTH // 2,
) -> None:
    """Draw a horizontal bar filled left to right.

    Args:
        surface:     Target surface.
        rect:        Whole bar in game coordinates.
        fill:        Filled fraction, clamped to [0.0, 1.0].
        fill_color:  Raised fill color.
        track_color: Flat track color behind the fill.
        depth:       Bevel offset of the filled part.
    """
    fill = max(0.0, min(1.0, fill))
    draw_flat(surface, rect, track_color, COLOR["key_border"])
    filled_w = int(rect.w * fill)
    if filled_w > 0:
        draw_raised(surface, pygame.Rect(rect.x, rect.y, filled_w, rect.h), fill_color, depth)
