"""
utils/color.py — Color helpers for the Key Cracker renderer.

renderer/bevel.py derives the lit and shaded faces of raised keys from a
single base color. renderer/ui.py uses the blend helpers for the timer bar
(which warms from cyan to red as time runs out) and for overlays.
"""

from __future__ import annotations
from typing import Tuple

RGBColor  = Tuple[int, int, int]
RGBAColor = Tuple[int, int, int, int]


def _channel(value: float) -> int:
    return max(0, min(255, int(value)))


def shade(color: RGBColor, amount: int) -> RGBColor:
    """Shift every channel by `amount`; positive lightens, negative darkens.

    Args:
        color:  Base RGB tuple.
        amount: Signed offset applied to each channel.

    Returns:
        A new RGB tuple clamped to [0, 255].
    """
    return (
        _channel(color[0] + amount),
        _channel(color[1] + amount),
        _channel(color[2] + amount),
    )


def with_alpha(color: RGBColor, alpha: float) -> RGBAColor:
    """Return an RGBA tuple with `alpha` given as a fraction in [0.0, 1.0]."""
    return (color[0], color[1], color[2], _channel(alpha * 255))


def blend(a: RGBColor, b: RGBColor, t: float) -> RGBColor:
    """Linearly interpolate from `a` (t=0) to `b` (t=1)."""
    t = max(0.0, min(1.0, t))
    return (
        _channel(a[0] + (b[0] - a[0]) * t),
        _channel(a[1] + (b[1] - a[1]) * t),
        _channel(a[2] + (b[2] - a[2]) * t),
    )
