"""
renderer/ui.py — Screen chrome rendering for Key Cracker.

Draws everything except the keypad:
    - Header (lock and tool banner, round counter, abort button)
    - Timer bar below the header
    - Digital display (message lines, code or entered symbols)
    - Entry progress bar and special effect badges
    - Attempts meter
    - Main and secondary buttons
    - Pass/fail tint and the abort confirmation overlay

All functions are stateless. They take explicit data arguments, draw to the
provided surface, and return the rects game.py needs for hit detection.
Nothing here reads the session.

Coordinate system: native 360x640 game space, scaled by pygame.SCALED.
"""

import pygame
from settings import (
    SCREEN_W, SCREEN_H,
    HEADER_H, TIMER_BAR_H, DISPLAY_H, PROGRESS_BAR_H, BUTTON_H, ATTEMPTS_BAR_H,
    COLOR,
    FONT_FAMILY, FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)
from renderer.bevel import draw_bar, draw_flat, draw_raised
from utils.color import RGBColor, blend, with_alpha

# ── Layout ────────────────────────────────────────────────────────────────────
MARGIN         = 20
DISPLAY_Y      = HEADER_H + TIMER_BAR_H + 8
PROGRESS_Y     = DISPLAY_Y + DISPLAY_H + 12
BADGE_Y        = PROGRESS_Y + PROGRESS_BAR_H + 8
KEYPAD_TOP     = BADGE_Y + 34
BUTTON_Y       = SCREEN_H - BUTTON_H - 12
ATTEMPTS_Y     = BUTTON_Y - ATTEMPTS_BAR_H - 22
_SYMBOLS_PER_ROW = 10
_SYMBOL_STEP     = 30


# ── Font cache ────────────────────────────────────────────────────────────────
_fonts: dict[int, pygame.font.Font] = {}


def _font(size: int) -> pygame.font.Font:
    """Return a cached font at the given size."""
    if size not in _fonts:
        _fonts[size] = pygame.font.SysFont(FONT_FAMILY, size)
    return _fonts[size]


def _blit_centered(surface: pygame.Surface, text: pygame.Surface, cx: int, y: int) -> None:
    surface.blit(text, (cx - text.get_width() // 2, y))


# ── Header ────────────────────────────────────────────────────────────────────

def draw_header(
    surface: pygame.Surface,
    lock_label: str,
    tool_label: str,
    round_num: int,
    show_abort: bool = True,
    abort_hovered: bool = False,
) -> pygame.Rect | None:
    """Draw the lock / tool banner.

    Args:
        surface:       Game surface.
        lock_label:    e.g. "Biometric Seal L3".
        tool_label:    e.g. "Basic Pick L2".
        round_num:     Current round, 1-based.
        show_abort:    Draw the abort button (hidden once the session ends).
        abort_hovered: True if the mouse is over the abort button.

    Returns:
        Rect of the abort button, or None when it is hidden.
    """
    draw_flat(surface, pygame.Rect(0, 0, SCREEN_W, HEADER_H), COLOR["panel"])
    pygame.draw.line(surface, COLOR["panel_border"], (0, HEADER_H - 1), (SCREEN_W, HEADER_H - 1))

    f_sm = _font(FONT_SIZE_SM)
    f_md = _font(FONT_SIZE_MD)
    surface.blit(f_sm.render("TARGET", True, COLOR["text_dim"]), (12, 8))
    surface.blit(f_md.render(lock_label, True, COLOR["text"]), (12, 20))
    surface.blit(f_sm.render(f"TOOL  {tool_label}", True, COLOR["chrome"]), (12, 42))

    round_surf = f_sm.render(f"ROUND {round_num}", True, COLOR["text_dim"])
    surface.blit(round_surf, (SCREEN_W - round_surf.get_width() - 52, 8))

    if not show_abort:
        return None

    rect = pygame.Rect(SCREEN_W - 44, 14, 32, 32)
    if abort_hovered:
        draw_raised(surface, rect, COLOR["fail"], depth=3)
    else:
        draw_flat(surface, rect, COLOR["key"], COLOR["fail"])
    cross = f_md.render("X", True, COLOR["text"])
    surface.blit(cross, (rect.centerx - cross.get_width() // 2,
                         rect.centery - cross.get_height() // 2))
    return rect


# ── Timer bar ─────────────────────────────────────────────────────────────────

def draw_timer_bar(surface: pygame.Surface, fill: float) -> None:
    """Draw the phase timer; the fill warms from cyan to red as it empties.

    Args:
        surface: Game surface.
        fill:    Remaining time ratio in [0.0, 1.0].
    """
    color = blend(COLOR["timer"], COLOR["highlight"], fill)
    draw_bar(surface, pygame.Rect(0, HEADER_H, SCREEN_W, TIMER_BAR_H), fill, color, depth=0)


# ── Digital display ───────────────────────────────────────────────────────────

def draw_display(
    surface: pygame.Surface,
    message: str,
    glyphs: list[str],
    message_color: RGBColor = COLOR["text"],
    detail: str = "",
) -> None:
    """Draw the display panel: message on top, symbols underneath.

    Symbols wrap every ten glyphs. An empty string in `glyphs` draws an
    underscore slot (an unfilled input position).

    Args:
        surface:       Game surface.
        message:       Display text; "\\n" splits lines.
        glyphs:        Display glyphs to show, in order.
        message_color: Color of the message lines.
        detail:        Optional small line at the bottom of the panel.
    """
    rect = pygame.Rect(MARGIN, DISPLAY_Y, SCREEN_W - 2 * MARGIN, DISPLAY_H)
    draw_flat(surface, rect, COLOR["background"], COLOR["panel_border"], 2)

    f_md = _font(FONT_SIZE_MD)
    y = rect.y + 10
    for line in message.split("\n"):
        _blit_centered(surface, f_md.render(line, True, message_color), rect.centerx, y)
        y += f_md.get_linesize()

    f_xl = _font(FONT_SIZE_XL)
    rows = [glyphs[i:i + _SYMBOLS_PER_ROW] for i in range(0, len(glyphs), _SYMBOLS_PER_ROW)]
    y += 8
    for row in rows:
        x0 = rect.centerx - len(row) * _SYMBOL_STEP // 2
        for i, glyph in enumerate(row):
            cell_x = x0 + i * _SYMBOL_STEP
            if glyph:
                text = f_xl.render(glyph, True, COLOR["highlight"])
                surface.blit(text, (cell_x + (_SYMBOL_STEP - text.get_width()) // 2, y))
            else:
                base_y = y + f_xl.get_height() - 4
                pygame.draw.line(surface, COLOR["text_dim"],
                                 (cell_x + 6, base_y), (cell_x + _SYMBOL_STEP - 6, base_y), 2)
        y += f_xl.get_height() + 2

    if detail:
        f_sm = _font(FONT_SIZE_SM)
        _blit_centered(surface, f_sm.render(detail, True, COLOR["chrome"]),
                       rect.centerx, rect.bottom - f_sm.get_linesize() - 6)


# ── Progress and effects ──────────────────────────────────────────────────────

def draw_progress(surface: pygame.Surface, fill: float, successes: int, required: int) -> None:
    """Draw the successful entries bar with an "ENTRIES n/m" label."""
    rect = pygame.Rect(MARGIN, PROGRESS_Y, SCREEN_W - 2 * MARGIN - 90, PROGRESS_BAR_H)
    draw_bar(surface, rect, fill, COLOR["progress"])
    label = _font(FONT_SIZE_SM).render(f"ENTRIES {successes}/{required}", True, COLOR["text_dim"])
    surface.blit(label, (rect.right + 8, PROGRESS_Y - 2))


def draw_effect_badges(surface: pygame.Surface, names: list[str]) -> None:
    """Draw one small outlined badge per active special effect, left to right."""
    f_sm = _font(FONT_SIZE_SM)
    x = MARGIN
    for name in names:
        text = f_sm.render(name, True, COLOR["warning"])
        rect = pygame.Rect(x, BADGE_Y, text.get_width() + 12, text.get_height() + 6)
        pygame.draw.rect(surface, COLOR["warning"], rect, 1)
        surface.blit(text, (rect.x + 6, rect.y + 3))
        x = rect.right + 6


# ── Attempts meter ────────────────────────────────────────────────────────────

def draw_attempts(surface: pygame.Surface, remaining: int, maximum: int) -> None:
    """Draw one block per attempt; spent attempts are flat and red-outlined.

    Args:
        surface:   Game surface.
        remaining: Attempts left for the current sequence.
        maximum:   Attempts per sequence.
    """
    block_w, gap = 28, 6
    total_w = maximum * block_w + (maximum - 1) * gap
    x0 = (SCREEN_W - total_w) // 2

    label = _font(FONT_SIZE_SM).render("ATTEMPTS", True, COLOR["chrome"])
    _blit_centered(surface, label, SCREEN_W // 2, ATTEMPTS_Y - 16)

    for i in range(maximum):
        rect = pygame.Rect(x0 + i * (block_w + gap), ATTEMPTS_Y, block_w, ATTEMPTS_BAR_H)
        if i < remaining:
            draw_raised(surface, rect, COLOR["progress"], depth=3)
        else:
            draw_flat(surface, rect, COLOR["panel"], COLOR["fail"])


# ── Buttons ───────────────────────────────────────────────────────────────────

def _button(surface: pygame.Surface, rect: pygame.Rect, label: str, hovered: bool) -> None:
    if hovered:
        draw_raised(surface, rect, COLOR["highlight"])
        color = COLOR["background"]
    else:
        draw_flat(surface, rect, COLOR["key"], COLOR["panel_border"])
        color = COLOR["text"]
    text = _font(FONT_SIZE_LG).render(label, True, color)
    surface.blit(text, (rect.centerx - text.get_width() // 2,
                        rect.centery - text.get_height() // 2))


def draw_buttons(
    surface: pygame.Surface,
    main_label: str,
    secondary_label: str | None,
    hovered: str | None = None,
) -> tuple[pygame.Rect, pygame.Rect | None]:
    """Draw the bottom button row.

    With a secondary label the row splits in two (secondary left, main
    right); without one the main button spans the row.

    Args:
        surface:         Game surface.
        main_label:      START / CONTINUE / ENTER / NEXT / RETRY / CLOSE.
        secondary_label: BACKSPACE / ABORT, or None.
        hovered:         "main", "secondary" or None.

    Returns:
        (main_rect, secondary_rect or None).
    """
    full_w = SCREEN_W - 2 * MARGIN
    if secondary_label is None:
        main_rect = pygame.Rect(MARGIN, BUTTON_Y, full_w, BUTTON_H)
        _button(surface, main_rect, main_label, hovered == "main")
        return main_rect, None

    half_w = (full_w - 12) // 2
    secondary_rect = pygame.Rect(MARGIN, BUTTON_Y, half_w, BUTTON_H)
    main_rect = pygame.Rect(SCREEN_W - MARGIN - half_w, BUTTON_Y, half_w, BUTTON_H)
    _button(surface, secondary_rect, secondary_label, hovered == "secondary")
    _button(surface, main_rect, main_label, hovered == "main")
    return main_rect, secondary_rect


# ── Overlays ──────────────────────────────────────────────────────────────────

def draw_flash(surface: pygame.Surface, flash_color: RGBColor, alpha: float) -> None:
    """Tint the whole screen for pass/fail feedback.

    Args:
        surface:     Game surface.
        flash_color: COLOR["pass"] or COLOR["fail"].
        alpha:       Fade factor in [0.0, 1.0]; 0 draws nothing.
    """
    if alpha <= 0.0:
        return
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill(with_alpha(flash_color, alpha * 0.45))
    surface.blit(overlay, (0, 0))


def draw_confirm(
    surface: pygame.Surface,
    hovered: str | None = None,
) -> tuple[pygame.Rect, pygame.Rect]:
    """Draw the abort confirmation dialog over a dimmed screen.

    Args:
        surface: Game surface.
        hovered: "confirm", "cancel" or None.

    Returns:
        (confirm_rect, cancel_rect).
    """
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill(with_alpha(COLOR["background"], 0.8))
    surface.blit(overlay, (0, 0))

    panel = pygame.Rect(MARGIN, 220, SCREEN_W - 2 * MARGIN, 170)
    draw_flat(surface, panel, COLOR["panel"], COLOR["fail"], 2)

    cx = SCREEN_W // 2
    _blit_centered(surface, _font(FONT_SIZE_LG).render("ABORT INFILTRATION?", True, COLOR["fail"]),
                   cx, panel.y + 22)
    _blit_centered(surface, _font(FONT_SIZE_SM).render("Progress on this lock will be lost.", True,
                                                       COLOR["text_dim"]), cx, panel.y + 54)

    btn_w = (panel.w - 48) // 2
    confirm_rect = pygame.Rect(panel.x + 16, panel.bottom - BUTTON_H - 20, btn_w, BUTTON_H)
    cancel_rect = pygame.Rect(panel.right - 16 - btn_w, confirm_rect.y, btn_w, BUTTON_H)
    _button(surface, confirm_rect, "ABORT", hovered == "confirm")
    _button(surface, cancel_rect, "CANCEL", hovered == "cancel")
    return confirm_rect, cancel_rect
