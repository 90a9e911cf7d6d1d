"""
core/game.py — pygame front end for one Key Cracker session.

KeyCrackerGame owns the current Session value and feeds the engine:
    - Mouse and keyboard events → on_symbol / on_backspace /
      on_submit_or_advance / on_abort
    - Frame deltas → TickClock → one on_tick() per whole second
    - Terminal session → outcome() → on_complete callback (exactly once)

It adds three pieces of presentation state the engine does not model:
    - Abort confirmation (the clock is paused while the dialog is open)
    - Pass/fail tint after each judged entry
    - Memorise elapsed time, which drives symbol flashing

Controls:
    Mouse       keypad keys, main button, secondary button, header X
    0–7         type a symbol (top row or numpad)
    Backspace   remove the last symbol
    Enter       main button; confirms the abort dialog
    Esc         open the abort dialog; closes it again

game.py does NOT call pygame.display.flip() or manage the window.
That is main.py's responsibility.
"""

from __future__ import annotations
from typing import Callable

import pygame
import structlog

from core import engine
from core.effects import symbols_visible
from core.engine import Outcome
from core.session import Phase, RoundResult, Session
from core.timer import TickClock
from renderer import ui
from renderer.keypad import Keypad
from settings import COLOR, FEEDBACK_FLASH_S, SYMBOL_MAP

logger = structlog.get_logger("keycracker.core.game")

_KEY_SYMBOLS = {
    **{getattr(pygame, f"K_{n}"): str(n) for n in range(8)},
    **{getattr(pygame, f"K_KP{n}"): str(n) for n in range(8)},
}
_PASS_RESULTS = (RoundResult.ACCEPTED, RoundResult.COMPLETE)
_FAIL_RESULTS = (RoundResult.INVALID, RoundResult.TIMEOUT, RoundResult.FAILED)
_JUDGED_PHASES = (Phase.FEEDBACK, Phase.GAME_OVER)


def main_button_label(session: Session) -> str:
    """Return the main button label for the session's phase."""
    if session.phase is Phase.INSTRUCTION:
        return "START"
    if session.phase is Phase.MEMORISE:
        return "CONTINUE"
    if session.phase is Phase.INPUT:
        return "ENTER"
    if session.phase is Phase.FEEDBACK:
        return "NEXT" if session.last_result is RoundResult.ACCEPTED else "RETRY"
    return "CLOSE"


def secondary_button_label(session: Session) -> str | None:
    """Return BACKSPACE during Input, ABORT on other live phases, else None."""
    if session.is_terminal:
        return None
    if session.phase is Phase.INPUT:
        return "BACKSPACE"
    return "ABORT"


def display_glyphs(session: Session, memorise_elapsed: float = 0.0) -> list[str]:
    """Return the glyphs the display panel shows.

    Memorise shows the code (blanked while a flash hides it). Input shows
    the entered glyphs followed by empty slots. Other phases show nothing.
    """
    if session.phase is Phase.MEMORISE:
        if not symbols_visible(session.special_effects.flash, memorise_elapsed):
            return [" "] * len(session.current_sequence)
        return [SYMBOL_MAP[v] for v in session.current_sequence]
    if session.phase is Phase.INPUT:
        entered = [SYMBOL_MAP[v] for v in session.user_input]
        return entered + [""] * (len(session.current_sequence) - len(entered))
    return []


class KeyCrackerGame:
    """Drives one session from START to the completion callback.

    Attributes:
        session:          Current Session value; replaced on every event.
        clock:            TickClock turning frame time into 1 Hz ticks.
        keypad:           Keypad layout and hit detection.
        confirming_abort: True while the abort dialog is open.
        finished:         True once on_complete has been called.
        _on_complete:     Callback receiving the final Outcome.
        _rects:           Hit rects from the last render, keyed by control.
        _hover:           Control or symbol value under the mouse.
        _flash_color:     Tint color of the last judged entry.
        _flash_alpha:     Tint strength, fading to 0.
        _memorise_elapsed: Seconds spent in the current Memorise phase.
    """

    def __init__(
        self,
        session: Session,
        on_complete: Callable[[Outcome], None] | None = None,
    ) -> None:
        """Wrap a freshly initialized session.

        Args:
            session:     Session from engine.initialize().
            on_complete: Called once with the Outcome when the player closes
                         a finished session or confirms an abort.
        """
        self.session:          Session    = session
        self.clock:            TickClock  = TickClock()
        self.keypad:           Keypad     = Keypad(top=ui.KEYPAD_TOP)
        self.confirming_abort: bool       = False
        self.finished:         bool       = False
        self._on_complete                 = on_complete
        self._rects:    dict[str, pygame.Rect] = {}
        self._hover:    str | None        = None
        self._flash_color                 = None
        self._flash_alpha:      float     = 0.0
        self._memorise_elapsed: float     = 0.0

    # ── Engine dispatch ───────────────────────────────────────────────────────

    def _apply(self, transition: Callable[..., Session], *args) -> None:
        """Run one engine transition and react to what changed."""
        before = self.session
        self.session = transition(before, *args)
        after = self.session

        if after.phase is not before.phase or after.sequence_id != before.sequence_id:
            self.clock.reset()
            self._memorise_elapsed = 0.0

        if after.phase is not before.phase and after.phase in _JUDGED_PHASES:
            if after.last_result in _PASS_RESULTS:
                self._flash(COLOR["pass"])
            elif after.last_result in _FAIL_RESULTS:
                self._flash(COLOR["fail"])

    def _flash(self, color) -> None:
        self._flash_color = color
        self._flash_alpha = 1.0

    def _finish(self) -> None:
        """Hand the outcome to the callback and stop accepting input."""
        if self.finished:
            return
        result = engine.outcome(self.session)
        if result is None:
            return
        self.finished = True
        logger.info(
            "outcome_reported",
            success=result.success,
            strength_reduced=result.strength_reduced,
            tool_damage=result.tool_damage,
        )
        if self._on_complete is not None:
            self._on_complete(result)

    # ── Player actions ────────────────────────────────────────────────────────

    def press_main(self) -> None:
        """START / CONTINUE / ENTER / NEXT / RETRY, or CLOSE when finished."""
        if self.session.is_terminal:
            self._finish()
        else:
            self._apply(engine.on_submit_or_advance)

    def press_secondary(self) -> None:
        label = secondary_button_label(self.session)
        if label == "BACKSPACE":
            self._apply(engine.on_backspace)
        elif label == "ABORT":
            self.request_abort()

    def press_symbol(self, value: str) -> None:
        self._apply(engine.on_symbol, value)

    def request_abort(self) -> None:
        """Open the abort dialog and pause the clock."""
        if self.session.is_terminal:
            return
        self.confirming_abort = True
        self.clock.pause()

    def cancel_abort(self) -> None:
        self.confirming_abort = False
        self.clock.resume()

    def confirm_abort(self) -> None:
        """Abort the session and report the outcome straight away."""
        self.confirming_abort = False
        self._apply(engine.on_abort)
        self._finish()

    # ── Per-frame update ──────────────────────────────────────────────────────

    def update(self, dt: float, game_mouse_pos: tuple[int, int]) -> None:
        """Advance timers by one frame.

        Args:
            dt:             Delta time in seconds since the last frame.
            game_mouse_pos: Mouse position in game coordinates.
        """
        if self.finished:
            return

        self._flash_alpha = max(0.0, self._flash_alpha - dt / FEEDBACK_FLASH_S)
        self._hover = self._hit(game_mouse_pos)

        if self.confirming_abort:
            return

        if self.session.phase is Phase.MEMORISE:
            self._memorise_elapsed += dt
        for _ in range(self.clock.update(dt)):
            self._apply(engine.on_tick)

    def _hit(self, pos: tuple[int, int]) -> str | None:
        """Return the control or keypad symbol under `pos`, or None."""
        for name, rect in self._rects.items():
            if rect is not None and rect.collidepoint(pos):
                return name
        if self.confirming_abort or self.session.phase is not Phase.INPUT:
            return None
        return self.keypad.hit_test(self.session.keypad_layout, *pos)

    # ── Event handling ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route a pygame event. Mouse positions must be in game coordinates.

        Args:
            event: A pygame event.
        """
        if self.finished:
            return
        if event.type == pygame.KEYDOWN:
            self._handle_key(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(self._hit(event.pos))

    def _handle_key(self, key: int) -> None:
        if self.confirming_abort:
            if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.confirm_abort()
            elif key == pygame.K_ESCAPE:
                self.cancel_abort()
            return

        if key in _KEY_SYMBOLS:
            self.press_symbol(_KEY_SYMBOLS[key])
        elif key == pygame.K_BACKSPACE:
            self._apply(engine.on_backspace)
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.press_main()
        elif key == pygame.K_ESCAPE:
            self.request_abort()

    def _handle_click(self, target: str | None) -> None:
        if target is None:
            return
        if self.confirming_abort:
            if target == "confirm":
                self.confirm_abort()
            elif target == "cancel":
                self.cancel_abort()
            return

        if target == "main":
            self.press_main()
        elif target == "secondary":
            self.press_secondary()
        elif target == "abort":
            self.request_abort()
        elif target in SYMBOL_MAP:
            self.press_symbol(target)

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, surface: pygame.Surface) -> None:
        """Draw the session onto the game surface.

        Args:
            surface: Native 360x640 surface.
        """
        s = self.session
        surface.fill(COLOR["background"])

        abort_rect = ui.draw_header(
            surface,
            lock_label=f"{s.lock.name or 'Unknown Lock'} L{s.lock.level}",
            tool_label=f"{s.tool.name or 'Unknown Tool'} L{s.tool.level}",
            round_num=s.round,
            show_abort=not s.is_terminal,
            abort_hovered=self._hover == "abort",
        )

        timed = s.phase in (Phase.MEMORISE, Phase.INPUT) and not s.is_terminal
        fill = s.time_fill(self.clock.partial()) if timed else 0.0
        ui.draw_timer_bar(surface, fill)

        ui.draw_display(
            surface,
            message=s.message,
            glyphs=display_glyphs(s, self._memorise_elapsed),
            message_color=self._message_color(),
            detail=self._detail(),
        )
        ui.draw_progress(surface, s.progress(), s.successful_entries, s.total_required_entries)
        ui.draw_effect_badges(surface, s.special_effects.active_names())
        self.keypad.render(
            surface,
            s.keypad_layout,
            enabled=s.phase is Phase.INPUT and not self.confirming_abort,
            hovered=self._hover,
        )
        ui.draw_attempts(surface, s.attempts_remaining, s.max_attempts_per_sequence)

        main_rect, secondary_rect = ui.draw_buttons(
            surface,
            main_button_label(s),
            secondary_button_label(s),
            hovered=self._hover,
        )
        self._rects = {"abort": abort_rect, "main": main_rect, "secondary": secondary_rect}

        if self._flash_color is not None:
            ui.draw_flash(surface, self._flash_color, self._flash_alpha)

        if self.confirming_abort:
            confirm_rect, cancel_rect = ui.draw_confirm(surface, hovered=self._hover)
            self._rects = {"confirm": confirm_rect, "cancel": cancel_rect}

    def _message_color(self):
        result = self.session.last_result
        if self.session.phase not in _JUDGED_PHASES:
            result = RoundResult.NONE
        if result in _PASS_RESULTS:
            return COLOR["pass"]
        if result in _FAIL_RESULTS or result is RoundResult.ABORTED:
            return COLOR["fail"]
        if self.session.special_effects.reverse_sequence.active and self.session.phase is Phase.MEMORISE:
            return COLOR["warning"]
        return COLOR["text"]

    def _detail(self) -> str:
        s = self.session
        result = engine.outcome(s)
        if result is not None:
            if result.success:
                return f"LOCK STRENGTH -{result.strength_reduced}"
            return f"TOOL DAMAGE {result.tool_damage}"
        return f"{s.time_remaining}s   {s.strength_reduction_per_entry:.1f} STR/ENTRY"
