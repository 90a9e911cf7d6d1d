"""Tests for the pygame collaborator's event handling (no window needed)."""

from __future__ import annotations

import pygame

from core.engine import Outcome, initialize
from core.game import KeyCrackerGame, display_glyphs, main_button_label, secondary_button_label
from core.session import Phase
from items.base import Fortifier, Gauge, Lock, Tool
from settings import SYMBOL_MAP

_VALUE_KEYS = {str(n): getattr(pygame, f"K_{n}") for n in range(8)}


def _make_game(tool: str = "Basic Pick", fortifiers=(), seed: int = 5):
    results: list[Outcome] = []
    session = initialize(
        Lock("Cypher Lock", 1, strength=Gauge(50, 50)),
        [Fortifier(name, level) for name, level in fortifiers],
        Tool(tool, 1, attack_factor=10.0),
        attacker_level=1,
        seed=seed,
    )
    return KeyCrackerGame(session, on_complete=results.append), results


def _key(game: KeyCrackerGame, key: int) -> None:
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key))


class TestLabels:
    def test_labels_follow_phase(self):
        game, _ = _make_game()
        assert main_button_label(game.session) == "START"
        assert secondary_button_label(game.session) == "ABORT"
        _key(game, pygame.K_RETURN)
        assert main_button_label(game.session) == "CONTINUE"
        _key(game, pygame.K_RETURN)
        assert main_button_label(game.session) == "ENTER"
        assert secondary_button_label(game.session) == "BACKSPACE"


class TestKeyboard:
    def test_full_run_reports_success_once(self):
        game, results = _make_game(tool="Master Key")
        _key(game, pygame.K_RETURN)
        _key(game, pygame.K_RETURN)
        for value in game.session.current_sequence:
            _key(game, _VALUE_KEYS[value])
        _key(game, pygame.K_RETURN)
        assert game.session.is_complete
        assert main_button_label(game.session) == "CLOSE"
        assert results == []

        _key(game, pygame.K_RETURN)
        _key(game, pygame.K_RETURN)
        assert game.finished
        assert results == [Outcome(success=True, strength_reduced=50, tool_damage=0)]

    def test_backspace_key(self):
        game, _ = _make_game()
        _key(game, pygame.K_RETURN)
        _key(game, pygame.K_RETURN)
        _key(game, pygame.K_3)
        _key(game, pygame.K_KP4)
        assert game.session.user_input == ("3", "4")
        _key(game, pygame.K_BACKSPACE)
        assert game.session.user_input == ("3",)

    def test_escape_then_enter_aborts(self):
        game, results = _make_game(fortifiers=(("Feedback Loop", 3),))
        _key(game, pygame.K_ESCAPE)
        assert game.confirming_abort
        _key(game, pygame.K_RETURN)
        assert game.session.aborted
        assert game.finished
        assert results == [Outcome(success=False, strength_reduced=0, tool_damage=3)]

    def test_escape_twice_cancels(self):
        game, results = _make_game()
        _key(game, pygame.K_ESCAPE)
        _key(game, pygame.K_ESCAPE)
        assert not game.confirming_abort
        assert not game.session.is_terminal
        assert results == []


class TestUpdate:
    def test_frames_drive_ticks(self):
        game, _ = _make_game()
        _key(game, pygame.K_RETURN)
        start = game.session.time_remaining
        for _ in range(60):
            game.update(1 / 60 + 1e-6, (0, 0))
        assert game.session.time_remaining == start - 1

    def test_abort_dialog_pauses_clock(self):
        game, _ = _make_game()
        _key(game, pygame.K_RETURN)
        start = game.session.time_remaining
        _key(game, pygame.K_ESCAPE)
        game.update(0.05, (0, 0))
        for _ in range(100):
            game.update(0.05, (0, 0))
        assert game.session.time_remaining == start


class TestDisplayGlyphs:
    def test_memorise_shows_code(self):
        game, _ = _make_game()
        _key(game, pygame.K_RETURN)
        assert display_glyphs(game.session) == [SYMBOL_MAP[v] for v in game.session.current_sequence]

    def test_input_shows_slots(self):
        game, _ = _make_game()
        _key(game, pygame.K_RETURN)
        _key(game, pygame.K_RETURN)
        _key(game, pygame.K_1)
        glyphs = display_glyphs(game.session)
        assert glyphs[0] == SYMBOL_MAP["1"]
        assert glyphs[1:] == [""] * (len(game.session.current_sequence) - 1)
        assert game.session.phase is Phase.INPUT
