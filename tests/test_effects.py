"""Tests for the special effects overlay: cadences, rolls, suppression, flashing."""

from __future__ import annotations

import random

import pytest

from core.difficulty import DifficultyContext, get_special_effects
from core.effects import (
    FlashEffect,
    fires_on,
    flash_cadence,
    level_cadence,
    roll,
    symbols_visible,
)
from items.base import Fortifier, Lock, Tool


class _FixedRandom:
    """Stand-in rng whose random() always returns the same value."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


class _NoDrawRandom:
    def random(self) -> float:
        raise AssertionError("no draw expected")


def _effects(
    lock: str = "Cypher Lock",
    lock_level: int = 1,
    tool: str = "Basic Pick",
    tool_level: int = 1,
    fortifiers: tuple[tuple[str, int], ...] = (),
    round_num: int = 1,
    rng=None,
):
    ctx = DifficultyContext.build(
        Lock(lock, lock_level),
        [Fortifier(name, level) for name, level in fortifiers],
        Tool(tool, tool_level),
        successful_entries=round_num - 1,
    )
    return get_special_effects(ctx, rng or random.Random(0))


class TestCadence:
    @pytest.mark.parametrize("level,expected", [(1, 10), (3, 8), (8, 3)])
    def test_level_cadence(self, level, expected):
        assert level_cadence(level) == expected

    @pytest.mark.parametrize("level,expected", [(1, 4), (2, 4), (3, 3), (4, 3), (5, 2), (6, 2), (7, 1), (8, 1)])
    def test_flash_cadence(self, level, expected):
        assert flash_cadence(level) == expected

    def test_fires_on_multiples_only(self):
        assert fires_on(4, 4)
        assert fires_on(8, 4)
        assert not fires_on(5, 4)
        assert not fires_on(3, 0)


class TestRoll:
    def test_zero_chance_never_draws(self):
        assert roll(_NoDrawRandom(), 0.0) is False

    def test_compares_against_chance(self):
        assert roll(_FixedRandom(0.2), 0.3) is True
        assert roll(_FixedRandom(0.3), 0.3) is False


class TestLockEffects:
    def test_plain_lock_has_no_effects(self):
        effects = _effects()
        assert effects.active_names() == []
        assert effects.round == 1

    def test_biometric_flash_follows_cadence(self):
        assert not _effects("Biometric Seal", 1, round_num=1).flash.active
        flash = _effects("Biometric Seal", 1, round_num=4).flash
        assert flash.active
        assert flash.cadence == 4
        assert flash.duration == pytest.approx(0.1)

    def test_biometric_flash_every_round_at_top_level(self):
        flash = _effects("Biometric Seal", 8, round_num=1).flash
        assert flash.active
        assert flash.duration == pytest.approx(0.8)

    def test_quantum_extra_symbol(self):
        assert _effects("Quantum Entanglement Lock", 8, round_num=3).extra_symbol.active
        assert not _effects("Quantum Entanglement Lock", 8, round_num=4).extra_symbol.active

    def test_plasma_time_decay(self):
        decay = _effects("Plasma Conduit Lock", 3).time_decay
        assert decay.active
        assert decay.amount == 3


class TestFortifierEffects:
    def test_spore_shuffles_keypad_on_cadence(self):
        assert _effects(fortifiers=(("Neural Feedback Spore", 8),), round_num=3).randomize_keypad.active
        assert not _effects(fortifiers=(("Neural Feedback Spore", 8),), round_num=2).randomize_keypad.active

    def test_anchor_reverses_on_cadence(self):
        assert _effects(fortifiers=(("Temporal Anchor", 1),), round_num=10).reverse_sequence.active
        assert not _effects(fortifiers=(("Temporal Anchor", 1),), round_num=9).reverse_sequence.active

    def test_inhibitor_decoys_every_round(self):
        for round_num in (1, 2, 7):
            decoys = _effects(fortifiers=(("Entanglement Field Inhibitor", 2),), round_num=round_num).decoys
            assert decoys.active
            assert decoys.count == 2
            assert decoys.attempt_penalty == 2

    def test_two_spores_use_the_faster_cadence(self):
        keypad = _effects(
            fortifiers=(("Neural Feedback Spore", 1), ("Neural Feedback Spore", 8)),
            round_num=3,
        ).randomize_keypad
        assert keypad.active
        assert keypad.cadence == 3


class TestToolEffects:
    def test_temporal_dephaser_reverse_roll(self):
        effects = _effects(tool="Temporal Dephaser", tool_level=8, rng=_FixedRandom(0.5))
        assert effects.reverse_sequence.active
        assert effects.reverse_sequence.chance == pytest.approx(0.8)

    def test_temporal_dephaser_roll_can_miss(self):
        effects = _effects(tool="Temporal Dephaser", tool_level=1, rng=_FixedRandom(0.5))
        assert not effects.reverse_sequence.active

    def test_tools_without_chances_draw_nothing(self):
        _effects(tool="Basic Pick", rng=_NoDrawRandom())

    def test_quantum_dephaser_suppresses_distortions(self):
        effects = _effects(
            "Biometric Seal", 8,
            tool="Quantum Dephaser", tool_level=8,
            fortifiers=(("Entanglement Field Inhibitor", 2), ("Temporal Anchor", 8)),
            round_num=3,
            rng=_FixedRandom(0.99),
        )
        assert effects.suppressed
        assert not effects.flash.active
        assert not effects.decoys.active
        assert not effects.reverse_sequence.active
        assert effects.decoys.attempt_penalty == 2
        assert effects.active_names() == ["DEPHASED"]

    def test_suppression_keeps_time_decay(self):
        effects = _effects("Plasma Conduit Lock", 4, tool="Quantum Dephaser", tool_level=8,
                           rng=_FixedRandom(0.0))
        assert effects.suppressed
        assert effects.time_decay.active


class TestSymbolsVisible:
    def test_inactive_flash_always_visible(self):
        assert symbols_visible(FlashEffect(), 0.95)

    def test_hidden_at_end_of_each_period(self):
        flash = FlashEffect(active=True, cadence=1, duration=0.3)
        assert symbols_visible(flash, 0.2)
        assert not symbols_visible(flash, 0.8)
        assert symbols_visible(flash, 1.1)
        assert not symbols_visible(flash, 1.75)
