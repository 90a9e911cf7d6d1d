"""Tests for the difficulty resolver: required entries, symbols, time, strength."""

from __future__ import annotations

import pytest

from core.difficulty import (
    DifficultyContext,
    calculate_attempt_penalty,
    calculate_required_entries,
    calculate_strength_reduction_per_entry,
    calculate_symbols_displayed,
    calculate_time_allowed_per_sequence,
    calculate_tool_damage_on_fail,
    round_half_up,
)
from items.base import Fortifier, Gauge, Lock, Tool
from items.catalog import FORTIFIER_NAMES, LOCK_NAMES, TOOL_NAMES, make_lock, make_tool


def _ctx(
    lock: str = "Cypher Lock",
    lock_level: int = 1,
    tool: str = "Basic Pick",
    tool_level: int = 1,
    fortifiers: tuple[tuple[str, int], ...] = (),
    successful_entries: int = 0,
) -> DifficultyContext:
    return DifficultyContext.build(
        Lock(lock, lock_level),
        [Fortifier(name, level) for name, level in fortifiers],
        Tool(tool, tool_level, attack_factor=10.0),
        successful_entries=successful_entries,
    )


class TestRoundHalfUp:
    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.49, 1), (2.5, 3), (21.5, 22), (7.0, 7)])
    def test_halves_round_up(self, value, expected):
        assert round_half_up(value) == expected


class TestRequiredEntries:
    def test_base_lock_level_one(self):
        assert calculate_required_entries(_ctx()) == 10

    def test_dummy_node_adds_its_level(self):
        assert calculate_required_entries(_ctx(fortifiers=(("Dummy Node", 3),))) == 13

    @pytest.mark.parametrize("lock", ["Cypher Lock", "Reinforced Deadbolt", "Temporal Flux Lock"])
    def test_master_key_overrides_everything(self, lock):
        ctx = _ctx(
            lock=lock,
            lock_level=8,
            tool="Master Key",
            fortifiers=(("Dummy Node", 8), ("Adaptive Shield", 8)),
        )
        assert calculate_required_entries(ctx) == 1

    def test_biometric_seal_multiplier(self):
        assert calculate_required_entries(_ctx("Biometric Seal", 2)) == 30

    def test_neural_network_multiplier_rounds(self):
        assert calculate_required_entries(_ctx("Neural Network Lock", 3)) == 36

    def test_deadbolt_reacts_to_tool_family(self):
        assert calculate_required_entries(_ctx("Reinforced Deadbolt", 1, "Basic Pick")) == 20
        assert calculate_required_entries(_ctx("Reinforced Deadbolt", 1, "Hydraulic Drill")) == 40
        assert calculate_required_entries(_ctx("Reinforced Deadbolt", 1, "Code Injector")) == 10

    def test_bio_scanner_counters_biometric_seal(self):
        ctx = _ctx("Biometric Seal", 2, "Bio-Scanner Override", 3)
        assert calculate_required_entries(ctx) == 24

    def test_bio_scanner_reduction_floors_at_one(self):
        ctx = _ctx("Biometric Seal", 1, "Bio-Scanner Override", 8)
        assert calculate_required_entries(ctx) == 1

    def test_bio_scanner_has_no_effect_elsewhere(self):
        assert calculate_required_entries(_ctx("Cypher Lock", 2, "Bio-Scanner Override", 3)) == 20

    def test_adaptive_shield_scales(self):
        assert calculate_required_entries(_ctx(fortifiers=(("Adaptive Shield", 2),))) == 12

    def test_fortifiers_apply_in_order(self):
        ctx = _ctx(fortifiers=(("Dummy Node", 2), ("Adaptive Shield", 5)))
        assert calculate_required_entries(ctx) == 18   # (10 + 2) * 1.5

    def test_unknown_names_use_generic_formula(self):
        ctx = _ctx("Mystery Lock", 4, "Mystery Tool", 2, fortifiers=(("Mystery Node", 3),))
        assert calculate_required_entries(ctx) == 40


class TestFortifierNeutralization:
    def test_universal_key_matches_no_fortifiers(self):
        fortified = _ctx(
            "Biometric Seal", 4, "Universal Key", 5,
            fortifiers=(("Dummy Node", 3), ("Feedback Loop", 5), ("Entanglement Field Inhibitor", 2)),
        )
        bare = _ctx("Biometric Seal", 4, "Universal Key", 5)
        assert calculate_required_entries(fortified) == calculate_required_entries(bare)
        assert calculate_tool_damage_on_fail(fortified) == 0
        assert calculate_attempt_penalty(fortified) == 0
        assert len(fortified.neutralized) == 3
        assert fortified.fortifiers == ()

    def test_universal_key_leaves_higher_fortifiers(self):
        ctx = _ctx(tool="Universal Key", tool_level=5, fortifiers=(("Dummy Node", 6), ("Dummy Node", 2)))
        assert [a.level for a in ctx.fortifiers] == [6]
        assert calculate_required_entries(ctx) == 16

    def test_other_tools_neutralize_nothing(self):
        ctx = _ctx(tool="Master Key", tool_level=8, fortifiers=(("Dummy Node", 1),))
        assert ctx.neutralized == ()
        assert len(ctx.fortifiers) == 1


class TestSymbolsDisplayed:
    def test_base(self):
        assert calculate_symbols_displayed(_ctx()) == 6

    def test_neural_network_tracks_level_and_grows(self):
        assert calculate_symbols_displayed(_ctx("Neural Network Lock", 3)) == 8
        assert calculate_symbols_displayed(_ctx("Neural Network Lock", 3, successful_entries=1)) == 8
        assert calculate_symbols_displayed(_ctx("Neural Network Lock", 3, successful_entries=4)) == 10

    def test_code_injector_reduction(self):
        assert calculate_symbols_displayed(_ctx(tool="Code Injector", tool_level=2)) == 4

    def test_resistant_locks_halve_reduction(self):
        assert calculate_symbols_displayed(_ctx("Quantum Entanglement Lock", 1, "Code Injector", 2)) == 5
        assert calculate_symbols_displayed(_ctx("Plasma Conduit Lock", 1, "Code Injector", 3)) == 5

    def test_quantum_dephaser_reduces_half_level(self):
        assert calculate_symbols_displayed(_ctx(tool="Quantum Dephaser", tool_level=3)) == 5
        assert calculate_symbols_displayed(_ctx("Quantum Entanglement Lock", 1, "Quantum Dephaser", 3)) == 6

    def test_floor_at_one(self):
        assert calculate_symbols_displayed(_ctx(tool="Stealth Program", tool_level=8)) == 1


class TestTimeAllowed:
    def test_base(self):
        assert calculate_time_allowed_per_sequence(_ctx()) == 20

    def test_sonic_pulse_lock_shrinks_with_level(self):
        assert calculate_time_allowed_per_sequence(_ctx("Sonic Pulse Lock", 5)) == 16
        assert calculate_time_allowed_per_sequence(_ctx("Sonic Pulse Lock", 8)) == 13

    def test_tool_bonuses(self):
        assert calculate_time_allowed_per_sequence(_ctx(tool="Hydraulic Drill", tool_level=3)) == 23
        assert calculate_time_allowed_per_sequence(_ctx(tool="Sonic Pulser", tool_level=4)) == 22
        assert calculate_time_allowed_per_sequence(_ctx(tool="Temporal Dephaser", tool_level=2)) == 22

    def test_weakened_bonus(self):
        ctx = _ctx("Temporal Flux Lock", 1, "Sonic Pulser", 4)
        assert calculate_time_allowed_per_sequence(ctx) == 22   # 20 + 1.5, half up

    def test_sonic_dampener_halves_pulser_bonus(self):
        ctx = _ctx(tool="Sonic Pulser", tool_level=4, fortifiers=(("Sonic Dampener", 1),))
        assert calculate_time_allowed_per_sequence(ctx) == 21


class TestStrengthReduction:
    def test_base_is_attack_factor(self):
        assert calculate_strength_reduction_per_entry(_ctx()) == pytest.approx(10.0)

    def test_deadbolt_family_multipliers(self):
        assert calculate_strength_reduction_per_entry(_ctx("Reinforced Deadbolt")) == pytest.approx(5.0)
        assert calculate_strength_reduction_per_entry(
            _ctx("Reinforced Deadbolt", tool="Hydraulic Drill")
        ) == pytest.approx(2.5)

    def test_neural_network_zeroes_drill(self):
        ctx = _ctx("Neural Network Lock", tool="Hydraulic Drill")
        assert calculate_strength_reduction_per_entry(ctx) == 0.0

    def test_code_injector_ideal_and_poor(self):
        assert calculate_strength_reduction_per_entry(_ctx(tool="Code Injector")) == pytest.approx(15.0)
        assert calculate_strength_reduction_per_entry(
            _ctx("Biometric Seal", tool="Code Injector")
        ) == pytest.approx(5.0)
        assert calculate_strength_reduction_per_entry(
            _ctx("Plasma Conduit Lock", tool="Code Injector")
        ) == pytest.approx(2.5)
        assert calculate_strength_reduction_per_entry(
            _ctx("Standard Cypher Lock", tool="Code Injector", fortifiers=(("Reactive Armor", 1),))
        ) == pytest.approx(5.0)

    def test_bio_scanner_poor_outside_biometric(self):
        assert calculate_strength_reduction_per_entry(
            _ctx("Biometric Seal", tool="Bio-Scanner Override")
        ) == pytest.approx(10.0)
        assert calculate_strength_reduction_per_entry(
            _ctx(tool="Bio-Scanner Override")
        ) == pytest.approx(5.0)

    def test_quantum_dephaser_ideal(self):
        ctx = _ctx("Quantum Entanglement Lock", tool="Quantum Dephaser")
        assert calculate_strength_reduction_per_entry(ctx) == pytest.approx(15.0)

    def test_adaptive_shield_divides(self):
        ctx = _ctx(fortifiers=(("Adaptive Shield", 2),))
        assert calculate_strength_reduction_per_entry(ctx) == pytest.approx(10.0 / 1.2)

    def test_adaptive_shield_adds_lock_resistance(self):
        shield = [Fortifier("Adaptive Shield", 1)]
        tool = Tool("Basic Pick", 1, attack_factor=12.0)
        bare = DifficultyContext.build(Lock("Cypher Lock", 1), shield, tool)
        hardened = DifficultyContext.build(
            Lock("Cypher Lock", 1, resistance=Gauge(50, 50)), shield, tool,
        )
        assert calculate_strength_reduction_per_entry(bare) == pytest.approx(12.0 / 1.1)
        assert calculate_strength_reduction_per_entry(hardened) == pytest.approx(7.5)

    def test_lock_resistance_alone_does_not_divide(self):
        ctx = DifficultyContext.build(
            Lock("Cypher Lock", 1, resistance=Gauge(50, 50)), [],
            Tool("Basic Pick", 1, attack_factor=10.0),
        )
        assert calculate_strength_reduction_per_entry(ctx) == pytest.approx(10.0)

    def test_sonic_dampener_zeroes_drill(self):
        ctx = _ctx(tool="Hydraulic Drill", fortifiers=(("Sonic Dampener", 1),))
        assert calculate_strength_reduction_per_entry(ctx) == 0.0


class TestPenalties:
    def test_feedback_loop_tool_damage(self):
        assert calculate_tool_damage_on_fail(_ctx(fortifiers=(("Feedback Loop", 4),))) == 4

    def test_inhibitor_attempt_penalty(self):
        assert calculate_attempt_penalty(_ctx(fortifiers=(("Entanglement Field Inhibitor", 2),))) == 2

    def test_no_fortifiers_no_penalties(self):
        assert calculate_tool_damage_on_fail(_ctx()) == 0
        assert calculate_attempt_penalty(_ctx()) == 0


class TestBounds:
    @pytest.mark.parametrize("lock_name", LOCK_NAMES)
    @pytest.mark.parametrize("tool_name", TOOL_NAMES)
    def test_outputs_respect_floors(self, lock_name, tool_name):
        fortifiers = [Fortifier(name, 8) for name in FORTIFIER_NAMES]
        for level in (1, 4, 8):
            for entries in (0, 7):
                ctx = DifficultyContext.build(
                    make_lock(lock_name, level),
                    fortifiers,
                    make_tool(tool_name, level),
                    successful_entries=entries,
                )
                assert calculate_required_entries(ctx) >= 1
                assert calculate_symbols_displayed(ctx) >= 1
                assert calculate_time_allowed_per_sequence(ctx) >= 5
                assert calculate_strength_reduction_per_entry(ctx) >= 0.0
