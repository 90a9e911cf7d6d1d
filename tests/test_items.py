"""Tests for the rule registry and the item catalog."""

from __future__ import annotations

import pytest

from items.catalog import (
    FORTIFIER_NAMES,
    LOCK_NAMES,
    TOOL_NAMES,
    clamp_level,
    make_fortifier,
    make_lock,
    make_tool,
    scaled_value,
)
from items.registry import (
    FORTIFIER_RULES,
    LOCK_RULES,
    TOOL_RULES,
    FortifierKind,
    LockKind,
    ToolFamily,
    ToolKind,
    resolve_fortifier,
    resolve_lock,
    resolve_tool,
)


class TestRegistry:
    def test_every_kind_has_a_rule(self):
        assert set(LOCK_RULES) == set(LockKind)
        assert set(FORTIFIER_RULES) == set(FortifierKind)
        assert set(TOOL_RULES) == set(ToolKind)

    def test_resolve_known_names(self):
        assert resolve_lock("Biometric Seal")[0] is LockKind.BIOMETRIC_SEAL
        assert resolve_fortifier("Dummy Node")[0] is FortifierKind.DUMMY_NODE
        kind, rule = resolve_tool("Hydraulic Drill")
        assert kind is ToolKind.HYDRAULIC_DRILL
        assert rule.family is ToolFamily.DRILL

    @pytest.mark.parametrize("resolve,generic", [
        (resolve_lock, LockKind.GENERIC),
        (resolve_fortifier, FortifierKind.GENERIC),
        (resolve_tool, ToolKind.GENERIC),
    ])
    def test_unknown_names_resolve_generic(self, resolve, generic):
        kind, rule = resolve("Definitely Not An Item")
        assert kind is generic
        assert rule == type(rule)()

    def test_names_are_case_sensitive(self):
        assert resolve_lock("biometric seal")[0] is LockKind.GENERIC


class TestCatalog:
    @pytest.mark.parametrize("level,expected", [(-3, 1), (0, 1), (4, 4), (8, 8), (12, 8)])
    def test_clamp_level(self, level, expected):
        assert clamp_level(level) == expected

    def test_scaled_value_endpoints(self):
        assert scaled_value(1, 50, 400) == 50
        assert scaled_value(8, 50, 400) == 400
        assert scaled_value(4, 50, 400) == 200

    def test_make_lock_scales_strength(self):
        low = make_lock("Biometric Seal", 1)
        high = make_lock("Biometric Seal", 8)
        assert low.strength.current == low.strength.max == 90
        assert high.strength.max == 720
        assert high.resistance.max == 2 * low.resistance.max

    def test_make_lock_clamps_level(self):
        assert make_lock("Cypher Lock", 20).level == 8

    def test_unknown_items_use_generic_stats(self):
        assert make_lock("Prototype Lock", 1).strength.max == make_lock("Cypher Lock", 1).strength.max
        assert make_tool("Prototype Tool", 8).attack_factor == 80

    def test_make_tool_and_fortifier(self):
        assert make_tool("Master Key", 1).attack_factor == 20
        assert make_fortifier("Dummy Node", 0).level == 1

    def test_name_lists_cover_every_kind(self):
        assert len(LOCK_NAMES) == len(LockKind) - 1
        assert len(FORTIFIER_NAMES) == len(FortifierKind) - 1
        assert len(TOOL_NAMES) == len(ToolKind) - 1
        assert "" not in LOCK_NAMES
