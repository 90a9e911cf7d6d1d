"""
items/catalog.py — Level-scaled item construction for Key Cracker.

The shop and inventory layers are out of scope, but the engine still needs
realistic numbers to play against. The catalog builds Lock, Fortifier and
Tool values for any level 1–8 from a per-name stat table, interpolating
linearly between the L1 and L8 values.

Names missing from a stat table fall back to the generic stats, the same
way items/registry.py falls back to the generic rule.

Usage:
    lock = make_lock("Biometric Seal", 3)
    tool = make_tool("Basic Pick", 2)
    dummy = make_fortifier("Dummy Node", 4)
"""

from __future__ import annotations
import math

from items.base import Fortifier, Gauge, Lock, Tool
from items.registry import FortifierKind, LockKind, ToolKind
from settings import MAX_ITEM_LEVEL, MIN_ITEM_LEVEL

# ── Stat tables ───────────────────────────────────────────────────────────────
# Lock: (strength at L1, strength at L8, resistance at L1). Resistance doubles by L8.
_LOCK_STATS: dict[str, tuple[int, int, int]] = {
    "":                               ( 50, 400, 10),
    LockKind.CYPHER.value:            ( 50, 400, 10),
    LockKind.STANDARD_CYPHER.value:   ( 50, 400, 10),
    LockKind.REINFORCED_DEADBOLT.value: ( 75, 600, 20),
    LockKind.BIOMETRIC_SEAL.value:    ( 90, 720, 25),
    LockKind.NEURAL_NETWORK.value:    (110, 880, 30),
    LockKind.SONIC_PULSE.value:       ( 70, 560, 15),
    LockKind.PLASMA_CONDUIT.value:    (120, 960, 35),
    LockKind.QUANTUM_ENTANGLEMENT.value: (100, 800, 30),
    LockKind.TEMPORAL_FLUX.value:     (100, 800, 30),
}

# Tool: (attack factor at L1, attack factor at L8)
_TOOL_STATS: dict[str, tuple[int, int]] = {
    "":                                 (10,  80),
    ToolKind.BASIC_PICK.value:          (10,  80),
    ToolKind.HYDRAULIC_DRILL.value:     (15, 120),
    ToolKind.CODE_INJECTOR.value:       (12,  96),
    ToolKind.BIO_SCANNER_OVERRIDE.value: (12,  96),
    ToolKind.SONIC_PULSER.value:        (10,  80),
    ToolKind.TEMPORAL_DEPHASER.value:   (14, 112),
    ToolKind.QUANTUM_DEPHASER.value:    (16, 128),
    ToolKind.STEALTH_PROGRAM.value:     ( 8,  64),
    ToolKind.MASTER_KEY.value:          (20, 160),
    ToolKind.UNIVERSAL_KEY.value:       (10,  80),
}

LOCK_NAMES      = tuple(k.value for k in LockKind if k is not LockKind.GENERIC)
FORTIFIER_NAMES = tuple(k.value for k in FortifierKind if k is not FortifierKind.GENERIC)
TOOL_NAMES      = tuple(k.value for k in ToolKind if k is not ToolKind.GENERIC)


def clamp_level(level: int) -> int:
    """Clamp a requested level into [MIN_ITEM_LEVEL, MAX_ITEM_LEVEL]."""
    return max(MIN_ITEM_LEVEL, min(MAX_ITEM_LEVEL, int(level)))


def scaled_value(level: int, base: float, top: float) -> int:
    """Interpolate linearly from `base` at L1 to `top` at L8.

    Args:
        level: Item level; clamped into 1–8 first.
        base:  Value at the lowest level.
        top:   Value at the highest level.

    Returns:
        The interpolated value, rounded half up.
    """
    level = clamp_level(level)
    step = (top - base) / (MAX_ITEM_LEVEL - MIN_ITEM_LEVEL)
    return int(math.floor(base + (level - MIN_ITEM_LEVEL) * step + 0.5))


def make_lock(name: str, level: int) -> Lock:
    """Build a Lock with level-scaled strength and resistance."""
    level = clamp_level(level)
    lo, hi, res = _LOCK_STATS.get(name, _LOCK_STATS[""])
    strength   = scaled_value(level, lo, hi)
    resistance = scaled_value(level, res, res * 2)
    return Lock(
        name=name,
        level=level,
        strength=Gauge(strength, strength),
        resistance=Gauge(resistance, resistance),
    )


def make_fortifier(name: str, level: int) -> Fortifier:
    """Build a Fortifier at a clamped level."""
    return Fortifier(name=name, level=clamp_level(level))


def make_tool(name: str, level: int) -> Tool:
    """Build a Tool with a level-scaled attack factor."""
    level = clamp_level(level)
    lo, hi = _TOOL_STATS.get(name, _TOOL_STATS[""])
    return Tool(name=name, level=level, attack_factor=scaled_value(level, lo, hi))
