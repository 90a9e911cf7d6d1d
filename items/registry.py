"""
items/registry.py — Central registry of item rules for Key Cracker.

This is the ONLY file that needs to change when a lock, fortifier, or tool
gains a special-case rule. Every known item name is a member of a tagged
enum for its family, and every member maps to one frozen modifier record:

    LOCK_RULES:      LockKind      → LockRule
    FORTIFIER_RULES: FortifierKind → FortifierRule
    TOOL_RULES:      ToolKind      → ToolRule

The difficulty resolver never compares item names. It reads coefficients
off the records returned by resolve_lock(), resolve_fortifier() and
resolve_tool(). Names missing from an enum resolve to the GENERIC member,
whose record is all neutral defaults, so a new item without a rule simply
uses the base formulas.

Adding a rule:
    1. Add a member to the relevant *Kind enum (value = display name)
    2. Add its record to the matching *_RULES dict
    3. If the rule needs a new coefficient, add a field with a neutral
       default to the record and read it in core/difficulty.py
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


# ── Item kinds ────────────────────────────────────────────────────────────────

class _NamedKind(Enum):
    """Enum whose values are display names, with a lenient name lookup."""

    @classmethod
    def from_name(cls, name: str):
        """Return the member whose value is `name`, or GENERIC.

        Args:
            name: Item display name, e.g. "Biometric Seal".

        Returns:
            The matching member. Unknown names map to cls.GENERIC.
        """
        for member in cls:
            if member.value == name:
                return member
        return cls.GENERIC


class LockKind(_NamedKind):
    """Every lock type with a special-case rule."""
    GENERIC              = ""
    CYPHER               = "Cypher Lock"
    STANDARD_CYPHER      = "Standard Cypher Lock"
    REINFORCED_DEADBOLT  = "Reinforced Deadbolt"
    BIOMETRIC_SEAL       = "Biometric Seal"
    NEURAL_NETWORK       = "Neural Network Lock"
    SONIC_PULSE          = "Sonic Pulse Lock"
    PLASMA_CONDUIT       = "Plasma Conduit Lock"
    QUANTUM_ENTANGLEMENT = "Quantum Entanglement Lock"
    TEMPORAL_FLUX        = "Temporal Flux Lock"


class FortifierKind(_NamedKind):
    """Every fortifier type with a special-case rule."""
    GENERIC                      = ""
    DUMMY_NODE                   = "Dummy Node"
    ADAPTIVE_SHIELD              = "Adaptive Shield"
    NEURAL_FEEDBACK_SPORE        = "Neural Feedback Spore"
    TEMPORAL_ANCHOR              = "Temporal Anchor"
    ENTANGLEMENT_FIELD_INHIBITOR = "Entanglement Field Inhibitor"
    FEEDBACK_LOOP                = "Feedback Loop"
    SONIC_DAMPENER               = "Sonic Dampener"
    REACTIVE_ARMOR               = "Reactive Armor"


class ToolKind(_NamedKind):
    """Every tool type with a special-case rule."""
    GENERIC              = ""
    BASIC_PICK           = "Basic Pick"
    HYDRAULIC_DRILL      = "Hydraulic Drill"
    CODE_INJECTOR        = "Code Injector"
    BIO_SCANNER_OVERRIDE = "Bio-Scanner Override"
    SONIC_PULSER         = "Sonic Pulser"
    TEMPORAL_DEPHASER    = "Temporal Dephaser"
    QUANTUM_DEPHASER     = "Quantum Dephaser"
    STEALTH_PROGRAM      = "Stealth Program"
    MASTER_KEY           = "Master Key"
    UNIVERSAL_KEY        = "Universal Key"


class ToolFamily(Enum):
    """Broad tool category. Some locks react to the family, not the tool."""
    GENERIC  = "generic"
    PICK     = "pick"
    DRILL    = "drill"
    INJECTOR = "injector"
    SCANNER  = "scanner"
    PULSER   = "pulser"
    DEPHASER = "dephaser"
    PROGRAM  = "program"
    KEY      = "key"


# ── Modifier records ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LockRule:
    """Coefficients a lock contributes to the difficulty model.

    Attributes:
        entries_multiplier:        Scales the level × 10 entry base.
        family_entries_multiplier: Extra entry scaling against tool families.
        symbols_track_level:       Symbol base is 5 + level instead of 6.
        symbols_growth_every:      +1 symbol per N successful entries (0 = off).
        time_decreases_with_level: Base time is 20 - (level - 1) seconds.
        resists_symbol_reduction:  Halves any tool's symbol reduction.
        strength_multiplier:       Scales every tool's strength per entry.
        family_strength_multiplier: Strength scaling against tool families.
        flash_symbols:             Symbols blink during Memorise.
        extra_symbol:              Periodically injects the entangled symbol.
        time_decay_per_success:    Each success removes `level` seconds.
        strength_growth_per_level: Required entries gained per second, × level.
    """

    entries_multiplier:         float = 1.0
    family_entries_multiplier:  dict[ToolFamily, float] = field(default_factory=dict)
    symbols_track_level:        bool  = False
    symbols_growth_every:       int   = 0
    time_decreases_with_level:  bool  = False
    resists_symbol_reduction:   bool  = False
    strength_multiplier:        float = 1.0
    family_strength_multiplier: dict[ToolFamily, float] = field(default_factory=dict)
    flash_symbols:              bool  = False
    extra_symbol:               bool  = False
    time_decay_per_success:     bool  = False
    strength_growth_per_level:  int   = 0


@dataclass(frozen=True)
class FortifierRule:
    """Coefficients a fortifier contributes, each scaled by its level."""

    entries_flat_per_level:   int   = 0
    entries_scale_per_level:  float = 0.0
    resistance_per_level:     int   = 0
    zeroes_tools:             frozenset[ToolKind] = frozenset()
    halves_time_bonus_of:     frozenset[ToolKind] = frozenset()
    randomize_keypad:         bool  = False
    reverse_sequence:         bool  = False
    decoys_per_level:         int   = 0
    attempt_penalty_per_level: int  = 0
    tool_damage_per_level:    int   = 0


@dataclass(frozen=True)
class ToolRule:
    """Coefficients a tool contributes.

    Attributes:
        family:                      Broad category, see ToolFamily.
        fixed_required_entries:      Overrides required entries outright.
        entries_reduction_per_level: Entries removed against ideal locks.
        symbols_reduction_per_level: Symbols removed (floored) per level.
        time_bonus_per_level:        Seconds added per level.
        weakened_time_bonus_locks:   Locks against which the bonus is × 0.75.
        ideal_locks:                 Locks this tool counters.
        ideal_multiplier:            Strength scaling against ideal locks.
        poor_locks:                  Locks this tool is weak against (× 0.5).
        poor_fortifiers:             Fortifiers this tool is weak against (× 0.5).
        poor_outside_ideal:          Weak (× 0.5) against every non-ideal lock.
        reverse_chance_per_level:    Per-round chance to reverse the code.
        disable_chance_per_level:    Per-round chance to suppress distortions.
        neutralizes_fortifiers:      Disables fortifiers of level ≤ tool level.
    """

    family:                      ToolFamily = ToolFamily.GENERIC
    fixed_required_entries:      int | None = None
    entries_reduction_per_level: int   = 0
    symbols_reduction_per_level: float = 0.0
    time_bonus_per_level:        float = 0.0
    weakened_time_bonus_locks:   frozenset[LockKind] = frozenset()
    ideal_locks:                 frozenset[LockKind] = frozenset()
    ideal_multiplier:            float = 1.0
    poor_locks:                  frozenset[LockKind] = frozenset()
    poor_fortifiers:             frozenset[FortifierKind] = frozenset()
    poor_outside_ideal:          bool  = False
    reverse_chance_per_level:    float = 0.0
    disable_chance_per_level:    float = 0.0
    neutralizes_fortifiers:      bool  = False


# ── Registries ────────────────────────────────────────────────────────────────

LOCK_RULES: dict[LockKind, LockRule] = {
    LockKind.GENERIC:         LockRule(),
    LockKind.CYPHER:          LockRule(),
    LockKind.STANDARD_CYPHER: LockRule(),
    LockKind.REINFORCED_DEADBOLT: LockRule(
        family_entries_multiplier={ToolFamily.PICK: 2.0, ToolFamily.DRILL: 4.0},
        family_strength_multiplier={ToolFamily.PICK: 0.5, ToolFamily.DRILL: 0.25},
    ),
    LockKind.BIOMETRIC_SEAL: LockRule(
        entries_multiplier=1.5,
        family_strength_multiplier={ToolFamily.PICK: 0.5},
        flash_symbols=True,
    ),
    LockKind.NEURAL_NETWORK: LockRule(
        entries_multiplier=1.2,
        symbols_track_level=True,
        symbols_growth_every=2,
        family_strength_multiplier={ToolFamily.DRILL: 0.0},
    ),
    LockKind.SONIC_PULSE: LockRule(time_decreases_with_level=True),
    LockKind.PLASMA_CONDUIT: LockRule(
        resists_symbol_reduction=True,
        strength_multiplier=0.5,
        time_decay_per_success=True,
    ),
    LockKind.QUANTUM_ENTANGLEMENT: LockRule(
        resists_symbol_reduction=True,
        extra_symbol=True,
    ),
    LockKind.TEMPORAL_FLUX: LockRule(strength_growth_per_level=5),
}

FORTIFIER_RULES: dict[FortifierKind, FortifierRule] = {
    FortifierKind.GENERIC:         FortifierRule(),
    FortifierKind.DUMMY_NODE:      FortifierRule(entries_flat_per_level=1),
    FortifierKind.ADAPTIVE_SHIELD: FortifierRule(
        entries_scale_per_level=0.1,
        resistance_per_level=10,
    ),
    FortifierKind.NEURAL_FEEDBACK_SPORE: FortifierRule(randomize_keypad=True),
    FortifierKind.TEMPORAL_ANCHOR:       FortifierRule(reverse_sequence=True),
    FortifierKind.ENTANGLEMENT_FIELD_INHIBITOR: FortifierRule(
        decoys_per_level=1,
        attempt_penalty_per_level=1,
    ),
    FortifierKind.FEEDBACK_LOOP:  FortifierRule(tool_damage_per_level=1),
    FortifierKind.SONIC_DAMPENER: FortifierRule(
        zeroes_tools=frozenset({ToolKind.HYDRAULIC_DRILL}),
        halves_time_bonus_of=frozenset({ToolKind.SONIC_PULSER}),
    ),
    # Reactive Armor has no rule of its own; Code Injector reads it as a poor match.
    FortifierKind.REACTIVE_ARMOR: FortifierRule(),
}

TOOL_RULES: dict[ToolKind, ToolRule] = {
    ToolKind.GENERIC:    ToolRule(),
    ToolKind.BASIC_PICK: ToolRule(family=ToolFamily.PICK),
    ToolKind.HYDRAULIC_DRILL: ToolRule(
        family=ToolFamily.DRILL,
        time_bonus_per_level=1.0,
    ),
    ToolKind.CODE_INJECTOR: ToolRule(
        family=ToolFamily.INJECTOR,
        symbols_reduction_per_level=1.0,
        ideal_locks=frozenset({LockKind.CYPHER}),
        ideal_multiplier=1.5,
        poor_locks=frozenset({LockKind.BIOMETRIC_SEAL, LockKind.PLASMA_CONDUIT}),
        poor_fortifiers=frozenset({FortifierKind.REACTIVE_ARMOR, FortifierKind.FEEDBACK_LOOP}),
    ),
    ToolKind.BIO_SCANNER_OVERRIDE: ToolRule(
        family=ToolFamily.SCANNER,
        entries_reduction_per_level=2,
        ideal_locks=frozenset({LockKind.BIOMETRIC_SEAL}),
        poor_outside_ideal=True,
    ),
    ToolKind.SONIC_PULSER: ToolRule(
        family=ToolFamily.PULSER,
        time_bonus_per_level=0.5,
        weakened_time_bonus_locks=frozenset({
            LockKind.QUANTUM_ENTANGLEMENT, LockKind.TEMPORAL_FLUX,
        }),
    ),
    ToolKind.TEMPORAL_DEPHASER: ToolRule(
        family=ToolFamily.DEPHASER,
        time_bonus_per_level=0.75,
        weakened_time_bonus_locks=frozenset({LockKind.TEMPORAL_FLUX}),
        reverse_chance_per_level=0.10,
    ),
    ToolKind.QUANTUM_DEPHASER: ToolRule(
        family=ToolFamily.DEPHASER,
        symbols_reduction_per_level=0.5,
        ideal_locks=frozenset({LockKind.QUANTUM_ENTANGLEMENT}),
        ideal_multiplier=1.5,
        disable_chance_per_level=0.125,
    ),
    ToolKind.STEALTH_PROGRAM: ToolRule(
        family=ToolFamily.PROGRAM,
        symbols_reduction_per_level=1.0,
    ),
    ToolKind.MASTER_KEY:    ToolRule(family=ToolFamily.KEY, fixed_required_entries=1),
    ToolKind.UNIVERSAL_KEY: ToolRule(family=ToolFamily.KEY, neutralizes_fortifiers=True),
}


# ── Lookups ───────────────────────────────────────────────────────────────────

def resolve_lock(name: str) -> tuple[LockKind, LockRule]:
    """Map a lock name to its kind and rule (GENERIC if unknown)."""
    kind = LockKind.from_name(name)
    return kind, LOCK_RULES.get(kind, LOCK_RULES[LockKind.GENERIC])


def resolve_fortifier(name: str) -> tuple[FortifierKind, FortifierRule]:
    """Map a fortifier name to its kind and rule (GENERIC if unknown)."""
    kind = FortifierKind.from_name(name)
    return kind, FORTIFIER_RULES.get(kind, FORTIFIER_RULES[FortifierKind.GENERIC])


def resolve_tool(name: str) -> tuple[ToolKind, ToolRule]:
    """Map a tool name to its kind and rule (GENERIC if unknown)."""
    kind = ToolKind.from_name(name)
    return kind, TOOL_RULES.get(kind, TOOL_RULES[ToolKind.GENERIC])
