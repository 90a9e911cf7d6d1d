"""
core/difficulty.py — Difficulty resolver for Key Cracker.

Computes the four numeric parameters of an infiltration attempt, plus the
special effects aggregate, from a DifficultyContext snapshot:

    calculate_required_entries            correct entries needed, ≥ 1
    calculate_symbols_displayed           symbols per sequence, ≥ 1
    calculate_time_allowed_per_sequence   seconds per phase, ≥ 5
    calculate_strength_reduction_per_entry  lock strength per entry, ≥ 0
    get_special_effects                   SpecialEffects for the round

Every function is pure. Item rules are looked up once, when the context is
built, and the functions only read coefficients off those records. The
only randomness is in get_special_effects(), which takes an explicit rng.

Fortifier neutralization (Universal Key) is a pre-filter applied in
DifficultyContext.build(): neutralized fortifiers never reach the
formulas below.
"""

from __future__ import annotations
import math
import random
from dataclasses import dataclass, replace

from core.effects import (
    CadenceEffect,
    DecoyEffect,
    FlashEffect,
    ReverseEffect,
    SpecialEffects,
    TimeDecayEffect,
    fires_on,
    flash_cadence,
    level_cadence,
    merge_cadence,
    roll,
    suppress,
)
from items.base import Fortifier, Lock, Tool
from items.registry import (
    FortifierKind,
    FortifierRule,
    LockKind,
    LockRule,
    ToolKind,
    ToolRule,
    resolve_fortifier,
    resolve_lock,
    resolve_tool,
)
from settings import (
    BASE_SYMBOLS_DISPLAYED,
    BASE_TIME_ALLOWED_S,
    ENTRIES_PER_LOCK_LEVEL,
    MIN_REQUIRED_ENTRIES,
    MIN_SYMBOLS_DISPLAYED,
    MIN_TIME_ALLOWED_S,
)

# ── Match coefficients ────────────────────────────────────────────────────────
_POOR_MATCH_MULTIPLIER    = 0.5    # strength per entry on a poor match
_WEAKENED_BONUS_MULTIPLIER = 0.75  # tool time bonus against resistant locks
_DAMPENED_BONUS_MULTIPLIER = 0.5   # tool time bonus under a dampening fortifier
_FLASH_SECONDS_PER_LEVEL  = 0.1
_NEURAL_SYMBOL_OFFSET     = 5      # Neural Network Lock: 5 + level symbols


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


# ── Context ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ActiveFortifier:
    """A fortifier paired with its resolved kind and rule."""

    fortifier: Fortifier
    kind:      FortifierKind
    rule:      FortifierRule

    @property
    def level(self) -> int:
        return self.fortifier.level


@dataclass(frozen=True)
class DifficultyContext:
    """Static inputs of one session plus the round counter.

    Attributes:
        lock, lock_kind, lock_rule:  The defended lock and its resolved rule.
        tool, tool_kind, tool_rule:  The attacker's tool and its resolved rule.
        fortifiers:          Fortifiers still active after neutralization.
        neutralized:         Fortifiers disabled for the whole session.
        attacker_level:      Attacking player's level.
        defender_level:      Defending player's level, if known.
        successful_entries:  Correct entries so far; drives the round number.
    """

    lock:               Lock
    lock_kind:          LockKind
    lock_rule:          LockRule
    tool:               Tool
    tool_kind:          ToolKind
    tool_rule:          ToolRule
    fortifiers:         tuple[ActiveFortifier, ...] = ()
    neutralized:        tuple[Fortifier, ...] = ()
    attacker_level:     int = 1
    defender_level:     int | None = None
    successful_entries: int = 0

    @classmethod
    def build(
        cls,
        lock: Lock,
        fortifiers: list[Fortifier] | tuple[Fortifier, ...],
        tool: Tool,
        attacker_level: int = 1,
        defender_level: int | None = None,
        successful_entries: int = 0,
    ) -> DifficultyContext:
        """Resolve every item rule once and apply fortifier neutralization.

        Args:
            lock:               The lock being attacked.
            fortifiers:         Fortifiers attached to the lock.
            tool:               The attacking tool.
            attacker_level:     Attacking player's level.
            defender_level:     Defending player's level (optional).
            successful_entries: Starting entry count, normally 0.

        Returns:
            A frozen context ready for the calculate_* functions.
        """
        lock_kind, lock_rule = resolve_lock(lock.name)
        tool_kind, tool_rule = resolve_tool(tool.name)
        active, neutralized = neutralize_fortifiers(tuple(fortifiers), tool, tool_rule)
        return cls(
            lock=lock,
            lock_kind=lock_kind,
            lock_rule=lock_rule,
            tool=tool,
            tool_kind=tool_kind,
            tool_rule=tool_rule,
            fortifiers=tuple(
                ActiveFortifier(f, *resolve_fortifier(f.name)) for f in active
            ),
            neutralized=neutralized,
            attacker_level=attacker_level,
            defender_level=defender_level,
            successful_entries=successful_entries,
        )

    @property
    def round(self) -> int:
        """Current round number, 1-based. Retries do not advance it."""
        return self.successful_entries + 1

    def advanced(self, successful_entries: int) -> DifficultyContext:
        """Return the same context at a different entry count."""
        return replace(self, successful_entries=successful_entries)


def neutralize_fortifiers(
    fortifiers: tuple[Fortifier, ...],
    tool: Tool,
    tool_rule: ToolRule,
) -> tuple[tuple[Fortifier, ...], tuple[Fortifier, ...]]:
    """Split fortifiers into (active, neutralized) for a given tool.

    A neutralizing tool disables every fortifier whose level does not
    exceed its own. Other tools neutralize nothing.
    """
    if not tool_rule.neutralizes_fortifiers:
        return fortifiers, ()
    active      = tuple(f for f in fortifiers if f.level > tool.level)
    neutralized = tuple(f for f in fortifiers if f.level <= tool.level)
    return active, neutralized


# ── Required entries ──────────────────────────────────────────────────────────

def calculate_required_entries(ctx: DifficultyContext) -> int:
    """Total correct entries needed to bypass the lock.

    Order: lock base and multipliers → tool override / counters →
    fortifier increases → round and clamp.
    """
    tool_rule = ctx.tool_rule
    if tool_rule.fixed_required_entries is not None:
        return max(MIN_REQUIRED_ENTRIES, tool_rule.fixed_required_entries)

    entries = ctx.lock.level * ENTRIES_PER_LOCK_LEVEL * ctx.lock_rule.entries_multiplier
    entries *= ctx.lock_rule.family_entries_multiplier.get(tool_rule.family, 1.0)

    if tool_rule.entries_reduction_per_level and ctx.lock_kind in tool_rule.ideal_locks:
        reduction = ctx.tool.level * tool_rule.entries_reduction_per_level
        entries = max(MIN_REQUIRED_ENTRIES, entries - reduction)

    for active in ctx.fortifiers:
        entries += active.level * active.rule.entries_flat_per_level
        entries *= 1 + active.level * active.rule.entries_scale_per_level

    return max(MIN_REQUIRED_ENTRIES, round_half_up(entries))


# ── Symbols displayed ─────────────────────────────────────────────────────────

def calculate_symbols_displayed(ctx: DifficultyContext) -> int:
    """Number of symbols drawn per sequence, before decoys."""
    lock_rule = ctx.lock_rule
    if lock_rule.symbols_track_level:
        symbols = _NEURAL_SYMBOL_OFFSET + ctx.lock.level
    else:
        symbols = BASE_SYMBOLS_DISPLAYED
    if lock_rule.symbols_growth_every:
        symbols += ctx.successful_entries // lock_rule.symbols_growth_every

    reduction = math.floor(ctx.tool.level * ctx.tool_rule.symbols_reduction_per_level)
    if lock_rule.resists_symbol_reduction:
        reduction //= 2
    symbols -= reduction

    return max(MIN_SYMBOLS_DISPLAYED, symbols)


# ── Time allowed ──────────────────────────────────────────────────────────────

def calculate_time_allowed_per_sequence(ctx: DifficultyContext) -> int:
    """Seconds allowed for each Memorise or Input phase."""
    time_allowed: float = BASE_TIME_ALLOWED_S
    if ctx.lock_rule.time_decreases_with_level:
        time_allowed = BASE_TIME_ALLOWED_S - (ctx.lock.level - 1)

    bonus = ctx.tool.level * ctx.tool_rule.time_bonus_per_level
    if ctx.lock_kind in ctx.tool_rule.weakened_time_bonus_locks:
        bonus *= _WEAKENED_BONUS_MULTIPLIER
    for active in ctx.fortifiers:
        if ctx.tool_kind in active.rule.halves_time_bonus_of:
            bonus *= _DAMPENED_BONUS_MULTIPLIER

    return max(MIN_TIME_ALLOWED_S, round_half_up(time_allowed + bonus))


# ── Strength reduction ────────────────────────────────────────────────────────

def calculate_strength_reduction_per_entry(ctx: DifficultyContext) -> float:
    """Lock strength removed by one correct entry. Never negative."""
    tool_rule = ctx.tool_rule
    lock_rule = ctx.lock_rule

    strength = float(ctx.tool.attack_factor)
    strength *= lock_rule.strength_multiplier
    strength *= lock_rule.family_strength_multiplier.get(tool_rule.family, 1.0)

    if ctx.lock_kind in tool_rule.ideal_locks:
        strength *= tool_rule.ideal_multiplier
    else:
        poor = tool_rule.poor_outside_ideal or ctx.lock_kind in tool_rule.poor_locks
        poor = poor or any(a.kind in tool_rule.poor_fortifiers for a in ctx.fortifiers)
        if poor:
            strength *= _POOR_MATCH_MULTIPLIER

    for active in ctx.fortifiers:
        if active.rule.resistance_per_level:
            bonus = active.level * active.rule.resistance_per_level
            strength /= 1 + (ctx.lock.resistance.current + bonus) / 100
        if ctx.tool_kind in active.rule.zeroes_tools:
            strength = 0.0

    return max(0.0, strength)


# ── Session-fixed penalties ───────────────────────────────────────────────────

def calculate_tool_damage_on_fail(ctx: DifficultyContext) -> int:
    """Damage dealt to the tool if the attempt fails. Fixed per session."""
    return sum(a.level * a.rule.tool_damage_per_level for a in ctx.fortifiers)


def calculate_attempt_penalty(ctx: DifficultyContext) -> int:
    """Extra attempts consumed by each miss on top of the usual one."""
    return sum(a.level * a.rule.attempt_penalty_per_level for a in ctx.fortifiers)


# ── Special effects ───────────────────────────────────────────────────────────

def get_special_effects(ctx: DifficultyContext, rng: random.Random) -> SpecialEffects:
    """Aggregate every special effect for the context's round.

    Lock effects first, then fortifier cadences, then tool probabilities.
    A successful dephaser roll is applied last as a filter over the rest.

    Args:
        ctx: Difficulty context; ctx.round selects the round.
        rng: Random source for the probability rolls.

    Returns:
        A SpecialEffects aggregate for this round.
    """
    round_num = ctx.round
    lock      = ctx.lock
    lock_rule = ctx.lock_rule

    flash = FlashEffect()
    if lock_rule.flash_symbols:
        cadence = flash_cadence(lock.level)
        flash = FlashEffect(
            active=fires_on(round_num, cadence),
            cadence=cadence,
            duration=round(lock.level * _FLASH_SECONDS_PER_LEVEL, 1),
        )

    extra = CadenceEffect()
    if lock_rule.extra_symbol:
        extra = merge_cadence(extra, level_cadence(lock.level), round_num)

    time_decay = TimeDecayEffect()
    if lock_rule.time_decay_per_success:
        time_decay = TimeDecayEffect(active=True, amount=lock.level)

    keypad  = CadenceEffect()
    reverse = CadenceEffect()
    decoy_count = 0
    for active in ctx.fortifiers:
        if active.rule.randomize_keypad:
            keypad = merge_cadence(keypad, level_cadence(active.level), round_num)
        if active.rule.reverse_sequence:
            reverse = merge_cadence(reverse, level_cadence(active.level), round_num)
        decoy_count += active.level * active.rule.decoys_per_level

    reverse_chance = ctx.tool.level * ctx.tool_rule.reverse_chance_per_level
    reversed_by_tool = roll(rng, reverse_chance)
    disable_chance = ctx.tool.level * ctx.tool_rule.disable_chance_per_level
    disabled = roll(rng, disable_chance)

    effects = SpecialEffects(
        round=round_num,
        flash=flash,
        randomize_keypad=keypad,
        reverse_sequence=ReverseEffect(
            active=reverse.active or reversed_by_tool,
            cadence=reverse.cadence,
            chance=reverse_chance,
        ),
        extra_symbol=extra,
        decoys=DecoyEffect(
            active=decoy_count > 0,
            count=decoy_count,
            attempt_penalty=calculate_attempt_penalty(ctx),
        ),
        time_decay=time_decay,
        disable_chance=disable_chance,
    )
    return suppress(effects) if disabled else effects
