"""
core/effects.py — Special effects overlay for Key Cracker.

A SpecialEffects value is recomputed at the start of every round by
core/difficulty.py and read by two consumers:
    - core/sequence.py   (extra symbol, decoys, reversal, keypad shuffle)
    - renderer/ui.py     (symbol flashing, effect badges)

Cadence rules:
    Periodic effects fire on every Kth round, where round = successful
    entries + 1. K shrinks as the responsible item's level grows, so a
    higher level means a more frequent effect:
        level_cadence(L) = CADENCE_CEILING - L     (L1: 10, L8: 3)
        flash_cadence(L) = 4, 4, 3, 3, 2, 2, 1, 1  (L1..L8)

Probability effects (tool-driven reversal, dephaser suppression) are rolled
once per round against an injected random.Random, never the global one.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, replace

from settings import CADENCE_CEILING, FLASH_PERIOD_S


@dataclass(frozen=True)
class FlashEffect:
    """Symbols blink out during Memorise.

    Attributes:
        active:   True if this round flashes.
        cadence:  Round cadence K (0 when no item drives it).
        duration: Seconds the symbols stay hidden per blink.
    """

    active:   bool  = False
    cadence:  int   = 0
    duration: float = 0.0


@dataclass(frozen=True)
class CadenceEffect:
    """A periodic toggle: keypad shuffling, entangled symbol injection."""

    active:  bool = False
    cadence: int  = 0


@dataclass(frozen=True)
class ReverseEffect:
    """Sequence reversal, driven by a fortifier cadence or a tool chance."""

    active:  bool  = False
    cadence: int   = 0
    chance:  float = 0.0


@dataclass(frozen=True)
class DecoyEffect:
    """Decoy insertion.

    `attempt_penalty` is the extra attempts consumed on a miss. It belongs
    to the fortifier, not the round, so suppression leaves it in place.
    """

    active:          bool = False
    count:           int  = 0
    attempt_penalty: int  = 0


@dataclass(frozen=True)
class TimeDecayEffect:
    """Seconds removed from the time allowance after each success."""

    active: bool = False
    amount: int  = 0


@dataclass(frozen=True)
class SpecialEffects:
    """Aggregate of every effect for one round.

    Attributes:
        round:            Round this aggregate was computed for (1-based).
        flash:            Symbol flashing (Memorise only).
        randomize_keypad: Shuffled keypad layout (Input only).
        reverse_sequence: Reversed code.
        extra_symbol:     Entangled symbol joins the draw pool.
        decoys:           Decoy insertion and its attempt penalty.
        time_decay:       Per-success time allowance decay.
        disable_chance:   Per-round chance of suppression.
        suppressed:       True if this round's distortions were suppressed.
    """

    round:            int             = 1
    flash:            FlashEffect     = FlashEffect()
    randomize_keypad: CadenceEffect   = CadenceEffect()
    reverse_sequence: ReverseEffect   = ReverseEffect()
    extra_symbol:     CadenceEffect   = CadenceEffect()
    decoys:           DecoyEffect     = DecoyEffect()
    time_decay:       TimeDecayEffect = TimeDecayEffect()
    disable_chance:   float           = 0.0
    suppressed:       bool            = False

    def active_names(self) -> list[str]:
        """Return short labels of the distortions active this round.

        Used by the renderer for effect badges.
        """
        names = []
        if self.flash.active:
            names.append("FLASH")
        if self.randomize_keypad.active:
            names.append("SCRAMBLE")
        if self.reverse_sequence.active:
            names.append("REVERSED")
        if self.extra_symbol.active:
            names.append("ENTANGLED")
        if self.decoys.active:
            names.append(f"DECOY x{self.decoys.count}")
        if self.suppressed:
            names.append("DEPHASED")
        return names


# ── Cadence helpers ───────────────────────────────────────────────────────────

def level_cadence(level: int) -> int:
    """Return the round cadence for a level-driven effect (L1: 10, L8: 3)."""
    return max(1, CADENCE_CEILING - level)


def flash_cadence(level: int) -> int:
    """Return the round cadence for lock-driven flashing."""
    if level <= 2:
        return 4
    if level <= 4:
        return 3
    if level <= 6:
        return 2
    return 1


def fires_on(round_num: int, cadence: int) -> bool:
    """Return True if a cadence-K effect fires on the given round."""
    return cadence > 0 and round_num % cadence == 0


def merge_cadence(current: CadenceEffect, cadence: int, round_num: int) -> CadenceEffect:
    """Fold one more item's cadence into an existing effect.

    When two items drive the same effect, the effect is active if either
    fires this round and reports the more frequent cadence.
    """
    merged = cadence if current.cadence == 0 else min(current.cadence, cadence)
    return CadenceEffect(
        active=current.active or fires_on(round_num, cadence),
        cadence=merged,
    )


def roll(rng: random.Random, chance: float) -> bool:
    """Roll a probability. Zero chance never consumes a random draw."""
    if chance <= 0.0:
        return False
    return rng.random() < chance


def symbols_visible(flash: FlashEffect, elapsed: float, period: float = FLASH_PERIOD_S) -> bool:
    """Return True if the code is on screen `elapsed` seconds into Memorise.

    An active flash hides the symbols for the last `duration` seconds of
    every `period`.
    """
    if not flash.active or flash.duration <= 0 or period <= 0:
        return True
    return (elapsed % period) < period - flash.duration


def suppress(effects: SpecialEffects) -> SpecialEffects:
    """Return a copy with this round's distortions switched off.

    Flash, keypad shuffle, reversal, entangled symbol and decoy insertion
    are suppressed. Time decay and the decoy attempt penalty are not.
    """
    return replace(
        effects,
        flash=replace(effects.flash, active=False),
        randomize_keypad=replace(effects.randomize_keypad, active=False),
        reverse_sequence=replace(effects.reverse_sequence, active=False),
        extra_symbol=replace(effects.extra_symbol, active=False),
        decoys=replace(effects.decoys, active=False),
        suppressed=True,
    )
