"""
core/session.py — Infiltration attempt state for Key Cracker.

Session is the single value the state machine in core/engine.py owns. It
tracks everything that changes during one attempt:
    - Phase and the result of the last submission
    - Current sequence, player input and keypad layout
    - Entry, attempt and timer counters
    - The round's special effects

Session is frozen. Transitions never mutate it; they return a new value
built with dataclasses.replace(). A collaborator keeps exactly one
`session` variable and swaps it on every event:

    session = initialize(lock, fortifiers, tool, attacker_level=3)
    session = on_submit_or_advance(session)   # START
    session = on_tick(session)                # once per second

The static inputs (lock, fortifiers, tool, resolved rules) live in
`context`, a DifficultyContext built once by initialize().
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from core.difficulty import DifficultyContext
from core.effects import SpecialEffects
from items.base import Fortifier, Lock, Tool
from settings import KEYPAD_VALUES, MESSAGE


class Phase(Enum):
    """State machine phases."""
    INSTRUCTION = "instruction"   # "Code sequence incoming. Press START."
    MEMORISE    = "memorise"      # code on screen, shown once
    INPUT       = "input"         # player keys the code in
    FEEDBACK    = "feedback"      # accepted / invalid / time out
    GAME_OVER   = "game_over"     # terminal: complete or failed


class RoundResult(Enum):
    """What the last submission (or timer expiry) produced."""
    NONE     = "none"
    ACCEPTED = "accepted"
    INVALID  = "invalid"
    TIMEOUT  = "timeout"
    COMPLETE = "complete"
    FAILED   = "failed"
    ABORTED  = "aborted"


@dataclass(frozen=True)
class Session:
    """One infiltration attempt.

    Attributes:
        context:                      Static inputs with resolved item rules.
        seed:                         Seed for every random draw in the session.
        phase:                        Current Phase.
        current_sequence:             Symbol values to reproduce.
        user_input:                   Symbol values entered so far.
        successful_entries:           Correct sequences entered.
        total_required_entries:       Correct sequences needed to bypass.
        time_remaining:               Seconds left in the current phase.
        attempts_remaining:           Misses left before failure.
        max_attempts_per_sequence:    Attempt budget, refilled on success.
        symbols_to_display_count:     Symbols drawn for the current round.
        base_time_allowed:            Resolver time allowance, fixed.
        time_allowed_per_sequence:    Current allowance after decay.
        strength_reduction_per_entry: Lock strength one entry removes.
        special_effects:              Effects for the current round.
        sequence_id:                  Increments with every new sequence.
        keypad_layout:                Keypad symbol order for this sequence.
        message:                      Digital display text.
        last_result:                  Outcome of the last submission.
        is_complete:                  Lock bypassed.
        is_failed:                    Attempts exhausted or aborted.
        aborted:                      Failure came from player cancellation.
        tool_damage_on_fail:          Fixed at initialization.
        attempt_penalty:              Extra attempts lost per miss.
    """

    context:                      DifficultyContext
    seed:                         int
    phase:                        Phase = Phase.INSTRUCTION
    current_sequence:             tuple[str, ...] = ()
    user_input:                   tuple[str, ...] = ()
    successful_entries:           int   = 0
    total_required_entries:       int   = 1
    time_remaining:               int   = 0
    attempts_remaining:           int   = 0
    max_attempts_per_sequence:    int   = 0
    symbols_to_display_count:     int   = 1
    base_time_allowed:            int   = 0
    time_allowed_per_sequence:    int   = 0
    strength_reduction_per_entry: float = 0.0
    special_effects:              SpecialEffects = SpecialEffects()
    sequence_id:                  int   = 0
    keypad_layout:                tuple[str, ...] = KEYPAD_VALUES
    message:                      str   = MESSAGE["instruction"]
    last_result:                  RoundResult = RoundResult.NONE
    is_complete:                  bool  = False
    is_failed:                    bool  = False
    aborted:                      bool  = False
    tool_damage_on_fail:          int   = 0
    attempt_penalty:              int   = 0

    # ── Convenience reads ─────────────────────────────────────────────────────

    @property
    def lock(self) -> Lock:
        return self.context.lock

    @property
    def tool(self) -> Tool:
        return self.context.tool

    @property
    def fortifiers(self) -> tuple[Fortifier, ...]:
        """Fortifiers active this session (after neutralization)."""
        return tuple(a.fortifier for a in self.context.fortifiers)

    @property
    def neutralized_fortifiers(self) -> tuple[Fortifier, ...]:
        return self.context.neutralized

    @property
    def attacker_level(self) -> int:
        return self.context.attacker_level

    @property
    def defender_level(self) -> int | None:
        return self.context.defender_level

    @property
    def round(self) -> int:
        """Current round number, 1-based."""
        return self.successful_entries + 1

    @property
    def is_terminal(self) -> bool:
        return self.is_complete or self.is_failed

    @property
    def input_full(self) -> bool:
        return len(self.user_input) >= len(self.current_sequence)

    def mechanics_context(self) -> DifficultyContext:
        """Return the difficulty context at the current entry count."""
        return self.context.advanced(self.successful_entries)

    def progress(self) -> float:
        """Return successful entries as a fraction of required entries.

        Returns:
            Float in [0.0, 1.0].
        """
        if self.total_required_entries <= 0:
            return 0.0
        return min(1.0, self.successful_entries / self.total_required_entries)

    def time_fill(self, elapsed: float = 0.0) -> float:
        """Return the remaining phase time as a fraction of the allowance.

        Args:
            elapsed: Seconds already spent inside the current tick.
        """
        if self.time_allowed_per_sequence <= 0:
            return 0.0
        remaining = self.time_remaining - elapsed
        return max(0.0, min(1.0, remaining / self.time_allowed_per_sequence))
