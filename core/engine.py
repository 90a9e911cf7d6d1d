"""
core/engine.py — Session state machine for Key Cracker.

The engine turns collaborator events into new Session values. It is the
only place that advances a session:

    initialize()             build the session, resolve difficulty once
    on_symbol()              keypad tap during Input
    on_backspace()           remove the last entered symbol
    on_submit_or_advance()   START / CONTINUE / ENTER / NEXT / RETRY
    on_tick()                1 Hz timer tick, then passive lock effects
    on_abort()               player cancellation
    outcome()                final result for the completion callback

Phases:
    INSTRUCTION → MEMORISE → INPUT → FEEDBACK → (MEMORISE | INPUT | GAME_OVER)

Every function is total. An event that does not apply to the current phase
returns the session unchanged, and a GAME_OVER session never changes
again. Failure is a session state, never an exception.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, replace

import structlog

from core.difficulty import (
    DifficultyContext,
    calculate_attempt_penalty,
    calculate_required_entries,
    calculate_strength_reduction_per_entry,
    calculate_symbols_displayed,
    calculate_time_allowed_per_sequence,
    calculate_tool_damage_on_fail,
    get_special_effects,
)
from core.sequence import generate_new_sequence, round_rng
from core.session import Phase, RoundResult, Session
from items.base import Fortifier, Lock, Tool
from settings import MAX_ATTEMPTS_PER_SEQUENCE, MESSAGE, MIN_TIME_ALLOWED_S, SYMBOL_MAP

logger = structlog.get_logger("keycracker.core.engine")

_GLYPH_TO_VALUE = {glyph: value for value, glyph in SYMBOL_MAP.items()}
_TIMED_PHASES = (Phase.MEMORISE, Phase.INPUT)


@dataclass(frozen=True)
class Outcome:
    """What a terminal session hands to the collaborator.

    Attributes:
        success:          True if the lock was bypassed.
        strength_reduced: Lock strength removed (full max on success).
        tool_damage:      Damage the collaborator applies to the tool.
    """

    success:          bool
    strength_reduced: int
    tool_damage:      int


# ── Construction ──────────────────────────────────────────────────────────────

def initialize(
    lock: Lock,
    fortifiers: list[Fortifier] | tuple[Fortifier, ...],
    tool: Tool,
    attacker_level: int,
    defender_level: int | None = None,
    max_attempts_per_sequence: int = MAX_ATTEMPTS_PER_SEQUENCE,
    seed: int | None = None,
) -> Session:
    """Build a session in Phase.INSTRUCTION.

    Resolves item rules, neutralizes fortifiers, and computes every
    difficulty parameter once. The first sequence is drawn on START.

    Args:
        lock:                      Lock under attack.
        fortifiers:                Fortifiers attached to the lock.
        tool:                      Attacking tool.
        attacker_level:            Attacking player's level.
        defender_level:            Defending player's level (optional).
        max_attempts_per_sequence: Misses allowed per sequence; at least 1.
        seed:                      Seed for all randomness. None picks one.

    Returns:
        A new Session.
    """
    if seed is None:
        seed = random.getrandbits(32)

    ctx = DifficultyContext.build(lock, fortifiers, tool, attacker_level, defender_level)
    if ctx.neutralized:
        logger.info(
            "fortifiers_neutralized",
            tool=tool.name,
            fortifiers=[f.name for f in ctx.neutralized],
        )

    max_attempts = max(1, int(max_attempts_per_sequence))
    time_allowed = calculate_time_allowed_per_sequence(ctx)

    session = Session(
        context=ctx,
        seed=seed,
        total_required_entries=calculate_required_entries(ctx),
        time_remaining=time_allowed,
        attempts_remaining=max_attempts,
        max_attempts_per_sequence=max_attempts,
        symbols_to_display_count=calculate_symbols_displayed(ctx),
        base_time_allowed=time_allowed,
        time_allowed_per_sequence=time_allowed,
        strength_reduction_per_entry=calculate_strength_reduction_per_entry(ctx),
        special_effects=get_special_effects(ctx, round_rng(seed, 0, "effects")),
        tool_damage_on_fail=calculate_tool_damage_on_fail(ctx),
        attempt_penalty=calculate_attempt_penalty(ctx),
    )

    logger.info(
        "session_initialized",
        lock=lock.name,
        lock_level=lock.level,
        tool=tool.name,
        tool_level=tool.level,
        fortifiers=[f.name for f in session.fortifiers],
        required_entries=session.total_required_entries,
        symbols=session.symbols_to_display_count,
        time_allowed=time_allowed,
        strength_per_entry=session.strength_reduction_per_entry,
        seed=seed,
    )
    return session


# ── Input events ──────────────────────────────────────────────────────────────

def resolve_symbol(symbol: str) -> str | None:
    """Map a keypad value or display glyph to its value, or None."""
    if symbol in SYMBOL_MAP:
        return symbol
    return _GLYPH_TO_VALUE.get(symbol)


def on_symbol(session: Session, symbol: str) -> Session:
    """Append one symbol during Input.

    No-op outside Input, when the input is already as long as the code, or
    for a symbol that is neither a keypad value nor a display glyph.
    """
    if session.phase is not Phase.INPUT or session.input_full:
        return session

    value = resolve_symbol(symbol)
    if value is None:
        logger.warning("unknown_symbol", symbol=symbol)
        return session

    return replace(session, user_input=session.user_input + (value,))


def on_backspace(session: Session) -> Session:
    """Remove the last entered symbol during Input."""
    if session.phase is not Phase.INPUT or not session.user_input:
        return session
    return replace(session, user_input=session.user_input[:-1])


def on_submit_or_advance(session: Session) -> Session:
    """Handle the main button. Its meaning depends on the phase.

    INSTRUCTION → first sequence
    MEMORISE    → Input
    INPUT       → judge the entered code
    FEEDBACK    → next sequence after a success, retry otherwise
    GAME_OVER   → no-op
    """
    if session.is_terminal:
        return session

    if session.phase is Phase.INSTRUCTION:
        return generate_new_sequence(session)

    if session.phase is Phase.MEMORISE:
        return _begin_input(session, MESSAGE["enter"])

    if session.phase is Phase.INPUT:
        return _submit(session)

    if session.phase is Phase.FEEDBACK:
        if session.last_result is RoundResult.ACCEPTED:
            return generate_new_sequence(session)
        return _retry(session)

    return session


def on_abort(session: Session) -> Session:
    """Cancel the attempt. Forces GAME_OVER (failed) with zero reduction."""
    if session.is_terminal:
        return session

    logger.info(
        "session_aborted",
        successful_entries=session.successful_entries,
        required_entries=session.total_required_entries,
    )
    return replace(
        session,
        phase=Phase.GAME_OVER,
        user_input=(),
        is_failed=True,
        aborted=True,
        last_result=RoundResult.ABORTED,
        message=MESSAGE["aborted"],
    )


# ── Timer ─────────────────────────────────────────────────────────────────────

def on_tick(session: Session) -> Session:
    """Advance the phase timer by one second, then apply passive effects.

    Memorise running out moves to Input. Input running out counts as a
    missed attempt.
    """
    if session.is_terminal or session.phase not in _TIMED_PHASES:
        return session

    remaining = session.time_remaining - 1
    if remaining > 0:
        session = replace(session, time_remaining=remaining)
    elif session.phase is Phase.MEMORISE:
        session = _begin_input(session, MESSAGE["memorise_out"])
    else:
        session = _reject(
            replace(session, time_remaining=0),
            RoundResult.TIMEOUT,
            MESSAGE["input_out"],
        )

    return apply_passive_lock_effects(session)


def apply_passive_lock_effects(session: Session) -> Session:
    """Apply per-second lock effects (lock strength growing over time).

    Only runs during Memorise and Input on a live session. The display
    message changes only while the plain Input prompt is showing.
    """
    if session.is_terminal or session.phase not in _TIMED_PHASES:
        return session

    growth = session.context.lock_rule.strength_growth_per_level * session.lock.level
    if growth <= 0:
        return session

    notice = MESSAGE["strength_up"].format(amount=growth)
    message = session.message
    if session.phase is Phase.INPUT and message in (MESSAGE["enter"], notice):
        message = notice

    return replace(
        session,
        total_required_entries=session.total_required_entries + growth,
        message=message,
    )


# ── Outcome ───────────────────────────────────────────────────────────────────

def outcome(session: Session) -> Outcome | None:
    """Return the result to hand to the collaborator, or None if still live."""
    if session.is_complete:
        return Outcome(success=True, strength_reduced=session.lock.strength.max, tool_damage=0)
    if session.is_failed:
        return Outcome(success=False, strength_reduced=0, tool_damage=session.tool_damage_on_fail)
    return None


# ── Internal transitions ──────────────────────────────────────────────────────

def _begin_input(session: Session, message: str) -> Session:
    return replace(
        session,
        phase=Phase.INPUT,
        message=message,
        time_remaining=session.time_allowed_per_sequence,
    )


def _retry(session: Session) -> Session:
    return replace(
        session,
        phase=Phase.INPUT,
        message=MESSAGE["enter"],
        time_remaining=session.time_allowed_per_sequence,
        user_input=(),
    )


def _submit(session: Session) -> Session:
    if not session.input_full:
        return replace(session, message=MESSAGE["incomplete"])
    if session.user_input == session.current_sequence:
        return _accept(session)
    return _reject(session, RoundResult.INVALID, MESSAGE["invalid"])


def _accept(session: Session) -> Session:
    """Count a correct entry; complete the session when enough are in."""
    successes = session.successful_entries + 1

    time_allowed = session.time_allowed_per_sequence
    decay = session.special_effects.time_decay
    if decay.active:
        time_allowed = max(MIN_TIME_ALLOWED_S, time_allowed - decay.amount)

    session = replace(
        session,
        phase=Phase.FEEDBACK,
        successful_entries=successes,
        attempts_remaining=session.max_attempts_per_sequence,
        time_allowed_per_sequence=time_allowed,
        last_result=RoundResult.ACCEPTED,
        message=MESSAGE["accepted"],
    )

    if successes >= session.total_required_entries:
        logger.info(
            "session_complete",
            successful_entries=successes,
            strength_reduced=session.lock.strength.max,
        )
        return replace(
            session,
            phase=Phase.GAME_OVER,
            is_complete=True,
            last_result=RoundResult.COMPLETE,
            message=MESSAGE["granted"],
        )

    logger.info(
        "entry_accepted",
        successful_entries=successes,
        required_entries=session.total_required_entries,
        time_allowed=time_allowed,
    )
    return session


def _reject(session: Session, result: RoundResult, message: str) -> Session:
    """Consume an attempt for a miss or time out; fail when none are left."""
    attempts = max(0, session.attempts_remaining - 1 - session.attempt_penalty)

    session = replace(
        session,
        phase=Phase.FEEDBACK,
        attempts_remaining=attempts,
        user_input=(),
        last_result=result,
        message=message,
    )

    if attempts <= 0:
        logger.info(
            "session_failed",
            cause=result.value,
            successful_entries=session.successful_entries,
            tool_damage=session.tool_damage_on_fail,
        )
        return replace(
            session,
            phase=Phase.GAME_OVER,
            is_failed=True,
            last_result=RoundResult.FAILED,
            message=MESSAGE["exhausted"],
        )

    logger.info("entry_rejected", cause=result.value, attempts_remaining=attempts)
    return session
