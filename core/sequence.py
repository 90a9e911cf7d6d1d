"""
core/sequence.py — Sequence generator for Key Cracker.

Produces the code the player memorises each round. Generation applies the
round's sequence-level effects in a fixed order:

    1. Draw      symbols_to_display_count symbols from the keypad alphabet,
                 plus the entangled symbol when the extra-symbol effect fires
    2. Decoys    splice N base-alphabet symbols at random positions
    3. Reverse   flip the whole result, decoys included

The keypad layout for the round is produced alongside: canonical order,
or shuffled when the keypad effect fires, with the entangled key added
whenever the entangled symbol is part of the code.

Randomness:
    Nothing here touches the global random module. Each draw gets its own
    random.Random seeded from (session seed, sequence_id, purpose), so two
    sessions with the same seed replay the same codes.
"""

from __future__ import annotations
import random
from dataclasses import replace

import structlog

from core.difficulty import calculate_symbols_displayed, get_special_effects
from core.effects import SpecialEffects
from core.session import Phase, RoundResult, Session
from settings import ENTANGLED_SYMBOL, KEYPAD_VALUES, MESSAGE

logger = structlog.get_logger("keycracker.core.sequence")


def round_rng(seed: int, sequence_id: int, purpose: str) -> random.Random:
    """Return a deterministic random source for one sequence and purpose.

    Args:
        seed:        Session seed.
        sequence_id: Sequence the draw belongs to.
        purpose:     Short label, e.g. "effects" or "sequence", so the
                     effect rolls and the symbol draw never share a stream.
    """
    return random.Random(f"{seed}:{sequence_id}:{purpose}")


def draw_sequence(
    count: int,
    effects: SpecialEffects,
    rng: random.Random,
) -> tuple[str, ...]:
    """Draw one code and apply decoys and reversal.

    Args:
        count:   Symbols to draw before decoys.
        effects: The round's special effects.
        rng:     Random source.

    Returns:
        Tuple of symbol values.
    """
    pool = list(KEYPAD_VALUES)
    if effects.extra_symbol.active:
        pool.append(ENTANGLED_SYMBOL)

    sequence = [rng.choice(pool) for _ in range(count)]

    if effects.decoys.active:
        for _ in range(effects.decoys.count):
            position = rng.randint(0, len(sequence))
            sequence.insert(position, rng.choice(KEYPAD_VALUES))

    if effects.reverse_sequence.active:
        sequence.reverse()

    return tuple(sequence)


def keypad_layout(
    effects: SpecialEffects,
    rng: random.Random,
    include_entangled: bool = False,
) -> tuple[str, ...]:
    """Return the keypad symbol order for a round."""
    keys = list(KEYPAD_VALUES)
    if include_entangled:
        keys.append(ENTANGLED_SYMBOL)
    if effects.randomize_keypad.active:
        rng.shuffle(keys)
    return tuple(keys)


def generate_new_sequence(session: Session) -> Session:
    """Start a new round: recompute effects, draw a code, enter Memorise.

    The round number comes from session.successful_entries, so a retry
    never calls this; only START and NEXT do.

    Args:
        session: Current session.

    Returns:
        Session in Phase.MEMORISE with a fresh sequence_id, an empty input,
        and the timer reset to the current time allowance.
    """
    sequence_id = session.sequence_id + 1
    ctx = session.mechanics_context()

    effects = get_special_effects(ctx, round_rng(session.seed, sequence_id, "effects"))
    count = calculate_symbols_displayed(ctx)

    rng = round_rng(session.seed, sequence_id, "sequence")
    sequence = draw_sequence(count, effects, rng)
    layout = keypad_layout(effects, rng, include_entangled=ENTANGLED_SYMBOL in sequence)

    logger.debug(
        "sequence_generated",
        sequence_id=sequence_id,
        round=ctx.round,
        length=len(sequence),
        effects=effects.active_names(),
    )

    return replace(
        session,
        phase=Phase.MEMORISE,
        current_sequence=sequence,
        user_input=(),
        symbols_to_display_count=count,
        special_effects=effects,
        keypad_layout=layout,
        sequence_id=sequence_id,
        time_remaining=session.time_allowed_per_sequence,
        last_result=RoundResult.NONE,
        message=MESSAGE["reversed"] if effects.reverse_sequence.active else MESSAGE["memorise"],
    )
