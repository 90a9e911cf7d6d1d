"""
items/base.py — Immutable item values for Key Cracker.

Three item families take part in an infiltration attempt:
    - Lock       the defended target (strength, resistance, level)
    - Fortifier  an optional attachment adding one defensive rule
    - Tool       the attacker's instrument (attack factor, level)

Items are identified by `name` (which rule applies, see items/registry.py)
plus `level` (numeric scaling). They are frozen: nothing in the engine
mutates an item during a session.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Gauge:
    """A current/max pair, used for lock strength and resistance."""

    current: int
    max: int


@dataclass(frozen=True)
class Lock:
    """The defended target.

    Attributes:
        name:       Lock type name, e.g. "Cypher Lock".
        level:      1–8. Drives every numeric scaling rule.
        strength:   Total strength bypassed on a successful crack.
        resistance: Base resistance of the lock.
    """

    name:       str
    level:      int
    strength:   Gauge = Gauge(0, 0)
    resistance: Gauge = Gauge(0, 0)


@dataclass(frozen=True)
class Fortifier:
    """An attachment on a Lock. Each name maps to exactly one rule."""

    name:  str
    level: int


@dataclass(frozen=True)
class Tool:
    """The attacker's equipped instrument.

    Attributes:
        name:          Tool type name, e.g. "Basic Pick".
        level:         1–8.
        attack_factor: Baseline lock strength removed per correct entry.
    """

    name:          str
    level:         int
    attack_factor: float = 1.0
