"""
main.py — Entry point and frame loop for Key Cracker.

Responsibilities:
    - Parse the command line (lock, tool, fortifiers, seed, logging)
    - Build the items and initialize the session
    - Initialise pygame and create a SCALED window at native 360x640
    - Run the loop: handle events → update → render → flip
    - Wrap the loop in async for pygbag (WASM export)

main.py owns the pygame lifecycle and the window. Session logic lives in
core/engine.py; presentation lives in core/game.py.

Usage (local):
    python main.py --lock "Biometric Seal" --lock-level 3 \\
                   --tool "Basic Pick" --tool-level 2 \\
                   --fortifier "Dummy Node:2" --seed 42

Usage (WASM export):
    pygbag main.py
"""

from __future__ import annotations
import argparse
import asyncio

import pygame
import structlog

from core.engine import Outcome, initialize
from core.game import KeyCrackerGame
from items.catalog import FORTIFIER_NAMES, LOCK_NAMES, TOOL_NAMES, make_fortifier, make_lock, make_tool
from items.base import Fortifier
from settings import FPS, LOG_FORMAT, LOG_LEVEL, MAX_ATTEMPTS_PER_SEQUENCE, SCREEN_H, SCREEN_W, TITLE
from telemetry.logging import setup_logging

logger = structlog.get_logger("keycracker.main")

_MAX_FRAME_S = 0.05   # clamp dt so a stalled frame cannot skip whole ticks


def parse_fortifier(value: str) -> Fortifier:
    """Parse a NAME:LEVEL argument into a Fortifier.

    Raises:
        argparse.ArgumentTypeError: If the level is missing or not an integer.
    """
    name, sep, level = value.rpartition(":")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME:LEVEL, got {value!r}")
    try:
        return make_fortifier(name.strip(), int(level))
    except ValueError:
        raise argparse.ArgumentTypeError(f"level must be an integer, got {level!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Key Cracker infiltration minigame")

    parser.add_argument(
        "--lock",
        default="Cypher Lock",
        help=f"Lock type (known: {', '.join(LOCK_NAMES)})",
    )
    parser.add_argument("--lock-level", type=int, default=1, help="Lock level 1-8 (default: 1)")
    parser.add_argument(
        "--tool",
        default="Basic Pick",
        help=f"Tool type (known: {', '.join(TOOL_NAMES)})",
    )
    parser.add_argument("--tool-level", type=int, default=1, help="Tool level 1-8 (default: 1)")
    parser.add_argument(
        "--fortifier",
        type=parse_fortifier,
        action="append",
        default=[],
        metavar="NAME:LEVEL",
        help=f"Attach a fortifier; repeatable (known: {', '.join(FORTIFIER_NAMES)})",
    )
    parser.add_argument("--attacker-level", type=int, default=1, help="Attacking player level")
    parser.add_argument("--defender-level", type=int, default=None, help="Defending player level")
    parser.add_argument(
        "--attempts",
        type=int,
        default=MAX_ATTEMPTS_PER_SEQUENCE,
        help=f"Attempts per sequence (default: {MAX_ATTEMPTS_PER_SEQUENCE})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a replayable session")
    parser.add_argument("--log-level", default=LOG_LEVEL, help=f"Log level (default: {LOG_LEVEL})")
    parser.add_argument(
        "--log-format",
        choices=("console", "json"),
        default=LOG_FORMAT,
        help=f"Log output format (default: {LOG_FORMAT})",
    )
    return parser


async def main(argv: list[str] | None = None) -> None:
    """Async main loop, compatible with both CPython and pygbag.

    Each iteration yields to the event loop via asyncio.sleep(0), which
    pygbag uses to hand control back to the browser.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_format)

    session = initialize(
        lock=make_lock(args.lock, args.lock_level),
        fortifiers=args.fortifier,
        tool=make_tool(args.tool, args.tool_level),
        attacker_level=args.attacker_level,
        defender_level=args.defender_level,
        max_attempts_per_sequence=args.attempts,
        seed=args.seed,
    )

    def on_complete(result: Outcome) -> None:
        logger.info(
            "infiltration_finished",
            success=result.success,
            strength_reduced=result.strength_reduced,
            tool_damage=result.tool_damage,
        )

    pygame.init()
    window = pygame.display.set_mode((SCREEN_W, SCREEN_H), pygame.SCALED | pygame.RESIZABLE)
    pygame.display.set_caption(TITLE)

    clock = pygame.Clock()
    game = KeyCrackerGame(session, on_complete=on_complete)

    running = True
    while running and not game.finished:
        dt = min(clock.tick(FPS) / 1000.0, _MAX_FRAME_S)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.KEYDOWN):
                game.handle_event(event)

        game.update(dt, pygame.mouse.get_pos())
        game.render(window)
        pygame.display.flip()

        await asyncio.sleep(0)

    if not game.finished:
        logger.info("window_closed", phase=game.session.phase.value)
    pygame.quit()


if __name__ == "__main__":
    asyncio.run(main())
