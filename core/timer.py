"""
core/timer.py — Frame-to-tick clock for Key Cracker.

The engine counts time in whole seconds through on_tick(). The frame loop
runs at FPS and hands out fractional deltas. TickClock sits in between:
it accumulates frame time and reports how many whole ticks have elapsed.

TickClock owns only its own state. It does not touch the session.
game.py feeds it dt and calls on_tick() once per reported tick.

Usage:
    clock = TickClock()

    # each frame:
    for _ in range(clock.update(dt)):
        session = on_tick(session)
"""

from settings import TICK_INTERVAL_S


class TickClock:
    """Accumulates frame deltas into fixed-interval ticks.

    Attributes:
        _interval: Seconds per tick.
        _elapsed:  Seconds accumulated since the last tick.
        _running:  True if update() counts time.
    """

    def __init__(self, interval: float = TICK_INTERVAL_S) -> None:
        """Initialise a running clock with nothing accumulated.

        Args:
            interval: Seconds per tick. Defaults to TICK_INTERVAL_S.
        """
        self._interval: float = interval
        self._elapsed:  float = 0.0
        self._running:  bool  = True

    def update(self, dt: float) -> int:
        """Advance the clock by dt seconds.

        Args:
            dt: Delta time in seconds since the last frame.

        Returns:
            Number of whole ticks that elapsed. 0 while paused.
        """
        if not self._running or dt <= 0:
            return 0
        self._elapsed += dt
        ticks = int(self._elapsed // self._interval)
        self._elapsed -= ticks * self._interval
        return ticks

    def pause(self) -> None:
        """Stop counting time; the partial tick is kept."""
        self._running = False

    def resume(self) -> None:
        self._running = True

    def reset(self) -> None:
        """Drop the partial tick so the next one is a full interval away.

        Call on every phase change so each phase starts with a full second.
        """
        self._elapsed = 0.0

    @property
    def running(self) -> bool:
        return self._running

    def partial(self) -> float:
        """Return progress toward the next tick as a fraction in [0.0, 1.0)."""
        if self._interval <= 0:
            return 0.0
        return self._elapsed / self._interval
