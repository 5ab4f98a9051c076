"""Timer-driven progress for transfers that report no byte counts.

``kubectl cp`` gives no progress information, so the bar creeps toward a
ceiling while the copy runs and jumps to 100 when it finishes.
"""

from __future__ import annotations

TICK_INTERVAL_SECONDS = 0.2
TICK_STEP = 10
TICK_CEILING = 90
COMPLETE = 100
RESET_DELAY_SECONDS = 1.0


class SimulatedProgress:
    """Percentage that advances on a timer, never reaching 100 by itself."""

    def __init__(self, step: int = TICK_STEP, ceiling: int = TICK_CEILING) -> None:
        self._step = step
        self._ceiling = ceiling
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    @property
    def label(self) -> str:
        return f"{self._value}% complete"

    def tick(self) -> int:
        """Advance by one step, capped at the ceiling."""
        self._value = min(self._value + self._step, self._ceiling)
        return self._value

    def complete(self) -> None:
        self._value = COMPLETE

    def fail(self) -> None:
        self._value = 0

    def reset(self) -> None:
        self._value = 0
