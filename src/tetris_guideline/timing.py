"""Auto-repeat timers for held inputs.

Both timers only count time; they report how many repeats fell due during an
update and leave the actual moves to the caller.  Large deltas simply yield
larger counts.
"""

from __future__ import annotations


class ShiftRepeat:
    """Delayed Auto-Shift for one horizontal direction.

    The press itself moves the piece once (done by the caller).  After the key
    has been held for ``das`` milliseconds the first automatic shift fires,
    then one more every ``arr`` milliseconds.  An ``arr`` of zero means the
    piece slides as far as it can on every update past the delay.
    """

    def __init__(self) -> None:
        self.held = False
        self.held_ms = 0.0
        self._repeats = 0

    def press(self) -> None:
        self.held = True
        self.held_ms = 0.0
        self._repeats = 0

    def release(self) -> None:
        self.held = False
        self.held_ms = 0.0
        self._repeats = 0

    def update(self, elapsed_ms: float, das: float, arr: float, limit: int) -> int:
        """Advance by ``elapsed_ms`` and return the number of shifts now due.

        ``limit`` caps the count; it is also the count used when ``arr`` is 0.
        """

        if not self.held:
            return 0
        self.held_ms += elapsed_ms
        if self.held_ms < das:
            return 0
        if arr <= 0:
            return limit
        due = 1 + int((self.held_ms - das) // arr)
        count = due - self._repeats
        self._repeats = due
        return min(count, limit)


class SoftDropRepeat:
    """Soft-drop stepping while the drop key is held.

    The charge starts full so the first step happens on the next update after
    the press, then one step every ``interval`` milliseconds.
    """

    def __init__(self) -> None:
        self.held = False
        self.charge_ms = 0.0

    def press(self, interval: float) -> None:
        self.held = True
        self.charge_ms = interval

    def release(self) -> None:
        self.held = False
        self.charge_ms = 0.0

    def update(self, elapsed_ms: float, interval: float, limit: int) -> int:
        """Advance by ``elapsed_ms`` and return the number of steps now due."""

        if not self.held:
            return 0
        self.charge_ms += elapsed_ms
        if interval <= 0:
            self.charge_ms = 0.0
            return limit
        steps = int(self.charge_ms // interval)
        self.charge_ms -= steps * interval
        return min(steps, limit)


class InputState:
    """Held-input timers for one session."""

    def __init__(self) -> None:
        self.left = ShiftRepeat()
        self.right = ShiftRepeat()
        self.down = SoftDropRepeat()

    def clear(self) -> None:
        self.left.release()
        self.right.release()
        self.down.release()
