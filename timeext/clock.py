"""
TimeExt Clock — Injectable Time Source
=========================================
Moment.now() reads wall-clock time through a Clock so that
iteration relative to "now" can be pinned in tests.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional, Protocol, Union

from dateutil.relativedelta import relativedelta

from timeext.units import Unit


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now(self) -> datetime:
        """Return the current time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Real system time, naive local unless a tz is given."""

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock:
    """
    Test clock — returns a fixed timestamp until advanced.

    Usage:
        clock = FixedClock(datetime(2024, 1, 31, 10, 0))
        clock.advance("day")
        assert clock.now().day == 1
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if not isinstance(fixed_dt, datetime):
            raise TypeError(
                f"FixedClock requires a datetime, got {type(fixed_dt).__name__}."
            )
        self._fixed_dt = fixed_dt

    def now(self) -> datetime:
        return self._fixed_dt

    def advance(self, unit: Union[Unit, str], amount: int = 1) -> None:
        """Move the fixed time by whole units (negative moves back)."""
        unit = Unit.coerce(unit)
        self._fixed_dt = self._fixed_dt + relativedelta(**{unit.plural: amount})


# ══════════════════════════════════════════════════════════════
# DEFAULT CLOCK
# ══════════════════════════════════════════════════════════════

_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    """Override the default clock (testing only)."""
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    """Get the current default clock."""
    return _default_clock
