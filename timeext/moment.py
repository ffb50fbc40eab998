"""
TimeExt Moment — Default Time Value
======================================
Immutable wrapper around datetime implementing the TimePoint
contract, with calendar arithmetic from dateutil's relativedelta.

Month and year steps clamp to the last valid day:
    2024-01-31 + 1 month -> 2024-02-29

Time zones are carried through untouched. Arithmetic on aware
values is wall-clock arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Dict, Optional, Union

from dateutil.relativedelta import relativedelta

from timeext.clock import Clock, get_default_clock
from timeext.errors import InvalidBoundError
from timeext.iterations import Iterations
from timeext.units import Unit


# Fields reset by beginning_of(unit), per unit.
_TRUNCATE: Dict[Unit, Dict[str, int]] = {
    Unit.YEAR: dict(month=1, day=1, hour=0, minute=0, second=0, microsecond=0),
    Unit.MONTH: dict(day=1, hour=0, minute=0, second=0, microsecond=0),
    Unit.DAY: dict(hour=0, minute=0, second=0, microsecond=0),
    Unit.HOUR: dict(minute=0, second=0, microsecond=0),
    Unit.MINUTE: dict(second=0, microsecond=0),
    Unit.SECOND: dict(microsecond=0),
    Unit.MICROSECOND: {},
}

_ONE_MICROSECOND = timedelta(microseconds=1)

UnitLike = Union[Unit, str]


@dataclass(frozen=True, order=True)
class Moment(Iterations):
    """
    A point in time.

    Usage:
        t = Moment(datetime(2024, 2, 15, 13, 45))
        t.of_the_month().map_each_day(lambda m: m.value.day)
    """

    value: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.value, datetime):
            raise TypeError(
                f"Moment requires a datetime, got {type(self.value).__name__}. "
                f"Use Moment.coerce() for dates."
            )

    # ══════════════════════════════════════════════════════════
    # CONSTRUCTION
    # ══════════════════════════════════════════════════════════

    @classmethod
    def coerce(cls, value: Any, tz: Optional[tzinfo] = None) -> Moment:
        """
        Convert a Moment, datetime or date into a Moment.

        Dates become midnight of that day, in `tz` when given.

        Raises:
            InvalidBoundError: For any other type.
        """
        if isinstance(value, Moment):
            return value
        if isinstance(value, datetime):
            return cls(value)
        if isinstance(value, date):
            return cls.from_date(value, tz)
        raise InvalidBoundError(value)

    @classmethod
    def from_date(cls, value: date, tz: Optional[tzinfo] = None) -> Moment:
        return cls(datetime.combine(value, time.min, tzinfo=tz))

    def convert(self, value: Any) -> Moment:
        """Coerce a bound so it compares with this moment (same tz for dates)."""
        return type(self).coerce(value, self.value.tzinfo)

    @classmethod
    def now(cls, clock: Optional[Clock] = None) -> Moment:
        return cls((clock or get_default_clock()).now())

    # ══════════════════════════════════════════════════════════
    # UNIT ARITHMETIC
    # ══════════════════════════════════════════════════════════

    def advance(self, unit: UnitLike, amount: int) -> Moment:
        unit = Unit.coerce(unit)
        return Moment(self.value + relativedelta(**{unit.plural: amount}))

    def successor(self, unit: UnitLike) -> Moment:
        return self.advance(unit, 1)

    def predecessor(self, unit: UnitLike) -> Moment:
        return self.advance(unit, -1)

    def beginning_of(self, unit: UnitLike) -> Moment:
        unit = Unit.coerce(unit)
        return Moment(self.value.replace(**_TRUNCATE[unit]))

    def end_of(self, unit: UnitLike) -> Moment:
        """Last microsecond inside the enclosing unit."""
        unit = Unit.coerce(unit)
        if unit is Unit.MICROSECOND:
            return self
        following = self.beginning_of(unit).successor(unit)
        return Moment(following.value - _ONE_MICROSECOND)

    # ══════════════════════════════════════════════════════════
    # CONVERSION
    # ══════════════════════════════════════════════════════════

    def to_datetime(self) -> datetime:
        return self.value

    def isoformat(self) -> str:
        return self.value.isoformat()

    def __str__(self) -> str:
        return self.isoformat()
