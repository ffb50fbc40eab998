"""
TimeExt Units — Calendar/Clock Granularities
===============================================
Closed, ordered set of units:
  year > month > day > hour > minute > second > microsecond

The parent of a unit is the immediately larger one. Year has none.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union

from timeext.errors import UnknownUnitError


# ══════════════════════════════════════════════════════════════
# UNIT ENUM
# ══════════════════════════════════════════════════════════════

class Unit(Enum):
    """A granularity of calendar/clock measurement."""
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MICROSECOND = "microsecond"

    @property
    def plural(self) -> str:
        """Keyword name used by relativedelta (e.g. 'days')."""
        return f"{self.value}s"

    @property
    def parent(self) -> Optional[Unit]:
        """Immediately enclosing unit, or None for YEAR."""
        index = UNIT_ORDER.index(self)
        if index == 0:
            return None
        return UNIT_ORDER[index - 1]

    @classmethod
    def coerce(cls, unit: Union[Unit, str]) -> Unit:
        """
        Resolve a Unit from an enum member, name or alias.

        Raises:
            UnknownUnitError: If the name is not a known unit.
        """
        if isinstance(unit, Unit):
            return unit
        if isinstance(unit, str):
            found = UNIT_ALIASES.get(unit.strip().lower())
            if found is not None:
                return found
        raise UnknownUnitError(unit)


UNIT_ORDER: Tuple[Unit, ...] = (
    Unit.YEAR,
    Unit.MONTH,
    Unit.DAY,
    Unit.HOUR,
    Unit.MINUTE,
    Unit.SECOND,
    Unit.MICROSECOND,
)


# ══════════════════════════════════════════════════════════════
# NAME LOOKUP
# ══════════════════════════════════════════════════════════════

UNIT_ALIASES: Dict[str, Unit] = {
    **{u.value: u for u in UNIT_ORDER},
    **{u.plural: u for u in UNIT_ORDER},
    "min": Unit.MINUTE,
    "mins": Unit.MINUTE,
    "sec": Unit.SECOND,
    "secs": Unit.SECOND,
    "usec": Unit.MICROSECOND,
    "usecs": Unit.MICROSECOND,
}
