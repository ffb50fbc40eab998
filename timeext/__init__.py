"""
TimeExt — Public API
======================
Fluent iteration over calendar/clock units.

    from timeext import Moment

    t = Moment(datetime(2024, 2, 15, 13, 45))
    t.each_hour(print)                         # next 24 hours
    t.of_the_month().map_each_day(f)           # every day of February
    end.from_(start).each("day", visit)        # start -> end
"""

from timeext.chain import IterationChain, PendingIteration
from timeext.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    set_default_clock,
)
from timeext.engine import run, walk
from timeext.errors import (
    InvalidBoundError,
    InvalidOptionError,
    IterationLimitExceeded,
    TimeExtError,
    UnknownUnitError,
)
from timeext.iterations import Iterations
from timeext.moment import Moment
from timeext.options import DEFAULT_OPTIONS, IterationKind, IterationOptions
from timeext.resolver import Direction, IterationWindow, resolve_window
from timeext.settings import (
    IterationSettings,
    get_default_settings,
    set_default_settings,
)
from timeext.shorthand import SHORTHAND_TABLE
from timeext.timepoint import TimePoint
from timeext.units import UNIT_ORDER, Unit

__all__ = [
    # Time values
    "Moment",
    "TimePoint",
    "Unit",
    "UNIT_ORDER",
    # Chaining
    "Iterations",
    "IterationChain",
    "PendingIteration",
    "SHORTHAND_TABLE",
    # Options & settings
    "IterationOptions",
    "IterationKind",
    "DEFAULT_OPTIONS",
    "IterationSettings",
    "get_default_settings",
    "set_default_settings",
    # Resolution & loop
    "Direction",
    "IterationWindow",
    "resolve_window",
    "walk",
    "run",
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    "get_default_clock",
    "set_default_clock",
    # Errors
    "TimeExtError",
    "UnknownUnitError",
    "InvalidOptionError",
    "InvalidBoundError",
    "IterationLimitExceeded",
]
