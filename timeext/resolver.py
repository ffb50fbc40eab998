"""
TimeExt Resolver — Bound & Scope Resolution
==============================================
Turns (origin, unit, options, until?, of_the?) into a concrete
IterationWindow: start point, stop bound, direction and the
options actually in effect.

Resolution order:
    1. No scope: start at origin; default bound is one parent
       unit ahead (one unit ahead for YEAR).
    2. Scope:    [beginning of of_the, beginning of next of_the),
                 with beginning_of/include_start forced on and
                 include_end forced off.
    3. Direction from start vs bound.
    4. Truncate start to the unit (beginning_of).
    5. Skip the start point (include_start=False).
    6. Pull the bound back one unit to its end (include_end=False).

Step 6 always moves the bound toward the past. Iterating backward,
that widens the window instead of narrowing it, so the caller's
bound is still visited even with include_end=False.

The resolver is pure. A computed default bound is never written
back to the chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from timeext.options import IterationOptions
from timeext.timepoint import TimePoint
from timeext.units import Unit

logger = logging.getLogger("timeext.resolver")


# ══════════════════════════════════════════════════════════════
# DIRECTION
# ══════════════════════════════════════════════════════════════

class Direction(Enum):
    FORWARD = "FORWARD"
    BACKWARD = "BACKWARD"


# ══════════════════════════════════════════════════════════════
# ITERATION WINDOW
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class IterationWindow:
    """
    A resolved iteration window.

    Both ends are inclusive in the step direction. A window whose
    start is already past until is empty, not invalid.
    """

    unit: Unit
    start: Any
    until: Any
    direction: Direction
    options: IterationOptions

    @property
    def is_forward(self) -> bool:
        return self.direction is Direction.FORWARD

    def step(self, time: TimePoint) -> TimePoint:
        """Move one unit in the window's direction."""
        if self.is_forward:
            return time.successor(self.unit)
        return time.predecessor(self.unit)

    def admits(self, time: TimePoint) -> bool:
        """Check if a cursor position is still inside the window."""
        if self.is_forward:
            return time <= self.until
        return time >= self.until

    @property
    def is_empty(self) -> bool:
        return not self.admits(self.start)


# ══════════════════════════════════════════════════════════════
# RESOLUTION
# ══════════════════════════════════════════════════════════════

def default_bound(origin: TimePoint, unit: Unit) -> TimePoint:
    """One enclosing period ahead, e.g. a day's worth of hours."""
    return origin.advance(unit.parent or unit, 1)


def resolve_window(
    origin: TimePoint,
    unit: Unit,
    options: IterationOptions,
    until: Optional[TimePoint] = None,
    of_the: Optional[Unit] = None,
) -> IterationWindow:
    """
    Resolve the concrete window for one iteration.

    Args:
        origin:  Receiver of the chain.
        unit:    Step unit.
        options: Effective options (presets already applied).
        until:   Explicit bound, ignored when of_the is set.
        of_the:  Enclosing scope unit.

    Returns:
        IterationWindow ready for the engine. Going backward with
        include_end=False, the bound is pulled past `until`, so
        `until` itself is still visited.
    """
    if of_the is None:
        start = origin
        if until is None:
            until = default_bound(origin, unit)
    else:
        start = origin.beginning_of(of_the)
        until = origin.successor(of_the).beginning_of(of_the)
        options = options.scoped()

    direction = Direction.FORWARD if start < until else Direction.BACKWARD

    if options.beginning_of:
        start = start.beginning_of(unit)
    if not options.include_start:
        if direction is Direction.FORWARD:
            start = start.successor(unit)
        else:
            start = start.predecessor(unit)
    if not options.include_end:
        until = until.predecessor(unit).end_of(unit)

    window = IterationWindow(
        unit=unit,
        start=start,
        until=until,
        direction=direction,
        options=options,
    )
    logger.debug(
        f"Window resolved: {unit.value} {direction.value} "
        f"{start} -> {until}"
        f"{' (of the ' + of_the.value + ')' if of_the else ''}"
    )
    return window
