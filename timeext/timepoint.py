"""
TimeExt TimePoint — Collaborator Contract
============================================
The resolver and engine never touch datetime directly. They rely
only on this protocol, so any immutable, totally ordered time
value with unit-aware arithmetic can be iterated.

Requirements:
- successor(u)(t) > t for every supported unit
- beginning_of/end_of snap to the first/last instant inside u
- convert() turns date-only or native values into a comparable
  value of the same type (dates take the receiver's tz)
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

from timeext.units import Unit


T = TypeVar("T", bound="TimePoint")


class TimePoint(Protocol):
    """Immutable, ordered time value with unit arithmetic."""

    def __lt__(self, other: Any) -> bool: ...  # pragma: no cover

    def __le__(self, other: Any) -> bool: ...  # pragma: no cover

    def __ge__(self, other: Any) -> bool: ...  # pragma: no cover

    def successor(self: T, unit: Unit) -> T:
        """Value one unit ahead."""
        ...  # pragma: no cover

    def predecessor(self: T, unit: Unit) -> T:
        """Value one unit behind."""
        ...  # pragma: no cover

    def beginning_of(self: T, unit: Unit) -> T:
        """First instant of the enclosing unit."""
        ...  # pragma: no cover

    def end_of(self: T, unit: Unit) -> T:
        """Last representable instant of the enclosing unit."""
        ...  # pragma: no cover

    def advance(self: T, unit: Unit, amount: int) -> T:
        """Value `amount` whole units ahead."""
        ...  # pragma: no cover

    def convert(self: T, value: Any) -> T:
        """Convert a date, datetime or same-typed value to a bound."""
        ...  # pragma: no cover
