"""
TimeExt Shorthands — Per-Unit Method Aliases
===============================================
Static table of convenience names, e.g.

    each_hour(action)          -> each(Unit.HOUR, action)
    map_beginning_of_each_min  -> map_beginning_of_each(Unit.MINUTE, ...)
    of_the_month(action)       -> of_the(Unit.MONTH, action)

Microsecond has no shorthands. Wrappers are attached once, at
class creation, by the with_shorthands decorator.
"""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from timeext.units import Unit


SHORTHAND_UNITS: Dict[str, Unit] = {
    "year": Unit.YEAR,
    "month": Unit.MONTH,
    "day": Unit.DAY,
    "hour": Unit.HOUR,
    "min": Unit.MINUTE,
    "minute": Unit.MINUTE,
    "sec": Unit.SECOND,
    "second": Unit.SECOND,
}

ITERATOR_METHODS: Tuple[str, ...] = (
    "each",
    "beginning_of_each",
    "map_each",
    "map_beginning_of_each",
)

LIMITER_METHODS: Tuple[str, ...] = ("of_the", "of")

# shorthand name -> (target method, unit)
SHORTHAND_TABLE: Dict[str, Tuple[str, Unit]] = {
    f"{method}_{suffix}": (method, unit)
    for method in ITERATOR_METHODS + LIMITER_METHODS
    for suffix, unit in SHORTHAND_UNITS.items()
}


def _iterator_shorthand(method: str, unit: Unit) -> Callable:
    def shorthand(self, action=None, **options):
        return getattr(self, method)(unit, action, **options)
    return shorthand


def _limiter_shorthand(method: str, unit: Unit) -> Callable:
    def shorthand(self, action=None):
        return getattr(self, method)(unit, action)
    return shorthand


def with_shorthands(cls: type) -> type:
    """Class decorator attaching every SHORTHAND_TABLE entry to cls."""
    for name, (method, unit) in SHORTHAND_TABLE.items():
        if method in LIMITER_METHODS:
            wrapper = _limiter_shorthand(method, unit)
        else:
            wrapper = _iterator_shorthand(method, unit)
        wrapper.__name__ = name
        wrapper.__qualname__ = f"{cls.__qualname__}.{name}"
        wrapper.__doc__ = f"Shorthand for {method}({unit.value!r}, ...)."
        setattr(cls, name, wrapper)
    return cls
