"""
TimeExt Options — Per-Iteration Settings
===========================================
Immutable option record passed to every iteration, plus the
four iterator presets:

    {no truncation, beginning-of truncation} x {side-effect, collect}

Presets override caller options for the flags they own.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, FrozenSet

from timeext.errors import InvalidOptionError


# ══════════════════════════════════════════════════════════════
# ITERATION OPTIONS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class IterationOptions:
    """
    Boundary and collection flags for one iteration.

    end_of is accepted for compatibility but has no effect on
    window resolution.
    """

    map_result: bool = False
    beginning_of: bool = False
    end_of: bool = False
    include_start: bool = False
    include_end: bool = True

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise TypeError(
                    f"Option '{f.name}' must be bool, "
                    f"got {type(value).__name__}."
                )

    def merge(self, **overrides: Any) -> IterationOptions:
        """
        Return a copy with the given flags replaced.

        Raises:
            InvalidOptionError: If an override names an unknown option.
        """
        unknown = set(overrides) - OPTION_NAMES
        if unknown:
            raise InvalidOptionError(unknown)
        if not overrides:
            return self
        return replace(self, **overrides)

    def scoped(self) -> IterationOptions:
        """Fixed boundary semantics used when an of_the scope is set."""
        return replace(
            self, beginning_of=True, include_start=True, include_end=False
        )

    def to_dict(self) -> Dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


OPTION_NAMES: FrozenSet[str] = frozenset(
    f.name for f in fields(IterationOptions)
)

DEFAULT_OPTIONS = IterationOptions()


# ══════════════════════════════════════════════════════════════
# ITERATOR KINDS
# ══════════════════════════════════════════════════════════════

class IterationKind(Enum):
    """The four public iterator entry points."""
    EACH = "each"
    BEGINNING_OF_EACH = "beginning_of_each"
    MAP_EACH = "map_each"
    MAP_BEGINNING_OF_EACH = "map_beginning_of_each"

    @property
    def collects(self) -> bool:
        """True if step results are returned as a list."""
        return self in (
            IterationKind.MAP_EACH, IterationKind.MAP_BEGINNING_OF_EACH
        )

    @property
    def truncates(self) -> bool:
        """True if points are snapped to the beginning of the unit."""
        return self in (
            IterationKind.BEGINNING_OF_EACH,
            IterationKind.MAP_BEGINNING_OF_EACH,
        )

    def apply(self, options: IterationOptions) -> IterationOptions:
        """Force this preset's flags onto caller options."""
        if self.truncates:
            return options.merge(map_result=self.collects, beginning_of=True)
        return options.merge(map_result=self.collects)
