"""
TimeExt Iterations — Fluent Entry Points
===========================================
Mixin giving a time value the fluent iteration API. Every call
opens a fresh IterationChain on the receiver; nothing is stored
on the time value itself.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional

from timeext.chain import IterationChain
from timeext.settings import IterationSettings
from timeext.shorthand import with_shorthands


@with_shorthands
class Iterations:
    """Iterator and limiter methods for TimePoint implementations."""

    def chain(
        self, settings: Optional[IterationSettings] = None
    ) -> IterationChain:
        """Open an empty chain, optionally with explicit settings."""
        return IterationChain(self, settings=settings)

    # ── Iterators ────────────────────────────────────────────

    def each(self, unit, action: Optional[Callable] = None, **options):
        return self.chain().each(unit, action, **options)

    def beginning_of_each(
        self, unit, action: Optional[Callable] = None, **options
    ):
        return self.chain().beginning_of_each(unit, action, **options)

    def map_each(self, unit, action: Optional[Callable] = None, **options):
        return self.chain().map_each(unit, action, **options)

    def map_beginning_of_each(
        self, unit, action: Optional[Callable] = None, **options
    ):
        return self.chain().map_beginning_of_each(unit, action, **options)

    def iter_each(self, unit, **options) -> Iterator[Any]:
        return self.chain().iter_each(unit, **options)

    # ── Limiters ─────────────────────────────────────────────

    def until(self, bound, action: Optional[Callable] = None):
        return self.chain().until(bound, action)

    till = until

    def from_(self, start, action: Optional[Callable] = None):
        return self.chain().from_(start, action)

    def of_the(self, unit, action: Optional[Callable] = None):
        return self.chain().of_the(unit, action)

    of = of_the
