"""
TimeExt Chain — Fluent Iteration Builder
===========================================
An IterationChain holds the state of ONE fluent expression:

    origin   — the time value the expression started on
    until    — explicit stop bound (optional)
    of_the   — enclosing scope unit (optional)
    pending  — one iterator call recorded without an action

Iterator calls (each, map_each, ...) with an action execute at once.
Without an action they fill the pending slot and return the chain.
Limiter calls (until, of_the, from_) with an action resolve the
pending call; without one they return a chain for more chaining.

    t.each_day().until(end, visit)      # deferred, then resolved
    t.until(end).each_day(visit)        # state first, then executed
    end.from_(start).map_each_hour(f)   # start -> end

Every expression starts a fresh chain, so bounds and scopes from
one expression never leak into another on the same time value.
Chains are not thread-safe.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Union

from timeext import engine
from timeext.options import IterationKind, IterationOptions
from timeext.resolver import IterationWindow, resolve_window
from timeext.settings import IterationSettings, get_default_settings
from timeext.shorthand import with_shorthands
from timeext.units import Unit

logger = logging.getLogger("timeext.chain")

StepAction = Callable[[Any], Any]
UnitLike = Union[Unit, str]


# ══════════════════════════════════════════════════════════════
# PENDING ITERATION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PendingIteration:
    """An iterator call waiting for its step action."""

    kind: IterationKind
    unit: Unit
    options: IterationOptions


# ══════════════════════════════════════════════════════════════
# ITERATION CHAIN
# ══════════════════════════════════════════════════════════════

@with_shorthands
class IterationChain:
    """
    Short-lived builder for one fluent iteration expression.

    Usually created through the Iterations mixin on Moment rather
    than directly.
    """

    def __init__(
        self,
        origin: Any,
        until: Optional[Any] = None,
        of_the: Optional[UnitLike] = None,
        pending: Optional[PendingIteration] = None,
        settings: Optional[IterationSettings] = None,
    ) -> None:
        self._origin = origin
        self._until = origin.convert(until) if until is not None else None
        self._of_the = Unit.coerce(of_the) if of_the is not None else None
        self._pending = pending
        self._settings = settings or get_default_settings()

    # ══════════════════════════════════════════════════════════
    # STATE
    # ══════════════════════════════════════════════════════════

    @property
    def origin(self) -> Any:
        return self._origin

    @property
    def bound(self) -> Optional[Any]:
        """Explicit stop bound, or None if the default applies."""
        return self._until

    @property
    def scope(self) -> Optional[Unit]:
        return self._of_the

    @property
    def pending(self) -> Optional[PendingIteration]:
        return self._pending

    @property
    def settings(self) -> IterationSettings:
        return self._settings

    # ══════════════════════════════════════════════════════════
    # ITERATORS
    # ══════════════════════════════════════════════════════════

    def each(
        self, unit: UnitLike, action: Optional[StepAction] = None, **options
    ):
        """Call action for each unit step. Returns the origin."""
        return self._iterate(IterationKind.EACH, unit, action, options)

    def beginning_of_each(
        self, unit: UnitLike, action: Optional[StepAction] = None, **options
    ):
        """Like each, with points truncated to the beginning of unit."""
        return self._iterate(
            IterationKind.BEGINNING_OF_EACH, unit, action, options
        )

    def map_each(
        self, unit: UnitLike, action: Optional[StepAction] = None, **options
    ):
        """Call action for each unit step. Returns the list of results."""
        return self._iterate(IterationKind.MAP_EACH, unit, action, options)

    def map_beginning_of_each(
        self, unit: UnitLike, action: Optional[StepAction] = None, **options
    ):
        """Like map_each, with points truncated to the beginning of unit."""
        return self._iterate(
            IterationKind.MAP_BEGINNING_OF_EACH, unit, action, options
        )

    def iter_each(self, unit: UnitLike, **options) -> Iterator[Any]:
        """Lazily yield each point of the resolved window."""
        operation = self._prepare(IterationKind.EACH, unit, options)
        return engine.walk(
            self._window_for(operation), self._settings.max_steps
        )

    # ══════════════════════════════════════════════════════════
    # LIMITERS
    # ══════════════════════════════════════════════════════════

    def until(self, bound: Any, action: Optional[StepAction] = None):
        """
        Set the stop bound. Dates become midnight in the origin's tz.

        With an action, resolves the pending iterator call.
        """
        self._until = self._origin.convert(bound)
        if action is not None:
            return self._resolve(action)
        return self

    till = until

    def of_the(self, unit: UnitLike, action: Optional[StepAction] = None):
        """
        Confine iteration to the one `unit` containing the origin.

        With an action, resolves the pending iterator call.
        """
        self._of_the = Unit.coerce(unit)
        if action is not None:
            return self._resolve(action)
        return self

    of = of_the

    def from_(self, start: Any, action: Optional[StepAction] = None):
        """
        Iterate from `start` up to this chain's origin.

        Returns a new chain on `start` bounded by the origin, with
        the pending call moved over. With an action and a pending
        call, resolves it immediately.
        """
        pending, self._pending = self._pending, None
        chain = IterationChain(
            self._origin.convert(start),
            until=self._origin,
            pending=pending,
            settings=self._settings,
        )
        if action is not None and pending is not None:
            return chain._resolve(action)
        return chain

    # ══════════════════════════════════════════════════════════
    # DISPATCH
    # ══════════════════════════════════════════════════════════

    def _prepare(
        self, kind: IterationKind, unit: UnitLike, overrides: dict
    ) -> PendingIteration:
        options = self._settings.default_options.merge(**overrides)
        return PendingIteration(
            kind=kind, unit=Unit.coerce(unit), options=kind.apply(options)
        )

    def _iterate(
        self,
        kind: IterationKind,
        unit: UnitLike,
        action: Optional[StepAction],
        overrides: dict,
    ):
        operation = self._prepare(kind, unit, overrides)
        if action is None:
            if self._pending is not None:
                logger.debug(
                    f"Replacing pending {self._pending.kind.value} "
                    f"with {kind.value}"
                )
            self._pending = operation
            logger.debug(f"Deferred: {kind.value}({operation.unit.value})")
            return self
        return self._execute(operation, action)

    def _resolve(self, action: StepAction):
        operation, self._pending = self._pending, None
        if operation is None:
            logger.debug("Nothing pending to resolve")
            return None
        logger.debug(f"Resolving: {operation.kind.value}({operation.unit.value})")
        return self._execute(operation, action)

    def _window_for(self, operation: PendingIteration) -> IterationWindow:
        return resolve_window(
            self._origin,
            operation.unit,
            operation.options,
            until=self._until,
            of_the=self._of_the,
        )

    def _execute(self, operation: PendingIteration, action: StepAction):
        window = self._window_for(operation)
        if operation.kind.collects:
            return engine.run(
                window, action, collect=True,
                max_steps=self._settings.max_steps,
            )
        engine.run(window, action, max_steps=self._settings.max_steps)
        return self._origin

    def __repr__(self) -> str:
        pending = self._pending.kind.value if self._pending else None
        return (
            f"IterationChain(origin={self._origin!r}, until={self._until!r}, "
            f"of_the={self._of_the.value if self._of_the else None!r}, "
            f"pending={pending!r})"
        )
