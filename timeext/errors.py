"""
TimeExt — Errors
==================
Error types for unit lookup, option handling and iteration.

Errors raised by caller-supplied step actions are never wrapped;
they propagate unchanged.
"""


class TimeExtError(Exception):
    """Base error for all TimeExt operations."""
    pass


class UnknownUnitError(TimeExtError, ValueError):
    """Unit name does not match any known calendar/clock unit."""

    def __init__(self, unit):
        self.unit = unit
        super().__init__(
            f"Unknown time unit {unit!r}. Expected one of: year, month, "
            f"day, hour, minute, second, microsecond."
        )


class InvalidOptionError(TimeExtError, TypeError):
    """Iteration option name is not recognised."""

    def __init__(self, names):
        self.names = tuple(sorted(names))
        super().__init__(
            f"Unknown iteration option(s): {', '.join(self.names)}."
        )


class InvalidBoundError(TimeExtError, TypeError):
    """Value cannot be converted into a time value."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Cannot use {type(value).__name__} as a time value. "
            f"Expected a Moment, datetime or date."
        )


class IterationLimitExceeded(TimeExtError):
    """Step loop ran past the configured max_steps guard."""

    def __init__(self, max_steps: int, unit):
        self.max_steps = max_steps
        self.unit = unit
        super().__init__(
            f"Iteration by {getattr(unit, 'value', unit)} exceeded "
            f"max_steps={max_steps}."
        )
