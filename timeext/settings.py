"""
TimeExt Settings — Library Configuration
===========================================
Process-wide defaults for iteration chains.

Chains read the default settings when they are created unless
explicit settings are passed. Override the default in tests or
at application startup only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from timeext.options import DEFAULT_OPTIONS, IterationOptions


# ══════════════════════════════════════════════════════════════
# ITERATION SETTINGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class IterationSettings:
    """
    Defaults applied to every chain.

    default_options: base options before per-call overrides and presets.
    max_steps:       optional guard on loop length (None = unlimited).
    """

    default_options: IterationOptions = DEFAULT_OPTIONS
    max_steps: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.default_options, IterationOptions):
            raise TypeError(
                f"default_options must be IterationOptions, "
                f"got {type(self.default_options).__name__}."
            )
        if self.max_steps is not None:
            if isinstance(self.max_steps, bool) or not isinstance(
                self.max_steps, int
            ):
                raise TypeError("max_steps must be int or None.")
            if self.max_steps <= 0:
                raise ValueError(
                    f"max_steps must be positive, got {self.max_steps}."
                )


# ══════════════════════════════════════════════════════════════
# DEFAULT SETTINGS
# ══════════════════════════════════════════════════════════════

_default_settings: IterationSettings = IterationSettings()


def set_default_settings(settings: IterationSettings) -> None:
    """Override the process-wide default settings."""
    global _default_settings
    if not isinstance(settings, IterationSettings):
        raise TypeError(
            f"Expected IterationSettings, got {type(settings).__name__}."
        )
    _default_settings = settings


def get_default_settings() -> IterationSettings:
    """Get the current default settings."""
    return _default_settings
