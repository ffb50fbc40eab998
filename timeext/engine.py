"""
TimeExt Engine — Step Loop
=============================
Drives the loop over a resolved IterationWindow.

    forward:  while time <= until: visit(time); time = successor(time)
    backward: while time >= until: visit(time); time = predecessor(time)

The loop is synchronous and runs to its bound. The only early
exits are an exception from the action or the max_steps guard.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, Optional

from timeext.errors import IterationLimitExceeded
from timeext.resolver import IterationWindow

logger = logging.getLogger("timeext.engine")

StepAction = Callable[[Any], Any]


def walk(
    window: IterationWindow, max_steps: Optional[int] = None
) -> Iterator[Any]:
    """
    Yield every point visited by the window, in step order.

    Raises:
        IterationLimitExceeded: If more than max_steps points would
            be visited.
    """
    time = window.start
    steps = 0
    while window.admits(time):
        if max_steps is not None and steps >= max_steps:
            raise IterationLimitExceeded(max_steps, window.unit)
        yield time
        steps += 1
        time = window.step(time)
    logger.debug(f"Walk finished: {steps} {window.unit.value} step(s)")


def run(
    window: IterationWindow,
    action: StepAction,
    collect: bool = False,
    max_steps: Optional[int] = None,
) -> Optional[List[Any]]:
    """
    Invoke action for each visited point.

    Returns:
        The list of action results when collect is True, else None.
    """
    if not callable(action):
        raise TypeError(
            f"Step action must be callable, got {type(action).__name__}."
        )

    if collect:
        return [action(time) for time in walk(window, max_steps)]

    for time in walk(window, max_steps):
        action(time)
    return None
